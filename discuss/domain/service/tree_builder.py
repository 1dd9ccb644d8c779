"""Tree materialization for flat comment collections.

Pure functions: no I/O, no shared state. A forest is a list of root
``CommentNode`` objects ordered by ``created_at``; every node's children
are ordered the same way. Traversals use explicit stacks, so arbitrarily
deep threads do not hit the interpreter recursion limit.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence

from discuss.domain.model.comment import Comment, CommentNode
from discuss.domain.value import CommentId


def _by_created_at(node: CommentNode):
    return node.created_at


def build_tree(comments: Iterable[Comment]) -> list[CommentNode]:
    """Build a forest from a flat comment collection.

    Algorithm:
    1. Index every comment by id into a node shell (no children, depth 0)
    2. Link each node under its parent, or collect it as a root when it has
       no parent or its parent is not part of the input (orphan fallback)
    3. Walk down from the roots, assigning depth = parent depth + 1 and
       sorting every children list by ``created_at`` (stable, so equal
       timestamps keep input order)

    Cyclic parent chains are not detected; nodes on a cycle are unreachable
    from any root and do not appear in the result.

    Args:
        comments: Flat comments, unique by id

    Returns:
        Root nodes ordered by ``created_at`` with children populated
    """
    nodes: dict[CommentId, CommentNode] = {}
    order: list[CommentNode] = []
    for comment in comments:
        node = CommentNode.from_comment(comment)
        nodes[comment.id] = node
        order.append(node)

    roots: list[CommentNode] = []
    for node in order:
        parent = nodes.get(node.parent_id) if node.parent_id is not None else None
        if parent is None:
            roots.append(node)
        else:
            parent.children.append(node)

    roots.sort(key=_by_created_at)
    stack = list(roots)
    while stack:
        node = stack.pop()
        node.children.sort(key=_by_created_at)
        for child in node.children:
            child.depth = node.depth + 1
            stack.append(child)

    return roots


def iter_nodes(forest: Sequence[CommentNode]) -> Iterable[CommentNode]:
    """Yield every node of the forest in pre-order (roots in forest order)."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def flatten_tree(forest: Sequence[CommentNode]) -> list[Comment]:
    """Flatten a forest back into comment records.

    Follows the forest's current arrangement (pre-order), it does not
    re-sort. Children and depth are stripped.
    """
    return [node.to_comment() for node in iter_nodes(forest)]


def get_max_depth(forest: Sequence[CommentNode]) -> int:
    """Deepest ``depth`` in the forest, 0 when empty."""
    return max((node.depth for node in iter_nodes(forest)), default=0)


def count_nodes(forest: Sequence[CommentNode]) -> int:
    """Total number of nodes reachable from the forest."""
    return sum(1 for _ in iter_nodes(forest))


def collect_subtree_ids(
    comments: Iterable[Comment], root_id: CommentId
) -> set[CommentId]:
    """Collect a comment id and the ids of all its transitive descendants.

    Args:
        comments: Flat comment collection to search
        root_id: Comment whose subtree is collected

    Returns:
        The closure including ``root_id``, or an empty set if ``root_id``
        is not in the collection
    """
    children: dict[CommentId, list[CommentId]] = defaultdict(list)
    present = False
    for comment in comments:
        if comment.id == root_id:
            present = True
        if comment.parent_id is not None:
            children[comment.parent_id].append(comment.id)

    if not present:
        return set()

    closure = {root_id}
    frontier = [root_id]
    while frontier:
        current = frontier.pop()
        for child_id in children.get(current, ()):
            if child_id not in closure:
                closure.add(child_id)
                frontier.append(child_id)
    return closure
