"""Response models shared by the thread use cases."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.model import Comment, CommentNode, ThreadStats


class CommentResponse(BaseModel):
    """Flat comment for API responses."""

    comment_id: str
    parent_id: str | None
    content: str
    author: str
    created_at: datetime
    optimistic: bool

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentResponse":
        return cls(
            comment_id=comment.id,
            parent_id=comment.parent_id,
            content=comment.content,
            author=comment.author,
            created_at=comment.created_at,
            optimistic=comment.optimistic,
        )


class CommentNodeResponse(CommentResponse):
    """Comment tree node for API response.

    Recursive structure mirroring the domain model.
    """

    depth: int
    children: list["CommentNodeResponse"]

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentNodeResponse":
        """Convert domain CommentNode to response model.

        Args:
            node: Domain comment node

        Returns:
            API response model with children recursively converted
        """
        return cls(
            comment_id=node.id,
            parent_id=node.parent_id,
            content=node.content,
            author=node.author,
            created_at=node.created_at,
            optimistic=node.optimistic,
            depth=node.depth,
            children=[cls.from_node(child) for child in node.children],
        )


class ThreadStatsResponse(BaseModel):
    """Thread statistics."""

    total: int
    max_depth: int

    @classmethod
    def from_domain(cls, stats: ThreadStats) -> "ThreadStatsResponse":
        return cls(total=stats.total, max_depth=stats.max_depth)
