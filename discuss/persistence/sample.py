"""Sample discussion used to seed an empty store.

A five-level chain under Alice's comment plus a two-level branch under
Eve's, 7 comments in total.
"""

from datetime import datetime, timedelta, timezone

from discuss.domain.model import Comment
from discuss.domain.value import CommentId

_START = datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)

_SAMPLE = [
    (
        "1",
        None,
        "Alice",
        "This is the root comment of our discussion thread. It demonstrates "
        "how we can build infinitely nested conversations.",
    ),
    (
        "2",
        "1",
        "Bob",
        "Great point! I have a follow-up question about the implementation details...",
    ),
    (
        "3",
        "2",
        "Charlie",
        "Let me answer that. The key is using a recursive component structure.",
    ),
    ("4", "3", "Bob", "Thanks for clarifying! This makes a lot of sense now."),
    ("5", "4", "David", "This is getting deep! We're at level 4 now."),
    (
        "6",
        None,
        "Eve",
        "Another top-level comment here, starting a different conversation.",
    ),
    (
        "7",
        "6",
        "Frank",
        "Nested under Eve's comment, this demonstrates parallel conversation threads.",
    ),
]


def sample_comments() -> list[Comment]:
    """Build the sample thread (fresh objects on every call)."""
    return [
        Comment(
            id=CommentId(comment_id),
            parent_id=CommentId(parent_id) if parent_id else None,
            author=author,
            content=content,
            created_at=_START + timedelta(minutes=5 * position),
        )
        for position, (comment_id, parent_id, author, content) in enumerate(_SAMPLE)
    ]
