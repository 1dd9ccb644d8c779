"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import logfire
import pytest

from discuss.domain.model import Comment
from discuss.domain.value import CommentId

# Keep test runs local: no console output, nothing sent to Logfire
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)


def make_comment(
    comment_id: str,
    parent_id: str | None = None,
    minutes: int = 0,
    author: str = "Tester",
    content: str | None = None,
) -> Comment:
    """Helper function to build confirmed comments for tests.

    Args:
        comment_id: Comment id
        parent_id: Parent comment id (None for a root)
        minutes: Offset from BASE_TIME used as ``created_at``
        author: Author name
        content: Comment text (derived from the id if omitted)

    Returns:
        Confirmed (non-optimistic) Comment
    """
    return Comment(
        id=CommentId(comment_id),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        content=content or f"Comment {comment_id}",
        author=author,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


@pytest.fixture
def sample_thread() -> list[Comment]:
    """Two root threads: 1 > 2 > 3 > 4 > 5 and 6 > 7."""
    return [
        make_comment("1", None, 0, "Alice"),
        make_comment("2", "1", 5, "Bob"),
        make_comment("3", "2", 10, "Carol"),
        make_comment("4", "3", 15, "Dave"),
        make_comment("5", "4", 20, "Alice"),
        make_comment("6", None, 25, "Eve"),
        make_comment("7", "6", 30, "Frank"),
    ]
