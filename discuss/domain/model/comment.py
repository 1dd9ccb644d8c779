"""Comment entity and its derived tree node.

Comments are stored flat, related only through ``parent_id``. The tree
view (``CommentNode``) is rebuilt from the flat collection on every read
and never mutated after construction.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId
from discuss.domain.value.common import ValueObject


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Comment(DomainModel):
    """Comment record.

    A comment is either confirmed (persisted by the record store, durable id)
    or optimistic (created locally, temporary id, awaiting confirmation).
    ``created_at`` is only used for ordering siblings.
    """

    id: CommentId
    parent_id: Optional[CommentId] = None
    content: str
    author: str
    created_at: datetime = Field(default_factory=utcnow)
    optimistic: bool = False

    @field_validator("created_at")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Interpret naive timestamps as UTC so all timestamps compare."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class CommentDraft(ValueObject):
    """Caller-supplied fields of a new comment.

    The store assigns the id and creation timestamp.
    """

    parent_id: Optional[CommentId] = None
    content: str
    author: str


@dataclass
class CommentNode:
    """Node in the comment tree.

    Carries every Comment field plus its depth (0 for roots) and its
    children ordered by ``created_at``.
    """

    id: CommentId
    parent_id: CommentId | None
    content: str
    author: str
    created_at: datetime
    optimistic: bool = False
    depth: int = 0
    children: list["CommentNode"] = field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentNode":
        """Create a detached node shell for a comment."""
        return cls(
            id=comment.id,
            parent_id=comment.parent_id,
            content=comment.content,
            author=comment.author,
            created_at=comment.created_at,
            optimistic=comment.optimistic,
        )

    def to_comment(self) -> Comment:
        """Strip tree information and return the flat record."""
        return Comment(
            id=self.id,
            parent_id=self.parent_id,
            content=self.content,
            author=self.author,
            created_at=self.created_at,
            optimistic=self.optimistic,
        )
