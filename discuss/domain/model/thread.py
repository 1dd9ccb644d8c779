"""Thread-level results: statistics, notifications and mutation outcomes."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.comment import Comment, utcnow
from discuss.domain.model.common import DomainModel
from discuss.domain.value import (
    CommentId,
    MutationKind,
    MutationStatus,
    NotificationLevel,
)


class ThreadStats(DomainModel):
    """Derived statistics over the current forest."""

    total: int = Field(ge=0)
    max_depth: int = Field(ge=0)


class Notification(DomainModel):
    """User-visible notification raised when a mutation is rolled back."""

    level: NotificationLevel = NotificationLevel.ERROR
    message: str
    operation: MutationKind
    comment_id: CommentId
    created_at: datetime = Field(default_factory=utcnow)


class MutationOutcome(DomainModel):
    """Terminal result of an optimistic add or delete.

    For adds, ``target_id`` is the temporary id and ``comment`` the record
    returned by the store once confirmed. For deletes, ``target_id`` is the
    deleted comment.
    """

    kind: MutationKind
    status: MutationStatus
    target_id: CommentId
    comment: Optional[Comment] = None
    error: Optional[str] = None

    @property
    def confirmed(self) -> bool:
        """Whether the store confirmed the mutation."""
        return self.status == MutationStatus.CONFIRMED
