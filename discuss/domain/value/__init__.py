"""Domain value objects for the discussion thread."""

from discuss.domain.value.identifiers import CommentId
from discuss.domain.value.types import (
    MutationKind,
    MutationStatus,
    NotificationLevel,
    StoreOperation,
)

__all__ = [
    # Identifiers
    "CommentId",
    # Types
    "MutationKind",
    "MutationStatus",
    "NotificationLevel",
    "StoreOperation",
]
