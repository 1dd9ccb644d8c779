"""Domain enums for the discussion thread."""

from enum import Enum


class MutationKind(str, Enum):
    """Kind of thread mutation."""

    ADD = "add"
    DELETE = "delete"


class MutationStatus(str, Enum):
    """Terminal state of an optimistic mutation."""

    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class NotificationLevel(str, Enum):
    """Severity of a user-visible notification."""

    ERROR = "error"


class StoreOperation(str, Enum):
    """Record store operations that can be delayed or fail."""

    LIST = "list"
    ADD = "add"
    DELETE = "delete"
