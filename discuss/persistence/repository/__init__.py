"""SQL store implementations."""

from discuss.persistence.repository.comment import SqlCommentStore

__all__ = [
    "SqlCommentStore",
]
