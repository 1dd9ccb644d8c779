"""In-memory store implementations for local runs and testing."""

from .comment import InMemoryCommentStore

__all__ = [
    "InMemoryCommentStore",
]
