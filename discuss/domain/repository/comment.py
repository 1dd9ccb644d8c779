"""Comment store interface."""

from abc import ABC, abstractmethod
from typing import List

from discuss.domain.model.comment import Comment, CommentDraft
from discuss.domain.value import CommentId


class CommentStore(ABC):
    """Record store holding the authoritative flat comment collection.

    Implementations live in the persistence layer. Every operation may be
    slow and may fail; failures are reported by raising ``StoreError``.
    """

    @abstractmethod
    async def list(self) -> List[Comment]:
        """Return the full flat collection in insertion order.

        Returns:
            Every stored comment (none of them optimistic)

        Raises:
            StoreError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def add(self, draft: CommentDraft) -> Comment:
        """Persist a new comment.

        The store assigns a durable id and the creation timestamp.

        Args:
            draft: Caller-supplied comment fields

        Returns:
            The confirmed comment

        Raises:
            StoreError: If the comment could not be persisted
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment and every comment below it.

        Deleting an unknown id is not an error.

        Args:
            comment_id: The comment to delete

        Raises:
            StoreError: If the deletion could not be applied
        """
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every stored comment."""
        pass
