"""Delete comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import ThreadCoordinator
from discuss.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    removed_ids: list[str]  # The comment and every reply below it


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment together with its replies."""

    def __init__(self, coordinator: ThreadCoordinator) -> None:
        """Initialize delete comment use case.

        Args:
            coordinator: Thread coordinator owning the comments
        """
        self.coordinator = coordinator

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Remove the subtree optimistically and return without waiting.

        Args:
            request: Delete comment request

        Returns:
            Ids removed from the thread

        Raises:
            NotFoundError: If the comment does not exist
            PendingCommentError: If the comment is still optimistic
            StoreError: If the initial load fails
        """
        if not self.coordinator.is_loaded:
            await self.coordinator.load()

        pending = self.coordinator.delete(CommentId(request.comment_id))

        return DeleteCommentResponse(
            comment_id=pending.target_id,
            removed_ids=[comment.id for comment in pending.affected],
        )
