"""Reply use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.service import ThreadCoordinator
from discuss.domain.value import CommentId

from .responses import CommentResponse


class ReplyRequest(BaseModel):
    """Reply request."""

    parent_id: str | None = None  # None for a top-level comment
    content: str
    author: str


class ReplyResponse(BaseModel):
    """Reply response.

    Echoes the optimistic comment; its id is temporary until the store
    confirms it.
    """

    comment: CommentResponse


class ReplyUseCase(BaseUseCase):
    """Use case for posting a comment or a reply."""

    def __init__(self, coordinator: ThreadCoordinator) -> None:
        """Initialize reply use case.

        Args:
            coordinator: Thread coordinator owning the comments
        """
        self.coordinator = coordinator

    async def execute(self, request: ReplyRequest) -> ReplyResponse:
        """Apply the reply optimistically and return without waiting.

        Args:
            request: Reply request

        Returns:
            The optimistic comment

        Raises:
            ValidationError: If content or author is blank
            StoreError: If the initial load fails
        """
        if not self.coordinator.is_loaded:
            await self.coordinator.load()

        parent_id = CommentId(request.parent_id) if request.parent_id else None
        pending = self.coordinator.reply(parent_id, request.content, request.author)

        return ReplyResponse(comment=CommentResponse.from_domain(pending.affected[0]))
