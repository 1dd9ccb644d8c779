"""Export thread use case."""

from pydantic import BaseModel

from discuss.domain.service import ThreadCoordinator, flatten_tree

from .responses import CommentResponse


class ExportThreadResponse(BaseModel):
    """Export thread response."""

    comments: list[CommentResponse]  # Pre-order of the sorted forest
    total: int


class ExportThreadUseCase:
    """Use case for serializing the thread as a flat list in display order."""

    def __init__(self, coordinator: ThreadCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self) -> ExportThreadResponse:
        if not self.coordinator.is_loaded:
            await self.coordinator.load()

        comments = flatten_tree(self.coordinator.tree())
        return ExportThreadResponse(
            comments=[CommentResponse.from_domain(c) for c in comments],
            total=len(comments),
        )
