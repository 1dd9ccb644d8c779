"""Get thread use case."""

from pydantic import BaseModel

from discuss.domain.service import ThreadCoordinator

from .responses import CommentNodeResponse, ThreadStatsResponse


class GetThreadResponse(BaseModel):
    """Get thread response."""

    roots: list[CommentNodeResponse]
    stats: ThreadStatsResponse
    pending_mutations: int


class GetThreadUseCase:
    """Use case for reading the current comment forest.

    The forest reflects optimistic state: pending replies are included
    (flagged ``optimistic``) and pending deletes are already removed.
    """

    def __init__(self, coordinator: ThreadCoordinator) -> None:
        """Initialize get thread use case.

        Args:
            coordinator: Thread coordinator owning the comments
        """
        self.coordinator = coordinator

    async def execute(self) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Load comments from the store on first use
        2. Build the forest and its statistics
        3. Convert domain tree nodes to response models

        Returns:
            Forest with statistics

        Raises:
            StoreError: If the initial load fails
        """
        if not self.coordinator.is_loaded:
            await self.coordinator.load()

        forest = self.coordinator.tree()
        stats = self.coordinator.stats(forest)

        return GetThreadResponse(
            roots=[CommentNodeResponse.from_node(root) for root in forest],
            stats=ThreadStatsResponse.from_domain(stats),
            pending_mutations=self.coordinator.pending_count,
        )
