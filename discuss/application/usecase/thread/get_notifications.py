"""Get notifications use case."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.service import ThreadCoordinator


class NotificationItem(BaseModel):
    """Notification item in response."""

    level: str
    message: str
    operation: str
    comment_id: str
    created_at: datetime


class GetNotificationsResponse(BaseModel):
    """Get notifications response."""

    notifications: list[NotificationItem]


class GetNotificationsUseCase:
    """Use case for delivering failure notifications (each one only once)."""

    def __init__(self, coordinator: ThreadCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self) -> GetNotificationsResponse:
        return GetNotificationsResponse(
            notifications=[
                NotificationItem(
                    level=n.level.value,
                    message=n.message,
                    operation=n.operation.value,
                    comment_id=n.comment_id,
                    created_at=n.created_at,
                )
                for n in self.coordinator.drain_notifications()
            ]
        )
