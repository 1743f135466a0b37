"""List notifications use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from carpool.application.usecase.common import NotificationInfo, to_notification_info
from carpool.domain.service import NotificationService
from carpool.domain.value import UserId


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str  # Current user ID
    unread_only: bool = False
    limit: int = Field(default=50, ge=1, le=100)


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationInfo]


class ListNotificationsUseCase:
    """Use case for reading the caller's notification inbox."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: ListNotificationsRequest) -> ListNotificationsResponse:
        """Execute list notifications flow (newest first)."""
        notifications = await self.notification_service.list_for_user(
            UserId(UUID(request.user_id)),
            unread_only=request.unread_only,
            limit=request.limit,
        )
        return ListNotificationsResponse(
            notifications=[to_notification_info(n) for n in notifications]
        )
