"""Get unread notification count use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.domain.service import NotificationService
from carpool.domain.value import UserId


class GetUnreadNotificationCountRequest(BaseModel):
    """Get unread notification count request."""

    user_id: str  # Current user ID


class GetUnreadNotificationCountResponse(BaseModel):
    """Get unread notification count response."""

    count: int


class GetUnreadNotificationCountUseCase:
    """Use case for the notification badge count."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: GetUnreadNotificationCountRequest
    ) -> GetUnreadNotificationCountResponse:
        count = await self.notification_service.unread_count(
            UserId(UUID(request.user_id))
        )
        return GetUnreadNotificationCountResponse(count=count)
