"""Mark notifications read use cases."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import NotificationInfo, to_notification_info
from carpool.domain.service import NotificationService
from carpool.domain.value import NotificationId, UserId


class MarkNotificationReadRequest(BaseModel):
    """Mark notification read request."""

    notification_id: str  # UUID string
    user_id: str  # Current user ID (must be recipient)


class MarkNotificationReadResponse(BaseModel):
    """Mark notification read response."""

    notification: NotificationInfo


class MarkNotificationReadUseCase:
    """Use case for marking one notification as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkNotificationReadRequest
    ) -> MarkNotificationReadResponse:
        """Execute mark notification read flow.

        Raises:
            NotFoundError: If the notification does not exist
            NotAuthorizedError: If the caller is not the recipient
        """
        notification = await self.notification_service.mark_read(
            NotificationId(UUID(request.notification_id)),
            UserId(UUID(request.user_id)),
        )
        return MarkNotificationReadResponse(
            notification=to_notification_info(notification)
        )


class MarkAllNotificationsReadRequest(BaseModel):
    """Mark all notifications read request."""

    user_id: str  # Current user ID


class MarkAllNotificationsReadResponse(BaseModel):
    """Mark all notifications read response."""

    updated: int


class MarkAllNotificationsReadUseCase:
    """Use case for clearing the caller's unread notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkAllNotificationsReadRequest
    ) -> MarkAllNotificationsReadResponse:
        updated = await self.notification_service.mark_all_read(
            UserId(UUID(request.user_id))
        )
        return MarkAllNotificationsReadResponse(updated=updated)
