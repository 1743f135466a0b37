"""Get unread message count use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.domain.service import MessagingService
from carpool.domain.value import UserId


class GetUnreadMessageCountRequest(BaseModel):
    """Get unread message count request."""

    user_id: str  # Current user ID


class GetUnreadMessageCountResponse(BaseModel):
    """Get unread message count response."""

    count: int


class GetUnreadMessageCountUseCase:
    """Use case for counting unread direct messages across all trips."""

    def __init__(self, messaging_service: MessagingService) -> None:
        self.messaging_service = messaging_service

    async def execute(
        self, request: GetUnreadMessageCountRequest
    ) -> GetUnreadMessageCountResponse:
        count = await self.messaging_service.unread_count(UserId(UUID(request.user_id)))
        return GetUnreadMessageCountResponse(count=count)
