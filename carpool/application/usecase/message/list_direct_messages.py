"""List direct messages use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import MessageInfo, to_message_info
from carpool.domain.service import MessagingService, UserService
from carpool.domain.value import TripId, UserId


class ListDirectMessagesRequest(BaseModel):
    """List direct messages request."""

    trip_id: str  # UUID string
    user_id: str  # Current user ID
    counterpart_id: str | None = None  # Restrict to one conversation


class ListDirectMessagesResponse(BaseModel):
    """List direct messages response."""

    messages: list[MessageInfo]


class ListDirectMessagesUseCase:
    """Use case for reading the caller's direct messages in a trip."""

    def __init__(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> None:
        self.messaging_service = messaging_service
        self.user_service = user_service

    async def execute(
        self, request: ListDirectMessagesRequest
    ) -> ListDirectMessagesResponse:
        """Execute list direct messages flow.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not a trip member
        """
        messages = await self.messaging_service.list_direct(
            TripId(UUID(request.trip_id)),
            UserId(UUID(request.user_id)),
            UserId(UUID(request.counterpart_id)) if request.counterpart_id else None,
        )
        senders = await self.user_service.get_public_profiles(
            [m.sender_id for m in messages]
        )
        return ListDirectMessagesResponse(
            messages=[to_message_info(m, senders[m.sender_id]) for m in messages]
        )
