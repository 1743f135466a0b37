"""List group messages use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import MessageInfo, to_message_info
from carpool.domain.service import MessagingService, UserService
from carpool.domain.value import TripId, UserId


class ListGroupMessagesRequest(BaseModel):
    """List group messages request."""

    trip_id: str  # UUID string
    user_id: str  # Current user ID


class ListGroupMessagesResponse(BaseModel):
    """List group messages response."""

    messages: list[MessageInfo]


class ListGroupMessagesUseCase:
    """Use case for loading a trip's recent group chat history."""

    def __init__(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> None:
        self.messaging_service = messaging_service
        self.user_service = user_service

    async def execute(
        self, request: ListGroupMessagesRequest
    ) -> ListGroupMessagesResponse:
        """Execute list group messages flow.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not a trip member
        """
        messages = await self.messaging_service.list_group(
            TripId(UUID(request.trip_id)), UserId(UUID(request.user_id))
        )
        senders = await self.user_service.get_public_profiles(
            [m.sender_id for m in messages]
        )
        return ListGroupMessagesResponse(
            messages=[to_message_info(m, senders[m.sender_id]) for m in messages]
        )
