"""Send direct message use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import MessageInfo, to_message_info
from carpool.domain.service import MessagingService, UserService
from carpool.domain.value import MessageMode, TripId, UserId


class SendDirectMessageRequest(BaseModel):
    """Send direct message request."""

    trip_id: str  # UUID string
    sender_id: str  # Current user ID
    receiver_id: str  # UUID string
    body: str


class SendDirectMessageResponse(BaseModel):
    """Send direct message response."""

    message: MessageInfo


class SendDirectMessageUseCase:
    """Use case for messaging one member of a trip."""

    def __init__(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> None:
        """Initialize send direct message use case.

        Args:
            messaging_service: Messaging domain service
            user_service: User domain service
        """
        self.messaging_service = messaging_service
        self.user_service = user_service

    async def execute(
        self, request: SendDirectMessageRequest
    ) -> SendDirectMessageResponse:
        """Execute send direct message flow.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If sender or receiver is not a trip member
            SelfMessageDeniedError: If sender and receiver are the same user
            ValidationError: If the body is empty or too long
        """
        sender_id = UserId(UUID(request.sender_id))
        message = await self.messaging_service.send(
            trip_id=TripId(UUID(request.trip_id)),
            sender_id=sender_id,
            body=request.body,
            mode=MessageMode.DIRECT,
            receiver_id=UserId(UUID(request.receiver_id)),
        )
        sender = await self.user_service.get_public_profile(sender_id)
        return SendDirectMessageResponse(message=to_message_info(message, sender))
