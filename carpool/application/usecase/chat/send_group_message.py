"""Send group message use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import MessageInfo, to_message_info
from carpool.domain.service import MessagingService, UserService
from carpool.domain.value import MessageMode, TripId, UserId


class SendGroupMessageRequest(BaseModel):
    """Send group message request."""

    trip_id: str  # UUID string
    sender_id: str  # Current user ID
    body: str


class SendGroupMessageResponse(BaseModel):
    """Send group message response."""

    message: MessageInfo


class SendGroupMessageUseCase:
    """Use case for posting to a trip's group chat."""

    def __init__(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> None:
        """Initialize send group message use case.

        Args:
            messaging_service: Messaging domain service
            user_service: User domain service
        """
        self.messaging_service = messaging_service
        self.user_service = user_service

    async def execute(self, request: SendGroupMessageRequest) -> SendGroupMessageResponse:
        """Execute send group message flow.

        Steps:
        1. Store the message (membership and body checked by the service)
        2. Push it to the trip channel; delivery problems are only logged

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the sender is not a trip member
            ValidationError: If the body is empty or too long
        """
        sender_id = UserId(UUID(request.sender_id))
        message = await self.messaging_service.send(
            trip_id=TripId(UUID(request.trip_id)),
            sender_id=sender_id,
            body=request.body,
            mode=MessageMode.GROUP,
        )
        sender = await self.user_service.get_public_profile(sender_id)
        return SendGroupMessageResponse(message=to_message_info(message, sender))
