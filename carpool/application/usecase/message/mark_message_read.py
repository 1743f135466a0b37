"""Mark message read use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.application.usecase.common import MessageInfo, to_message_info
from carpool.domain.service import MessagingService, UserService
from carpool.domain.value import MessageId, UserId


class MarkMessageReadRequest(BaseModel):
    """Mark message read request."""

    message_id: str  # UUID string
    user_id: str  # Current user ID (must be receiver)


class MarkMessageReadResponse(BaseModel):
    """Mark message read response."""

    message: MessageInfo


class MarkMessageReadUseCase:
    """Use case for acknowledging a direct message."""

    def __init__(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> None:
        self.messaging_service = messaging_service
        self.user_service = user_service

    async def execute(self, request: MarkMessageReadRequest) -> MarkMessageReadResponse:
        """Execute mark message read flow.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the caller is not the receiver
        """
        message = await self.messaging_service.mark_read(
            MessageId(UUID(request.message_id)), UserId(UUID(request.user_id))
        )
        sender = await self.user_service.get_public_profile(message.sender_id)
        return MarkMessageReadResponse(message=to_message_info(message, sender))
