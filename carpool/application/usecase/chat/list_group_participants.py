"""List group participants use case."""

from uuid import UUID

from pydantic import BaseModel

from carpool.domain.service import MessagingService
from carpool.domain.value import TripId, UserId
from carpool.domain.value.types import Handle


class ChatMemberInfo(BaseModel):
    """Group chat member in response."""

    user_id: str
    handle: Handle
    email: str | None
    is_creator: bool


class ListGroupParticipantsRequest(BaseModel):
    """List group participants request."""

    trip_id: str  # UUID string
    user_id: str  # Current user ID


class ListGroupParticipantsResponse(BaseModel):
    """List group participants response."""

    participants: list[ChatMemberInfo]


class ListGroupParticipantsUseCase:
    """Use case for listing who is in a trip's group chat."""

    def __init__(self, messaging_service: MessagingService) -> None:
        self.messaging_service = messaging_service

    async def execute(
        self, request: ListGroupParticipantsRequest
    ) -> ListGroupParticipantsResponse:
        """Execute list group participants flow.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not a trip member
        """
        members = await self.messaging_service.list_group_participants(
            TripId(UUID(request.trip_id)), UserId(UUID(request.user_id))
        )
        return ListGroupParticipantsResponse(
            participants=[
                ChatMemberInfo(
                    user_id=str(member.profile.id),
                    handle=member.profile.handle,
                    email=member.profile.email,
                    is_creator=member.is_creator,
                )
                for member in members
            ]
        )
