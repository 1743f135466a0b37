"""Group chat routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from carpool.application.usecase.auth import AuthenticateUseCase
from carpool.application.usecase.chat import (
    ListGroupMessagesRequest,
    ListGroupMessagesResponse,
    ListGroupMessagesUseCase,
    ListGroupParticipantsRequest,
    ListGroupParticipantsResponse,
    ListGroupParticipantsUseCase,
    SendGroupMessageRequest,
    SendGroupMessageResponse,
    SendGroupMessageUseCase,
)
from carpool.interface.api.auth import current_user

router = APIRouter(prefix="/chat", tags=["chat"], route_class=DishkaRoute)


class SendGroupMessageAPIRequest(BaseModel):
    """API request for posting to a trip's group chat."""

    body: str = Field(max_length=5000)  # Trimmed length is checked by the service


@router.post(
    "/trips/{trip_id}/messages",
    response_model=SendGroupMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_group_message(
    trip_id: UUID,
    request: SendGroupMessageAPIRequest,
    send_group_message_use_case: FromDishka[SendGroupMessageUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SendGroupMessageResponse:
    """Post a message to the trip room.

    Subscribers of the trip channel receive it as a ``new-message`` event.
    """
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await send_group_message_use_case.execute(
        SendGroupMessageRequest(
            trip_id=str(trip_id), sender_id=user.user_id, body=request.body
        )
    )


@router.get("/trips/{trip_id}/messages", response_model=ListGroupMessagesResponse)
async def list_group_messages(
    trip_id: UUID,
    list_group_messages_use_case: FromDishka[ListGroupMessagesUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListGroupMessagesResponse:
    """Get the recent group chat history of a trip, oldest first."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await list_group_messages_use_case.execute(
        ListGroupMessagesRequest(trip_id=str(trip_id), user_id=user.user_id)
    )


@router.get(
    "/trips/{trip_id}/participants", response_model=ListGroupParticipantsResponse
)
async def list_group_participants(
    trip_id: UUID,
    list_group_participants_use_case: FromDishka[ListGroupParticipantsUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListGroupParticipantsResponse:
    """List the members of a trip's group chat, creator first."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await list_group_participants_use_case.execute(
        ListGroupParticipantsRequest(trip_id=str(trip_id), user_id=user.user_id)
    )
