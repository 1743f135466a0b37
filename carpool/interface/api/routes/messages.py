"""Direct message routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from carpool.application.usecase.auth import AuthenticateUseCase
from carpool.application.usecase.message import (
    GetUnreadMessageCountRequest,
    GetUnreadMessageCountResponse,
    GetUnreadMessageCountUseCase,
    ListDirectMessagesRequest,
    ListDirectMessagesResponse,
    ListDirectMessagesUseCase,
    MarkMessageReadRequest,
    MarkMessageReadResponse,
    MarkMessageReadUseCase,
    SendDirectMessageRequest,
    SendDirectMessageResponse,
    SendDirectMessageUseCase,
)
from carpool.interface.api.auth import current_user

router = APIRouter(prefix="/messages", tags=["messages"], route_class=DishkaRoute)


class SendDirectMessageAPIRequest(BaseModel):
    """API request for sending a direct message."""

    trip_id: UUID
    receiver_id: UUID
    body: str = Field(max_length=5000)  # Trimmed length is checked by the service


@router.post(
    "/direct",
    response_model=SendDirectMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_direct_message(
    request: SendDirectMessageAPIRequest,
    send_direct_message_use_case: FromDishka[SendDirectMessageUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> SendDirectMessageResponse:
    """Send a direct message to another member of a trip."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await send_direct_message_use_case.execute(
        SendDirectMessageRequest(
            trip_id=str(request.trip_id),
            sender_id=user.user_id,
            receiver_id=str(request.receiver_id),
            body=request.body,
        )
    )


@router.get("/unread-count", response_model=GetUnreadMessageCountResponse)
async def get_unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadMessageCountUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetUnreadMessageCountResponse:
    """Count unread direct messages addressed to the caller."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await get_unread_count_use_case.execute(
        GetUnreadMessageCountRequest(user_id=user.user_id)
    )


@router.put("/{message_id}/read", response_model=MarkMessageReadResponse)
async def mark_message_read(
    message_id: UUID,
    mark_message_read_use_case: FromDishka[MarkMessageReadUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> MarkMessageReadResponse:
    """Mark a direct message as read. Only its receiver may do this."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await mark_message_read_use_case.execute(
        MarkMessageReadRequest(message_id=str(message_id), user_id=user.user_id)
    )


@router.get("/direct/trips/{trip_id}", response_model=ListDirectMessagesResponse)
async def list_direct_messages(
    trip_id: UUID,
    list_direct_messages_use_case: FromDishka[ListDirectMessagesUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    counterpart_id: UUID | None = None,
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListDirectMessagesResponse:
    """List the caller's direct messages in a trip.

    With ``counterpart_id`` only the conversation with that user is returned.
    """
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await list_direct_messages_use_case.execute(
        ListDirectMessagesRequest(
            trip_id=str(trip_id),
            user_id=user.user_id,
            counterpart_id=str(counterpart_id) if counterpart_id else None,
        )
    )
