"""Notification routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query

from carpool.application.usecase.auth import AuthenticateUseCase
from carpool.application.usecase.notification import (
    GetUnreadNotificationCountRequest,
    GetUnreadNotificationCountResponse,
    GetUnreadNotificationCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadResponse,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
)
from carpool.config import MessagingSettings
from carpool.interface.api.auth import current_user

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    messaging_settings: FromDishka[MessagingSettings],
    unread_only: bool = False,
    limit: int | None = Query(default=None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListNotificationsResponse:
    """List the caller's notifications, newest first."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await list_notifications_use_case.execute(
        ListNotificationsRequest(
            user_id=user.user_id,
            unread_only=unread_only,
            limit=limit or messaging_settings.notification_page_size,
        )
    )


@router.get("/unread-count", response_model=GetUnreadNotificationCountResponse)
async def get_unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadNotificationCountUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetUnreadNotificationCountResponse:
    """Count the caller's unread notifications."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await get_unread_count_use_case.execute(
        GetUnreadNotificationCountRequest(user_id=user.user_id)
    )


@router.put("/read-all", response_model=MarkAllNotificationsReadResponse)
async def mark_all_read(
    mark_all_read_use_case: FromDishka[MarkAllNotificationsReadUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> MarkAllNotificationsReadResponse:
    """Mark every notification of the caller as read."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await mark_all_read_use_case.execute(
        MarkAllNotificationsReadRequest(user_id=user.user_id)
    )


@router.put("/{notification_id}/read", response_model=MarkNotificationReadResponse)
async def mark_read(
    notification_id: UUID,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
    authenticate_use_case: FromDishka[AuthenticateUseCase],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> MarkNotificationReadResponse:
    """Mark one notification as read. Only its recipient may do this."""
    user = await current_user(authenticate_use_case, auth_token, authorization)
    return await mark_read_use_case.execute(
        MarkNotificationReadRequest(
            notification_id=str(notification_id), user_id=user.user_id
        )
    )
