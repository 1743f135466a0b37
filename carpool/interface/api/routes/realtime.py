"""Realtime WebSocket channel.

Clients join trip channels and receive the trip's group chat events:

    -> {"action": "join-trip", "trip_id": "<uuid>"}
    <- {"event": "joined", "trip_id": "<uuid>"}
    <- {"event": "new-message", "data": {...}}
"""

import asyncio
from typing import Literal
from uuid import UUID

import logfire
from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import InterfaceError as DBInterfaceError
from sqlalchemy.exc import OperationalError

from carpool.adapter.realtime import InProcessRealtimeHub, Subscription
from carpool.application.usecase.auth import AuthenticateRequest, AuthenticateUseCase
from carpool.config import RealtimeSettings
from carpool.domain.error import DependencyFailureError, DomainError, ValidationError
from carpool.domain.service import AccessService
from carpool.domain.service.realtime import trip_channel
from carpool.domain.value import TripId, UserId
from carpool.interface.api.auth import AUTH_COOKIE, extract_token
from carpool.interface.error import error_body

router = APIRouter(tags=["realtime"])


class ChannelAction(BaseModel):
    """Client request to join or leave a trip channel."""

    action: Literal["join-trip", "leave-trip"]
    trip_id: UUID


def error_event(kind: str, message: str) -> dict[str, str]:
    """Error frame sent back to the client."""
    return {"event": "error", **error_body(kind, message)}


async def authorize_subscription(
    container: AsyncContainer, token: str | None, trip_id: UUID
) -> None:
    """Require the caller to be the creator or an approved participant.

    Runs in its own request scope so the session is closed straight away.

    Raises:
        NotAuthenticatedError: If the connection carries no valid token
        NotFoundError: If the trip does not exist
        NotAuthorizedError: If the caller is not a trip member
        DependencyFailureError: If the database cannot be reached
    """
    try:
        async with container() as request_container:
            authenticate_use_case = await request_container.get(AuthenticateUseCase)
            access_service = await request_container.get(AccessService)

            user = await authenticate_use_case.execute(AuthenticateRequest(token=token))
            await access_service.require_member(
                TripId(trip_id), UserId(UUID(user.user_id)), "subscribe to"
            )
    except (OperationalError, DBInterfaceError) as e:
        logfire.error("Database unavailable during subscribe", error=str(e))
        raise DependencyFailureError("Database") from e


async def forward_events(websocket: WebSocket, subscription: Subscription) -> None:
    """Send every queued hub event to the client until cancelled."""
    while True:
        event = await subscription.next_event()
        await websocket.send_json({"event": event.event, "data": event.data})


async def stop_forwarding(sender: asyncio.Task) -> None:
    """Cancel the event sender and wait for it to finish."""
    sender.cancel()
    try:
        await sender
    except asyncio.CancelledError:
        pass
    except Exception as e:
        # The socket may already be closed when the last event was sent
        logfire.debug("Event forwarding stopped", error=str(e))


async def handle_action(
    raw: str,
    container: AsyncContainer,
    hub: InProcessRealtimeHub,
    subscription: Subscription,
    token: str | None,
    authorize: bool,
) -> dict[str, str]:
    """Apply one client frame and build the reply."""
    try:
        request = ChannelAction.model_validate_json(raw)
    except PydanticValidationError:
        return error_event(
            ValidationError.kind,
            "Expected {\"action\": \"join-trip\" | \"leave-trip\", \"trip_id\": <uuid>}",
        )

    channel = trip_channel(request.trip_id)
    trip_id = str(request.trip_id)

    if request.action == "leave-trip":
        hub.unsubscribe(subscription, channel)
        return {"event": "left", "trip_id": trip_id}

    if authorize:
        try:
            await authorize_subscription(container, token, request.trip_id)
        except DomainError as e:
            return error_event(e.kind, str(e))

    hub.subscribe(subscription, channel)
    return {"event": "joined", "trip_id": trip_id}


@router.websocket("/ws")
async def realtime_channel(websocket: WebSocket, token: str | None = None) -> None:
    """Realtime channel for trip group chat events.

    The token may come from the auth cookie, a bearer header or the
    ``token`` query parameter, since browsers cannot set headers on
    WebSocket requests.
    """
    container: AsyncContainer = websocket.app.state.dishka_container
    hub = await container.get(InProcessRealtimeHub)
    realtime_settings = await container.get(RealtimeSettings)

    caller_token = extract_token(
        auth_token=websocket.cookies.get(AUTH_COOKIE),
        authorization=websocket.headers.get("authorization"),
        query_token=token,
    )

    await websocket.accept()
    subscription = hub.connect()
    sender = asyncio.create_task(forward_events(websocket, subscription))

    with logfire.span("realtime.connection", subscription_id=subscription.id):
        try:
            while True:
                raw = await websocket.receive_text()
                reply = await handle_action(
                    raw,
                    container,
                    hub,
                    subscription,
                    caller_token,
                    realtime_settings.authorize_subscriptions,
                )
                await websocket.send_json(reply)
        except WebSocketDisconnect:
            logfire.debug("WebSocket disconnected", subscription_id=subscription.id)
        finally:
            await stop_forwarding(sender)
            hub.disconnect(subscription)
