"""Messaging domain service.

One service for both delivery modes of trip messages. Direct messages are
addressed to one trip member and carry a read receipt; group messages go to
the whole trip room and are pushed to realtime subscribers after they are
stored. Every entry point goes through the same trip membership gate.
"""

from typing import Any, Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel

from carpool.config import MessagingSettings
from carpool.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    SelfMessageDeniedError,
    ValidationError,
)
from carpool.domain.model import Message
from carpool.domain.model.common import utcnow
from carpool.domain.repository import MessageRepository, ParticipationRepository
from carpool.domain.value import (
    MessageId,
    MessageMode,
    ParticipationStatus,
    PublicProfile,
    TripId,
    UserId,
)

from .access_service import AccessService
from .base import Service
from .realtime import NEW_MESSAGE_EVENT, RealtimePublisher, trip_channel
from .user_service import UserService


class ChatMember(BaseModel):
    """A member of a trip's group chat."""

    profile: PublicProfile
    is_creator: bool


class MessagingService(Service):
    """Domain service for trip messages."""

    def __init__(
        self,
        message_repository: MessageRepository,
        participation_repository: ParticipationRepository,
        access_service: AccessService,
        user_service: UserService,
        messaging_settings: MessagingSettings,
        realtime: Optional[RealtimePublisher] = None,
    ) -> None:
        """Initialize messaging service.

        Args:
            message_repository: Message repository
            participation_repository: Participation repository
            access_service: Trip access checks
            user_service: User service (for sender profiles)
            messaging_settings: Body limit and history window
            realtime: Realtime transport; group sends are not pushed when None
        """
        self.message_repository = message_repository
        self.participation_repository = participation_repository
        self.access_service = access_service
        self.user_service = user_service
        self.messaging_settings = messaging_settings
        self.realtime = realtime

    def _clean_body(self, body: str) -> str:
        cleaned = body.strip()
        if not cleaned:
            raise ValidationError("Message content is required")
        limit = self.messaging_settings.max_body_length
        if len(cleaned) > limit:
            raise ValidationError(f"Message must be less than {limit} characters")
        return cleaned

    async def send(
        self,
        trip_id: TripId,
        sender_id: UserId,
        body: str,
        mode: MessageMode,
        receiver_id: Optional[UserId] = None,
    ) -> Message:
        """Send a trip message.

        Args:
            trip_id: Trip the message belongs to
            sender_id: Sending user
            body: Message text (trimmed before validation)
            mode: Direct or group delivery
            receiver_id: Addressee, required for direct messages

        Returns:
            The stored message

        Raises:
            ValidationError: If the body is empty or too long, or a direct
                message has no receiver
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If sender or receiver is not a trip member
            SelfMessageDeniedError: If a direct message is sent to oneself
        """
        with logfire.span(
            "messaging_service.send",
            trip_id=str(trip_id),
            sender_id=str(sender_id),
            mode=mode.value,
        ):
            trip = await self.access_service.require_member(
                trip_id, sender_id, "send messages in"
            )

            if mode == MessageMode.DIRECT:
                if receiver_id is None:
                    raise ValidationError("Receiver is required for direct messages")
                if receiver_id == sender_id:
                    raise SelfMessageDeniedError()
                if not await self.access_service.is_trip_authorized(trip, receiver_id):
                    logfire.warn(
                        "Direct message receiver is not a trip member",
                        trip_id=str(trip_id),
                        receiver_id=str(receiver_id),
                    )
                    raise NotAuthorizedError(
                        "receive messages in", "trip", str(trip_id), str(receiver_id)
                    )
            else:
                receiver_id = None

            cleaned = self._clean_body(body)

            message = Message(
                id=MessageId(uuid4()),
                trip_id=trip_id,
                sender_id=sender_id,
                mode=mode,
                body=cleaned,
                receiver_id=receiver_id,
                created_at=utcnow(),
            )
            saved = await self.message_repository.save(message)
            logfire.info(
                "Message sent",
                message_id=str(saved.id),
                trip_id=str(trip_id),
                mode=mode.value,
            )

            if mode == MessageMode.GROUP:
                sender = await self.user_service.get_public_profile(sender_id)
                await self._publish(saved, sender)
            return saved

    async def _publish(self, message: Message, sender: PublicProfile) -> None:
        """Push a stored group message to the trip channel.

        Delivery failures are logged and never reach the sender.
        """
        if self.realtime is None:
            logfire.warn(
                "Realtime transport not configured, skipping publish",
                message_id=str(message.id),
            )
            return

        channel = trip_channel(message.trip_id)
        try:
            delivered = await self.realtime.publish(
                channel, NEW_MESSAGE_EVENT, message_event_payload(message, sender)
            )
            logfire.debug(
                "Group message published", channel=channel, subscribers=delivered
            )
        except Exception as e:
            logfire.error(
                "Failed to publish group message",
                message_id=str(message.id),
                channel=channel,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def mark_read(self, message_id: MessageId, reader_id: UserId) -> Message:
        """Mark a direct message as read by its receiver.

        The first read timestamp is kept on repeated calls.

        Raises:
            NotFoundError: If the message does not exist
            NotAuthorizedError: If the reader is not the receiver
        """
        with logfire.span(
            "messaging_service.mark_read",
            message_id=str(message_id),
            reader_id=str(reader_id),
        ):
            message = await self.message_repository.find_by_id(message_id)
            if not message:
                raise NotFoundError("Message", str(message_id))
            if message.mode != MessageMode.DIRECT or message.receiver_id != reader_id:
                logfire.warn(
                    "Mark read denied",
                    message_id=str(message_id),
                    reader_id=str(reader_id),
                )
                raise NotAuthorizedError(
                    "mark read", "message", str(message_id), str(reader_id)
                )
            if message.is_read:
                return message

            updated = await self.message_repository.mark_read(message_id, utcnow())
            if updated is None:
                # Another request marked it first
                current = await self.message_repository.find_by_id(message_id)
                if current is None:
                    raise NotFoundError("Message", str(message_id))
                return current
            return updated

    async def list_direct(
        self,
        trip_id: TripId,
        caller_id: UserId,
        counterpart_id: Optional[UserId] = None,
    ) -> list[Message]:
        """List the caller's direct messages in a trip, oldest first.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not a trip member
        """
        await self.access_service.require_member(trip_id, caller_id, "read messages in")
        return await self.message_repository.find_direct_for_user(
            trip_id, caller_id, counterpart_id
        )

    async def unread_count(self, user_id: UserId) -> int:
        """Count unread direct messages addressed to a user."""
        return await self.message_repository.count_unread_direct(user_id)

    async def list_group(self, trip_id: TripId, caller_id: UserId) -> list[Message]:
        """Return the recent group chat window of a trip, oldest first.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not a trip member
        """
        await self.access_service.require_member(trip_id, caller_id, "read chat of")
        return await self.message_repository.find_recent_group(
            trip_id, self.messaging_settings.group_history_limit
        )

    async def list_group_participants(
        self, trip_id: TripId, caller_id: UserId
    ) -> list[ChatMember]:
        """List chat members: the creator first, then approved participants.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not a trip member
        """
        trip = await self.access_service.require_member(
            trip_id, caller_id, "list chat members of"
        )
        approved = await self.participation_repository.find_by_trip(
            trip_id, status=ParticipationStatus.APPROVED
        )
        member_ids = list(
            dict.fromkeys([trip.creator_id, *(p.user_id for p in approved)])
        )
        profiles = await self.user_service.get_public_profiles(member_ids)
        return [
            ChatMember(
                profile=profiles[member_id],
                is_creator=member_id == trip.creator_id,
            )
            for member_id in member_ids
        ]


def message_event_payload(message: Message, sender: PublicProfile) -> dict[str, Any]:
    """JSON payload of a ``new-message`` realtime event."""
    return {
        "id": str(message.id),
        "trip_id": str(message.trip_id),
        "sender": {
            "id": str(sender.id),
            "handle": str(sender.handle),
            "email": sender.email,
        },
        "body": message.body,
        "created_at": message.created_at.isoformat(),
    }
