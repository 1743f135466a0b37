"""Response building blocks shared by several use cases."""

from datetime import datetime

from pydantic import BaseModel

from carpool.domain.model import Message, Notification, Participation, Trip
from carpool.domain.value import (
    MessageMode,
    NotificationType,
    ParticipationStatus,
    PublicProfile,
    TripStatus,
)
from carpool.domain.value.types import Handle


class ProfileInfo(BaseModel):
    """Public profile of a user."""

    user_id: str
    handle: Handle
    email: str | None


class TripInfo(BaseModel):
    """Trip details in responses."""

    trip_id: str
    creator: ProfileInfo
    departure_location: str
    destination: str
    departure_time: datetime
    available_seats: int
    description: str | None
    status: TripStatus
    created_at: datetime
    updated_at: datetime


class ParticipationInfo(BaseModel):
    """Participation with the participant's profile."""

    participation_id: str
    trip_id: str
    user: ProfileInfo
    status: ParticipationStatus
    created_at: datetime
    updated_at: datetime


class MessageInfo(BaseModel):
    """Trip message in responses."""

    message_id: str
    trip_id: str
    mode: MessageMode
    sender: ProfileInfo
    receiver_id: str | None
    body: str
    read_at: datetime | None
    created_at: datetime


class NotificationInfo(BaseModel):
    """Notification in responses."""

    notification_id: str
    sender_id: str
    type: NotificationType
    trip_id: str
    participation_id: str | None
    title: str
    body: str
    is_read: bool
    action_required: bool
    created_at: datetime


def to_profile_info(profile: PublicProfile) -> ProfileInfo:
    return ProfileInfo(
        user_id=str(profile.id), handle=profile.handle, email=profile.email
    )


def to_trip_info(trip: Trip, creator: PublicProfile) -> TripInfo:
    return TripInfo(
        trip_id=str(trip.id),
        creator=to_profile_info(creator),
        departure_location=trip.departure_location,
        destination=trip.destination,
        departure_time=trip.departure_time,
        available_seats=trip.available_seats,
        description=trip.description,
        status=trip.status,
        created_at=trip.created_at,
        updated_at=trip.updated_at,
    )


def to_participation_info(
    participation: Participation, user: PublicProfile
) -> ParticipationInfo:
    return ParticipationInfo(
        participation_id=str(participation.id),
        trip_id=str(participation.trip_id),
        user=to_profile_info(user),
        status=participation.status,
        created_at=participation.created_at,
        updated_at=participation.updated_at,
    )


def to_message_info(message: Message, sender: PublicProfile) -> MessageInfo:
    return MessageInfo(
        message_id=str(message.id),
        trip_id=str(message.trip_id),
        mode=message.mode,
        sender=to_profile_info(sender),
        receiver_id=str(message.receiver_id) if message.receiver_id else None,
        body=message.body,
        read_at=message.read_at,
        created_at=message.created_at,
    )


def to_notification_info(notification: Notification) -> NotificationInfo:
    return NotificationInfo(
        notification_id=str(notification.id),
        sender_id=str(notification.sender_id),
        type=notification.type,
        trip_id=str(notification.trip_id),
        participation_id=(
            str(notification.participation_id)
            if notification.participation_id
            else None
        ),
        title=notification.title,
        body=notification.body,
        is_read=notification.is_read,
        action_required=notification.action_required,
        created_at=notification.created_at,
    )
