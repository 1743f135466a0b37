"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from carpool.domain.model import Message, Notification, Participation, Trip, User
from carpool.domain.value import (
    MessageId,
    MessageMode,
    NotificationId,
    NotificationType,
    ParticipationId,
    ParticipationStatus,
    TripId,
    TripStatus,
    UserId,
)
from carpool.domain.value.types import Handle


def _uuid(value: Any) -> UUID:
    # asyncpg returns UUID objects, raw SQL fixtures may hand back strings
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        email=row.get("email"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_trip(row: Dict[str, Any]) -> Trip:
    """Convert database row to Trip domain model.

    Args:
        row: Database row as dict

    Returns:
        Trip domain model
    """
    return Trip(
        id=TripId(_uuid(row["id"])),
        creator_id=UserId(_uuid(row["creator_id"])),
        departure_location=row["departure_location"],
        destination=row["destination"],
        departure_time=row["departure_time"],
        available_seats=row["available_seats"],
        description=row.get("description"),
        status=TripStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def trip_to_dict(trip: Trip) -> Dict[str, Any]:
    """Convert Trip domain model to database dict."""
    data = trip.model_dump()
    data["status"] = trip.status.value
    return data


def row_to_participation(row: Dict[str, Any]) -> Participation:
    """Convert database row to Participation domain model."""
    return Participation(
        id=ParticipationId(_uuid(row["id"])),
        trip_id=TripId(_uuid(row["trip_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        status=ParticipationStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def participation_to_dict(participation: Participation) -> Dict[str, Any]:
    """Convert Participation domain model to database dict."""
    data = participation.model_dump()
    data["status"] = participation.status.value
    return data


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model.

    Args:
        row: Database row as dict

    Returns:
        Message domain model (direct or group)
    """
    receiver_id = row.get("receiver_id")
    return Message(
        id=MessageId(_uuid(row["id"])),
        trip_id=TripId(_uuid(row["trip_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        mode=MessageMode(row["mode"]),
        body=row["body"],
        receiver_id=UserId(_uuid(receiver_id)) if receiver_id else None,
        read_at=row.get("read_at"),
        created_at=row["created_at"],
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message domain model to database dict."""
    data = message.model_dump()
    data["mode"] = message.mode.value
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    participation_id = row.get("participation_id")
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        sender_id=UserId(_uuid(row["sender_id"])),
        type=NotificationType(row["type"]),
        trip_id=TripId(_uuid(row["trip_id"])),
        participation_id=(
            ParticipationId(_uuid(participation_id)) if participation_id else None
        ),
        title=row["title"],
        body=row["body"],
        is_read=row["is_read"],
        action_required=row["action_required"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["type"] = notification.type.value
    return data
