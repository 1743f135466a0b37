"""Domain value objects for the carpool service."""

from carpool.domain.value.identifiers import (
    MessageId,
    NotificationId,
    ParticipationId,
    TripId,
    UserId,
)
from carpool.domain.value.types import (
    Decision,
    Handle,
    MessageMode,
    NotificationType,
    ParticipationStatus,
    PublicProfile,
    TripStatus,
)

__all__ = [
    # Identifiers
    "UserId",
    "TripId",
    "ParticipationId",
    "MessageId",
    "NotificationId",
    # Types
    "Decision",
    "Handle",
    "MessageMode",
    "NotificationType",
    "ParticipationStatus",
    "PublicProfile",
    "TripStatus",
]
