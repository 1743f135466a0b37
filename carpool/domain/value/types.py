"""Domain value objects for the carpool service.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import field_validator

from carpool.domain.value.common import RootValueObject, ValueObject
from carpool.domain.value.identifiers import UserId


class TripStatus(str, Enum):
    """Lifecycle status of a trip.

    Trips start active and may move once to completed or cancelled.
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ParticipationStatus(str, Enum):
    """Status of a user's request to join a trip.

    pending -> approved | rejected. Approved and rejected are terminal.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ParticipationStatus.PENDING


class Decision(str, Enum):
    """Decision a trip creator can take on a pending participation."""

    APPROVED = "approved"
    REJECTED = "rejected"

    def to_status(self) -> ParticipationStatus:
        return ParticipationStatus(self.value)


class MessageMode(str, Enum):
    """Delivery mode of a trip message."""

    DIRECT = "direct"  # Peer-addressed, with read receipts
    GROUP = "group"  # Broadcast to the trip room


class NotificationType(str, Enum):
    """Kinds of notification produced by lifecycle events."""

    JOIN_REQUEST = "join_request"
    JOIN_APPROVED = "join_approved"
    JOIN_REJECTED = "join_rejected"
    TRIP_UPDATE = "trip_update"
    TRIP_CANCELLED = "trip_cancelled"


class Handle(RootValueObject[str]):
    """Display handle issued by the identity provider (e.g. a roll number)."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v


class PublicProfile(ValueObject):
    """Fields of a user that may be shown to other trip members.

    Never carries credential material.
    """

    id: UserId
    handle: Handle
    email: str | None = None
