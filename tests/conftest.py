"""Test configuration and shared builders."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from carpool.config import Settings
from carpool.domain.model import Participation, Trip, User
from carpool.domain.value import (
    ParticipationId,
    ParticipationStatus,
    TripId,
    TripStatus,
    UserId,
)
from carpool.domain.value.types import Handle
from carpool.util.jwt import create_token


def in_future(hours: int = 24) -> datetime:
    """A UTC timestamp ``hours`` from now."""
    return datetime.now(timezone.utc) + timedelta(hours=hours)


def make_user(handle: str = "alice", email: str | None = None) -> User:
    """Build a user with a fresh ID."""
    return User(id=UserId(uuid4()), handle=Handle(handle), email=email)


def make_trip(
    creator_id: UserId,
    departure_location: str = "North Campus",
    destination: str = "Central Station",
    available_seats: int = 3,
    status: TripStatus = TripStatus.ACTIVE,
    departure_time: datetime | None = None,
) -> Trip:
    """Build an active trip departing tomorrow."""
    return Trip(
        id=TripId(uuid4()),
        creator_id=creator_id,
        departure_location=departure_location,
        destination=destination,
        departure_time=departure_time or in_future(),
        available_seats=available_seats,
        status=status,
    )


def make_participation(
    trip_id: TripId,
    user_id: UserId,
    status: ParticipationStatus = ParticipationStatus.PENDING,
) -> Participation:
    """Build a participation of a user in a trip."""
    return Participation(
        id=ParticipationId(uuid4()), trip_id=trip_id, user_id=user_id, status=status
    )


def make_token(user_id: UserId | str, handle: str, email: str | None = None) -> str:
    """Sign a token the way the identity provider would."""
    return create_token(str(user_id), handle, email, Settings().auth)


def auth_headers(user_id: UserId | str, handle: str) -> dict[str, str]:
    """Authorization header for a user."""
    return {"Authorization": f"Bearer {make_token(user_id, handle)}"}
