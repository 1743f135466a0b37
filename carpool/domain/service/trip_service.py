"""Trip domain service."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel

from carpool.domain.error import (
    InvalidTripTransitionError,
    NotFoundError,
    ValidationError,
)
from carpool.domain.event import (
    LifecycleHooks,
    TransitionResult,
    TripCancelled,
    TripUpdated,
)
from carpool.domain.model import Trip
from carpool.domain.model.common import utcnow
from carpool.domain.model.trip import MAX_DESCRIPTION_LENGTH, MAX_SEATS, MIN_SEATS
from carpool.domain.repository import TripRepository
from carpool.domain.value import TripId, TripStatus, UserId

from .access_service import AccessService
from .base import Service


class TripChanges(BaseModel):
    """Partial update of a trip. Only fields that were set are applied."""

    departure_location: Optional[str] = None
    destination: Optional[str] = None
    departure_time: Optional[datetime] = None
    available_seats: Optional[int] = None
    description: Optional[str] = None
    status: Optional[TripStatus] = None


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from clients are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _clean_place(value: str, field: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(f"{field} is required")
    return cleaned


def _clean_departure_time(value: datetime) -> datetime:
    departure_time = _as_utc(value)
    if departure_time <= utcnow():
        raise ValidationError("Departure time must be in the future")
    return departure_time


def _clean_seats(value: int) -> int:
    if not MIN_SEATS <= value <= MAX_SEATS:
        raise ValidationError(
            f"Available seats must be between {MIN_SEATS} and {MAX_SEATS}"
        )
    return value


def _clean_description(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be less than {MAX_DESCRIPTION_LENGTH} characters"
        )
    return cleaned or None


class TripService(Service):
    """Domain service for the trip lifecycle."""

    def __init__(
        self,
        trip_repository: TripRepository,
        access_service: AccessService,
        hooks: LifecycleHooks,
    ) -> None:
        """Initialize trip service.

        Args:
            trip_repository: Trip repository
            access_service: Trip access checks
            hooks: Post-write lifecycle hooks
        """
        self.trip_repository = trip_repository
        self.access_service = access_service
        self.hooks = hooks

    async def create_trip(
        self,
        creator_id: UserId,
        departure_location: str,
        destination: str,
        departure_time: datetime,
        available_seats: int,
        description: str | None = None,
    ) -> Trip:
        """Create a new active trip owned by ``creator_id``.

        Raises:
            ValidationError: If a field is empty, out of range, or the
                departure time is not in the future
        """
        with logfire.span("trip_service.create_trip", creator_id=str(creator_id)):
            now = utcnow()
            trip = Trip(
                id=TripId(uuid4()),
                creator_id=creator_id,
                departure_location=_clean_place(
                    departure_location, "Departure location"
                ),
                destination=_clean_place(destination, "Destination"),
                departure_time=_clean_departure_time(departure_time),
                available_seats=_clean_seats(available_seats),
                description=_clean_description(description),
                status=TripStatus.ACTIVE,
                created_at=now,
                updated_at=now,
            )
            saved = await self.trip_repository.save(trip)
            logfire.info(
                "Trip created", trip_id=str(saved.id), creator_id=str(creator_id)
            )
            return saved

    async def get_trip(self, trip_id: TripId) -> Trip:
        """Get a trip by ID.

        Raises:
            NotFoundError: If the trip does not exist
        """
        return await self.access_service.get_trip(trip_id)

    async def list_active_trips(self) -> list[Trip]:
        """List active trips, soonest departure first."""
        return await self.trip_repository.find_active()

    async def update_trip(
        self, trip_id: TripId, actor_id: UserId, changes: TripChanges
    ) -> TransitionResult[Trip]:
        """Apply a creator's partial update.

        A change to ``cancelled`` notifies approved participants of the
        cancellation; any other change notifies them of an update.

        Args:
            trip_id: Trip to update
            actor_id: Acting user (must be the creator)
            changes: Fields to change

        Returns:
            Updated trip plus hook warnings

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the actor is not the creator
            ValidationError: If a new value is invalid
            InvalidTripTransitionError: If the status change is not allowed
        """
        with logfire.span(
            "trip_service.update_trip", trip_id=str(trip_id), actor_id=str(actor_id)
        ):
            trip = await self.access_service.require_creator(
                trip_id, actor_id, "update"
            )

            provided = changes.model_fields_set
            update: dict = {}
            if "departure_location" in provided and changes.departure_location is not None:
                update["departure_location"] = _clean_place(
                    changes.departure_location, "Departure location"
                )
            if "destination" in provided and changes.destination is not None:
                update["destination"] = _clean_place(changes.destination, "Destination")
            if "departure_time" in provided and changes.departure_time is not None:
                update["departure_time"] = _clean_departure_time(changes.departure_time)
            if "available_seats" in provided and changes.available_seats is not None:
                update["available_seats"] = _clean_seats(changes.available_seats)
            if "description" in provided:
                update["description"] = _clean_description(changes.description)

            cancelled = False
            if (
                "status" in provided
                and changes.status is not None
                and changes.status != trip.status
            ):
                if trip.status != TripStatus.ACTIVE:
                    raise InvalidTripTransitionError(
                        str(trip_id), trip.status.value, changes.status.value
                    )
                update["status"] = changes.status
                cancelled = changes.status == TripStatus.CANCELLED

            if not update:
                logfire.info("Trip update with no changes", trip_id=str(trip_id))
                return TransitionResult(value=trip)

            update["updated_at"] = utcnow()
            updated = await self.trip_repository.update(trip.model_copy(update=update))
            if updated is None:
                raise NotFoundError("Trip", str(trip_id))

            logfire.info(
                "Trip updated",
                trip_id=str(trip_id),
                fields=sorted(update.keys()),
                cancelled=cancelled,
            )

            event = (
                TripCancelled(trip=updated, actor_id=actor_id)
                if cancelled
                else TripUpdated(trip=updated, actor_id=actor_id)
            )
            warnings = await self.hooks.emit(event)
            return TransitionResult(value=updated, warnings=warnings)

    async def delete_trip(self, trip_id: TripId, actor_id: UserId) -> None:
        """Delete a trip with its participations and messages.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the actor is not the creator
        """
        with logfire.span(
            "trip_service.delete_trip", trip_id=str(trip_id), actor_id=str(actor_id)
        ):
            await self.access_service.require_creator(trip_id, actor_id, "delete")
            deleted = await self.trip_repository.delete_cascade(trip_id)
            if not deleted:
                raise NotFoundError("Trip", str(trip_id))
            logfire.info("Trip deleted", trip_id=str(trip_id))
