"""Participation domain service.

Owns the per-(trip, user) join state machine:

    pending -> approved
    pending -> rejected

Both outcomes are terminal. Only the trip creator decides.
"""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from carpool.domain.error import (
    DuplicateParticipationError,
    MismatchedTripError,
    NotFoundError,
    ParticipationAlreadyDecidedError,
    SelfJoinDeniedError,
)
from carpool.domain.event import (
    JoinDecided,
    JoinRequested,
    LifecycleHooks,
    TransitionResult,
)
from carpool.domain.model import Participation
from carpool.domain.model.common import utcnow
from carpool.domain.repository import ParticipationRepository
from carpool.domain.value import (
    Decision,
    ParticipationId,
    ParticipationStatus,
    TripId,
    UserId,
)

from .access_service import AccessService
from .base import Service


class ParticipationService(Service):
    """Domain service for join requests and creator decisions."""

    def __init__(
        self,
        participation_repository: ParticipationRepository,
        access_service: AccessService,
        hooks: LifecycleHooks,
    ) -> None:
        """Initialize participation service.

        Args:
            participation_repository: Participation repository
            access_service: Trip access checks
            hooks: Post-write lifecycle hooks
        """
        self.participation_repository = participation_repository
        self.access_service = access_service
        self.hooks = hooks

    async def request_join(
        self, trip_id: TripId, requester_id: UserId
    ) -> TransitionResult[Participation]:
        """Ask to join a trip.

        The (trip, user) uniqueness is enforced by the repository insert,
        not by a prior lookup, so concurrent requests cannot both succeed.

        Args:
            trip_id: Trip to join
            requester_id: Requesting user

        Returns:
            The pending participation plus hook warnings

        Raises:
            NotFoundError: If the trip does not exist
            SelfJoinDeniedError: If the requester created the trip
            DuplicateParticipationError: If the user already has a participation
        """
        with logfire.span(
            "participation_service.request_join",
            trip_id=str(trip_id),
            requester_id=str(requester_id),
        ):
            trip = await self.access_service.get_trip(trip_id)
            if trip.is_creator(requester_id):
                logfire.warn(
                    "Creator tried to join own trip",
                    trip_id=str(trip_id),
                    user_id=str(requester_id),
                )
                raise SelfJoinDeniedError(str(trip_id))

            now = utcnow()
            participation = Participation(
                id=ParticipationId(uuid4()),
                trip_id=trip_id,
                user_id=requester_id,
                status=ParticipationStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            try:
                saved = await self.participation_repository.save(participation)
            except IntegrityError:
                logfire.warn(
                    "Duplicate join request",
                    trip_id=str(trip_id),
                    user_id=str(requester_id),
                )
                raise DuplicateParticipationError(str(trip_id), str(requester_id))

            logfire.info(
                "Join requested",
                trip_id=str(trip_id),
                participation_id=str(saved.id),
                user_id=str(requester_id),
            )
            warnings = await self.hooks.emit(
                JoinRequested(trip=trip, actor_id=requester_id, participation=saved)
            )
            return TransitionResult(value=saved, warnings=warnings)

    async def decide(
        self,
        trip_id: TripId,
        participation_id: ParticipationId,
        decision: Decision,
        decider_id: UserId,
    ) -> TransitionResult[Participation]:
        """Approve or reject a pending participation.

        Repeating the decision that was already taken returns the stored row
        and does not notify again.

        Args:
            trip_id: Trip named in the request
            participation_id: Participation to decide
            decision: Approve or reject
            decider_id: Acting user (must be the trip creator)

        Returns:
            The decided participation plus hook warnings

        Raises:
            NotFoundError: If the trip or participation does not exist
            NotAuthorizedError: If the decider is not the trip creator
            MismatchedTripError: If the participation belongs to another trip
            ParticipationAlreadyDecidedError: If a different decision was taken
        """
        with logfire.span(
            "participation_service.decide",
            trip_id=str(trip_id),
            participation_id=str(participation_id),
            decision=decision.value,
        ):
            trip = await self.access_service.require_creator(
                trip_id, decider_id, "decide on participants of"
            )

            participation = await self.participation_repository.find_by_id(
                participation_id
            )
            if not participation:
                logfire.warn(
                    "Participation not found",
                    participation_id=str(participation_id),
                )
                raise NotFoundError("Participation", str(participation_id))
            if participation.trip_id != trip_id:
                logfire.warn(
                    "Participation addressed through wrong trip",
                    participation_id=str(participation_id),
                    trip_id=str(trip_id),
                    actual_trip_id=str(participation.trip_id),
                )
                raise MismatchedTripError(str(participation_id), str(trip_id))

            target = decision.to_status()
            if participation.status.is_terminal:
                return self._already_decided(participation, target)

            updated = await self.participation_repository.update_status(
                participation_id, ParticipationStatus.PENDING, target
            )
            if updated is None:
                # Lost a race with a concurrent decision
                current = await self.participation_repository.find_by_id(
                    participation_id
                )
                if current is None:
                    raise NotFoundError("Participation", str(participation_id))
                return self._already_decided(current, target)

            logfire.info(
                "Participation decided",
                trip_id=str(trip_id),
                participation_id=str(participation_id),
                status=target.value,
            )
            warnings = await self.hooks.emit(
                JoinDecided(
                    trip=trip,
                    actor_id=decider_id,
                    participation=updated,
                    decision=decision,
                )
            )
            return TransitionResult(value=updated, warnings=warnings)

    def _already_decided(
        self, participation: Participation, target: ParticipationStatus
    ) -> TransitionResult[Participation]:
        if participation.status == target:
            logfire.info(
                "Decision already applied",
                participation_id=str(participation.id),
                status=target.value,
            )
            return TransitionResult(value=participation)

        logfire.warn(
            "Participation already decided",
            participation_id=str(participation.id),
            status=participation.status.value,
            requested=target.value,
        )
        raise ParticipationAlreadyDecidedError(
            str(participation.id), participation.status.value
        )

    async def list_participants(
        self, trip_id: TripId, caller_id: UserId
    ) -> list[Participation]:
        """List every participation of a trip, oldest first.

        Raises:
            NotFoundError: If the trip does not exist
            NotAuthorizedError: If the caller is not the trip creator
        """
        await self.access_service.require_creator(
            trip_id, caller_id, "list participants of"
        )
        return await self.participation_repository.find_by_trip(trip_id)

    async def find_own_participations(
        self, user_id: UserId, trip_ids: list[TripId]
    ) -> dict[TripId, Participation]:
        """Map each trip to the user's participation in it, where one exists."""
        if not trip_ids:
            return {}
        participations = await self.participation_repository.find_by_user_and_trips(
            user_id, trip_ids
        )
        return {p.trip_id: p for p in participations}

    async def find_for_trips(
        self, trip_ids: list[TripId]
    ) -> dict[TripId, list[Participation]]:
        """Load all participations of several trips, grouped by trip.

        Every requested trip gets an entry, empty when nobody asked to join.
        """
        result: dict[TripId, list[Participation]] = {
            trip_id: [] for trip_id in trip_ids
        }
        if not trip_ids:
            return result
        for participation in await self.participation_repository.find_by_trips(
            trip_ids
        ):
            result[participation.trip_id].append(participation)
        return result
