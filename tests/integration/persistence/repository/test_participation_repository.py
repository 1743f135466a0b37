"""Integration tests for the PostgreSQL trip and participation repositories.

These tests need a migrated database at ``DATABASE__URL``.
"""

import os

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from carpool.domain.repository import (
    ParticipationRepository,
    TripRepository,
    UserRepository,
)
from carpool.domain.value import ParticipationStatus
from tests.conftest import make_participation, make_trip, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

integration_env = create_env_fixture(unmock={"persistence"})


async def seed_trip(env):
    user_repo = await env.get(UserRepository)
    trip_repo = await env.get(TripRepository)
    creator = await user_repo.upsert(make_user("21CE001"))
    rider = await user_repo.upsert(make_user("21CE002"))
    trip = await trip_repo.save(make_trip(creator.id))
    return trip, rider


class TestParticipationRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_update_status_only_applies_from_expected(self, integration_env):
        """The second decision on the same request finds nothing to update."""
        repo = await integration_env.get(ParticipationRepository)
        trip, rider = await seed_trip(integration_env)
        participation = await repo.save(make_participation(trip.id, rider.id))

        approved = await repo.update_status(
            participation.id, ParticipationStatus.PENDING, ParticipationStatus.APPROVED
        )
        again = await repo.update_status(
            participation.id, ParticipationStatus.PENDING, ParticipationStatus.REJECTED
        )

        assert approved is not None
        assert approved.status == ParticipationStatus.APPROVED
        assert again is None

    @pytest.mark.asyncio
    async def test_find_by_trip_filters_status(self, integration_env):
        repo = await integration_env.get(ParticipationRepository)
        trip, rider = await seed_trip(integration_env)
        await repo.save(
            make_participation(trip.id, rider.id, ParticipationStatus.APPROVED)
        )

        approved = await repo.find_by_trip(trip.id, ParticipationStatus.APPROVED)
        pending = await repo.find_by_trip(trip.id, ParticipationStatus.PENDING)

        assert [p.user_id for p in approved] == [rider.id]
        assert pending == []

    @pytest.mark.asyncio
    async def test_second_request_for_same_trip_violates_unique(self, integration_env):
        repo = await integration_env.get(ParticipationRepository)
        trip, rider = await seed_trip(integration_env)
        await repo.save(make_participation(trip.id, rider.id))

        with pytest.raises(IntegrityError):
            await repo.save(make_participation(trip.id, rider.id))

        session = await integration_env.get(AsyncSession)
        await session.rollback()


class TestTripRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_delete_cascade_removes_participations(self, integration_env):
        trip_repo = await integration_env.get(TripRepository)
        participation_repo = await integration_env.get(ParticipationRepository)
        trip, rider = await seed_trip(integration_env)
        await participation_repo.save(make_participation(trip.id, rider.id))

        deleted = await trip_repo.delete_cascade(trip.id)

        assert deleted is True
        assert await trip_repo.find_by_id(trip.id) is None
        assert await participation_repo.find_by_trip(trip.id) == []
