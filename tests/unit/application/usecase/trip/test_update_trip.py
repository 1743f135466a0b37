"""Unit tests for UpdateTripUseCase."""

from uuid import uuid4

import pytest

from carpool.application.usecase.trip import UpdateTripRequest, UpdateTripUseCase
from carpool.domain.repository import TripRepository
from carpool.domain.value import TripStatus, UserId
from tests.conftest import make_trip
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestUpdateTripUseCase:
    """Tests for UpdateTripUseCase."""

    @pytest.mark.asyncio
    async def test_unset_fields_are_left_alone(self, unit_env):
        use_case = await unit_env.get(UpdateTripUseCase)
        trip_repo = await unit_env.get(TripRepository)
        creator_id = UserId(uuid4())
        trip = await trip_repo.save(
            make_trip(creator_id).model_copy(update={"description": "Quiet ride"})
        )

        response = await use_case.execute(
            UpdateTripRequest(
                trip_id=str(trip.id), user_id=str(creator_id), available_seats=1
            )
        )

        assert response.trip.available_seats == 1
        assert response.trip.description == "Quiet ride"

    @pytest.mark.asyncio
    async def test_complete_trip(self, unit_env):
        use_case = await unit_env.get(UpdateTripUseCase)
        trip_repo = await unit_env.get(TripRepository)
        creator_id = UserId(uuid4())
        trip = await trip_repo.save(make_trip(creator_id))

        response = await use_case.execute(
            UpdateTripRequest(
                trip_id=str(trip.id),
                user_id=str(creator_id),
                status=TripStatus.COMPLETED,
            )
        )

        assert response.trip.status == TripStatus.COMPLETED
        assert await trip_repo.find_active() == []
