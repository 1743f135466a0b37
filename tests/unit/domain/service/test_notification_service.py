"""Unit tests for NotificationService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from carpool.domain.error import NotAuthorizedError, NotFoundError
from carpool.domain.event import TripCancelled, TripUpdated
from carpool.domain.model import Notification
from carpool.domain.repository import NotificationRepository, ParticipationRepository
from carpool.domain.service import NotificationService
from carpool.domain.value import (
    NotificationId,
    NotificationType,
    ParticipationStatus,
    TripId,
    UserId,
)
from tests.conftest import make_participation, make_trip
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()


def make_notification(
    recipient_id: UserId, is_read: bool = False, age_minutes: int = 0
) -> Notification:
    return Notification(
        id=NotificationId(uuid4()),
        recipient_id=recipient_id,
        sender_id=UserId(uuid4()),
        type=NotificationType.TRIP_UPDATE,
        trip_id=TripId(uuid4()),
        title="Trip Updated",
        body="The trip from A to B has been updated",
        is_read=is_read,
        created_at=datetime.now(timezone.utc) - timedelta(minutes=age_minutes),
    )


class TestHandle:
    """Tests for lifecycle event dispatch."""

    @pytest.mark.asyncio
    async def test_multicast_skips_the_actor(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        participation_repo = await unit_env.get(ParticipationRepository)

        creator_id = UserId(uuid4())
        trip = make_trip(creator_id)
        rider_ids = [UserId(uuid4()), UserId(uuid4())]
        for rider_id in rider_ids:
            await participation_repo.save(
                make_participation(trip.id, rider_id, ParticipationStatus.APPROVED)
            )

        # An approved rider acting on the trip does not notify themselves
        saved = await notification_service.handle(
            TripUpdated(trip=trip, actor_id=rider_ids[0])
        )

        assert [n.recipient_id for n in saved] == [rider_ids[1]]

    @pytest.mark.asyncio
    async def test_multicast_without_riders_stores_nothing(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        creator_id = UserId(uuid4())

        saved = await notification_service.handle(
            TripCancelled(trip=make_trip(creator_id), actor_id=creator_id)
        )

        assert saved == []

    @pytest.mark.asyncio
    async def test_cancel_notification_keeps_trip_reference(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        participation_repo = await unit_env.get(ParticipationRepository)
        creator_id = UserId(uuid4())
        rider_id = UserId(uuid4())
        trip = make_trip(creator_id)
        await participation_repo.save(
            make_participation(trip.id, rider_id, ParticipationStatus.APPROVED)
        )

        saved = await notification_service.handle(
            TripCancelled(trip=trip, actor_id=creator_id)
        )

        assert len(saved) == 1
        assert saved[0].type == NotificationType.TRIP_CANCELLED
        assert saved[0].trip_id == trip.id
        assert saved[0].participation_id is None
        assert saved[0].action_required is False


class TestInbox:
    """Tests for listing and read state."""

    @pytest.mark.asyncio
    async def test_list_is_newest_first_and_filters_unread(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        older = make_notification(user_id, is_read=True, age_minutes=5)
        newer = make_notification(user_id)
        await notification_repo.save_many([older, newer])
        await notification_repo.save_many([make_notification(UserId(uuid4()))])

        everything = await notification_service.list_for_user(user_id)
        unread = await notification_service.list_for_user(user_id, unread_only=True)

        assert [n.id for n in everything] == [newer.id, older.id]
        assert [n.id for n in unread] == [newer.id]

    @pytest.mark.asyncio
    async def test_list_respects_limit(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        await notification_repo.save_many([make_notification(user_id) for _ in range(5)])

        assert len(await notification_service.list_for_user(user_id, limit=2)) == 2

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        notification = make_notification(user_id)
        await notification_repo.save_many([notification])

        first = await notification_service.mark_read(notification.id, user_id)
        second = await notification_service.mark_read(notification.id, user_id)

        assert first.is_read and second.is_read
        assert await notification_service.unread_count(user_id) == 0

    @pytest.mark.asyncio
    async def test_only_recipient_marks_read(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        notification = make_notification(UserId(uuid4()))
        await notification_repo.save_many([notification])

        with pytest.raises(NotAuthorizedError):
            await notification_service.mark_read(notification.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_mark_read_unknown_raises_not_found(self, unit_env):
        notification_service = await unit_env.get(NotificationService)

        with pytest.raises(NotFoundError):
            await notification_service.mark_read(
                NotificationId(uuid4()), UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_mark_all_read_counts_changes(self, unit_env):
        notification_service = await unit_env.get(NotificationService)
        notification_repo = await unit_env.get(NotificationRepository)
        user_id = UserId(uuid4())
        await notification_repo.save_many(
            [
                make_notification(user_id),
                make_notification(user_id),
                make_notification(user_id, is_read=True),
            ]
        )

        assert await notification_service.unread_count(user_id) == 2
        assert await notification_service.mark_all_read(user_id) == 2
        assert await notification_service.unread_count(user_id) == 0
