"""Unit tests for MessagingService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from carpool.adapter.realtime import InProcessRealtimeHub
from carpool.config import MessagingSettings
from carpool.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    SelfMessageDeniedError,
    ValidationError,
)
from carpool.domain.model import Message
from carpool.domain.repository import (
    MessageRepository,
    ParticipationRepository,
    TripRepository,
    UserRepository,
)
from carpool.domain.service import AccessService, MessagingService, UserService
from carpool.domain.service.realtime import RealtimePublisher, trip_channel
from carpool.domain.value import MessageId, MessageMode, ParticipationStatus, UserId
from tests.conftest import make_participation, make_trip, make_user
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()


async def trip_with_rider(unit_env, status=ParticipationStatus.APPROVED):
    """Store a trip with one rider and return (trip, rider_id)."""
    trip_repo = await unit_env.get(TripRepository)
    participation_repo = await unit_env.get(ParticipationRepository)
    user_repo = await unit_env.get(UserRepository)
    creator = await user_repo.upsert(make_user("carol"))
    rider = await user_repo.upsert(make_user("dave"))
    trip = await trip_repo.save(make_trip(creator.id))
    await participation_repo.save(make_participation(trip.id, rider.id, status))
    return trip, rider.id


class FailingPublisher(RealtimePublisher):
    async def publish(self, channel, event, data):
        raise ConnectionError("transport down")


class CountingUserService(UserService):
    """Counts sender profile lookups."""

    def __init__(self, user_repository):
        super().__init__(user_repository)
        self.profile_lookups = 0

    async def get_public_profile(self, user_id):
        self.profile_lookups += 1
        return await super().get_public_profile(user_id)


class TestSendDirect:
    """Tests for direct messages."""

    @pytest.mark.asyncio
    async def test_rider_can_message_creator(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env)

        message = await messaging_service.send(
            trip.id, rider_id, "  See you at 8  ", MessageMode.DIRECT, trip.creator_id
        )

        assert message.body == "See you at 8"
        assert message.receiver_id == trip.creator_id
        assert message.read_at is None
        assert await messaging_service.unread_count(trip.creator_id) == 1

    @pytest.mark.asyncio
    async def test_pending_rider_cannot_message(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env, ParticipationStatus.PENDING)

        with pytest.raises(NotAuthorizedError):
            await messaging_service.send(
                trip.id, rider_id, "hi", MessageMode.DIRECT, trip.creator_id
            )

    @pytest.mark.asyncio
    async def test_receiver_must_be_trip_member(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, _ = await trip_with_rider(unit_env)

        with pytest.raises(NotAuthorizedError):
            await messaging_service.send(
                trip.id, trip.creator_id, "hi", MessageMode.DIRECT, UserId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_cannot_message_yourself(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, _ = await trip_with_rider(unit_env)

        with pytest.raises(SelfMessageDeniedError):
            await messaging_service.send(
                trip.id, trip.creator_id, "hi", MessageMode.DIRECT, trip.creator_id
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["", "   ", "x" * 1001])
    async def test_body_must_be_1_to_1000_characters(self, unit_env, body):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env)

        with pytest.raises(ValidationError):
            await messaging_service.send(
                trip.id, rider_id, body, MessageMode.DIRECT, trip.creator_id
            )

    @pytest.mark.asyncio
    async def test_list_direct_filters_by_counterpart(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        participation_repo = await unit_env.get(ParticipationRepository)
        trip, rider_id = await trip_with_rider(unit_env)
        other_id = UserId(uuid4())
        await participation_repo.save(
            make_participation(trip.id, other_id, ParticipationStatus.APPROVED)
        )

        await messaging_service.send(
            trip.id, rider_id, "to creator", MessageMode.DIRECT, trip.creator_id
        )
        await messaging_service.send(
            trip.id, other_id, "to rider", MessageMode.DIRECT, rider_id
        )

        everything = await messaging_service.list_direct(trip.id, rider_id)
        with_creator = await messaging_service.list_direct(
            trip.id, rider_id, trip.creator_id
        )

        assert {m.body for m in everything} == {"to creator", "to rider"}
        assert [m.body for m in with_creator] == ["to creator"]

    @pytest.mark.asyncio
    async def test_outsider_cannot_list_direct(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env)
        await messaging_service.send(
            trip.id, rider_id, "private", MessageMode.DIRECT, trip.creator_id
        )

        with pytest.raises(NotAuthorizedError):
            await messaging_service.list_direct(trip.id, UserId(uuid4()))


class TestMarkRead:
    """Tests for read receipts."""

    @pytest.mark.asyncio
    async def test_receiver_marks_read_once(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env)
        message = await messaging_service.send(
            trip.id, rider_id, "hello", MessageMode.DIRECT, trip.creator_id
        )

        first = await messaging_service.mark_read(message.id, trip.creator_id)
        second = await messaging_service.mark_read(message.id, trip.creator_id)

        assert first.read_at is not None
        assert second.read_at == first.read_at
        assert await messaging_service.unread_count(trip.creator_id) == 0

    @pytest.mark.asyncio
    async def test_sender_cannot_mark_read(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env)
        message = await messaging_service.send(
            trip.id, rider_id, "hello", MessageMode.DIRECT, trip.creator_id
        )

        with pytest.raises(NotAuthorizedError):
            await messaging_service.mark_read(message.id, rider_id)

    @pytest.mark.asyncio
    async def test_outsider_cannot_mark_read(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env)
        message = await messaging_service.send(
            trip.id, rider_id, "hello", MessageMode.DIRECT, trip.creator_id
        )

        with pytest.raises(NotAuthorizedError):
            await messaging_service.mark_read(message.id, UserId(uuid4()))

        assert await messaging_service.unread_count(trip.creator_id) == 1

    @pytest.mark.asyncio
    async def test_unknown_message_raises_not_found(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)

        with pytest.raises(NotFoundError):
            await messaging_service.mark_read(MessageId(uuid4()), UserId(uuid4()))


class TestGroupChat:
    """Tests for group messages."""

    @pytest.mark.asyncio
    async def test_group_send_is_published_to_trip_channel(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        hub = await unit_env.get(InProcessRealtimeHub)
        trip, rider_id = await trip_with_rider(unit_env)
        subscription = hub.connect()
        hub.subscribe(subscription, trip_channel(trip.id))

        message = await messaging_service.send(
            trip.id, rider_id, "Running late", MessageMode.GROUP
        )

        assert message.receiver_id is None
        event = subscription.queue.get_nowait()
        assert event.event == "new-message"
        assert event.data["id"] == str(message.id)
        assert event.data["body"] == "Running late"
        assert event.data["sender"]["handle"] == "dave"

    @pytest.mark.asyncio
    async def test_group_receiver_is_ignored(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, rider_id = await trip_with_rider(unit_env)

        message = await messaging_service.send(
            trip.id, rider_id, "hi all", MessageMode.GROUP, trip.creator_id
        )

        assert message.mode == MessageMode.GROUP
        assert message.receiver_id is None

    @pytest.mark.asyncio
    async def test_publish_failure_does_not_fail_send(self, unit_env):
        message_repo = await unit_env.get(MessageRepository)
        trip, rider_id = await trip_with_rider(unit_env)
        messaging_service = MessagingService(
            message_repository=message_repo,
            participation_repository=await unit_env.get(ParticipationRepository),
            access_service=await unit_env.get(AccessService),
            user_service=await unit_env.get(UserService),
            messaging_settings=MessagingSettings(),
            realtime=FailingPublisher(),
        )

        message = await messaging_service.send(
            trip.id, rider_id, "still stored", MessageMode.GROUP
        )

        assert await message_repo.find_by_id(message.id) == message

    @pytest.mark.asyncio
    async def test_history_returns_latest_window_oldest_first(self, unit_env):
        message_repo = await unit_env.get(MessageRepository)
        trip, rider_id = await trip_with_rider(unit_env)
        start = datetime.now(timezone.utc) - timedelta(hours=1)
        for minute in range(4):
            await message_repo.save(
                Message(
                    id=MessageId(uuid4()),
                    trip_id=trip.id,
                    sender_id=rider_id,
                    mode=MessageMode.GROUP,
                    body=f"message {minute}",
                    created_at=start + timedelta(minutes=minute),
                )
            )
        messaging_service = MessagingService(
            message_repository=message_repo,
            participation_repository=await unit_env.get(ParticipationRepository),
            access_service=await unit_env.get(AccessService),
            user_service=await unit_env.get(UserService),
            messaging_settings=MessagingSettings(group_history_limit=2),
        )

        history = await messaging_service.list_group(trip.id, trip.creator_id)

        assert [m.body for m in history] == ["message 2", "message 3"]

    @pytest.mark.asyncio
    async def test_outsider_cannot_read_history(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, _ = await trip_with_rider(unit_env)

        with pytest.raises(NotAuthorizedError):
            await messaging_service.list_group(trip.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_chat_members_list_creator_first(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        participation_repo = await unit_env.get(ParticipationRepository)
        trip, rider_id = await trip_with_rider(unit_env)
        await participation_repo.save(
            make_participation(trip.id, UserId(uuid4()), ParticipationStatus.REJECTED)
        )

        members = await messaging_service.list_group_participants(trip.id, rider_id)

        assert [m.profile.id for m in members] == [trip.creator_id, rider_id]
        assert [m.is_creator for m in members] == [True, False]
        assert members[0].profile.handle.root == "carol"

    @pytest.mark.asyncio
    async def test_outsider_cannot_list_chat_members(self, unit_env):
        messaging_service = await unit_env.get(MessagingService)
        trip, _ = await trip_with_rider(unit_env)

        with pytest.raises(NotAuthorizedError):
            await messaging_service.list_group_participants(trip.id, UserId(uuid4()))


class TestSenderProfileLookup:
    """Sender profiles are only needed for realtime payloads."""

    async def build_service(self, unit_env, user_service):
        return MessagingService(
            message_repository=await unit_env.get(MessageRepository),
            participation_repository=await unit_env.get(ParticipationRepository),
            access_service=await unit_env.get(AccessService),
            user_service=user_service,
            messaging_settings=MessagingSettings(),
            realtime=await unit_env.get(InProcessRealtimeHub),
        )

    @pytest.mark.asyncio
    async def test_direct_send_skips_profile_lookup(self, unit_env):
        trip, rider_id = await trip_with_rider(unit_env)
        user_service = CountingUserService(await unit_env.get(UserRepository))
        messaging_service = await self.build_service(unit_env, user_service)

        await messaging_service.send(
            trip.id, rider_id, "hi", MessageMode.DIRECT, trip.creator_id
        )

        assert user_service.profile_lookups == 0

    @pytest.mark.asyncio
    async def test_group_send_loads_sender_once(self, unit_env):
        trip, rider_id = await trip_with_rider(unit_env)
        user_service = CountingUserService(await unit_env.get(UserRepository))
        messaging_service = await self.build_service(unit_env, user_service)

        await messaging_service.send(trip.id, rider_id, "hi all", MessageMode.GROUP)

        assert user_service.profile_lookups == 1
