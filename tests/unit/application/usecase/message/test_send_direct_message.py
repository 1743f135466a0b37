"""Unit tests for the direct message use cases."""

from uuid import uuid4

import pytest

from carpool.application.usecase.message import (
    GetUnreadMessageCountRequest,
    GetUnreadMessageCountUseCase,
    ListDirectMessagesRequest,
    ListDirectMessagesUseCase,
    MarkMessageReadRequest,
    MarkMessageReadUseCase,
    SendDirectMessageRequest,
    SendDirectMessageUseCase,
)
from carpool.domain.repository import (
    ParticipationRepository,
    TripRepository,
    UserRepository,
)
from carpool.domain.value import MessageMode, ParticipationStatus
from tests.conftest import make_participation, make_trip, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDirectMessageUseCases:
    """Send, list, read and count direct messages."""

    @pytest.mark.asyncio
    async def test_direct_message_lifecycle(self, unit_env):
        send = await unit_env.get(SendDirectMessageUseCase)
        list_direct = await unit_env.get(ListDirectMessagesUseCase)
        mark_read = await unit_env.get(MarkMessageReadUseCase)
        unread = await unit_env.get(GetUnreadMessageCountUseCase)
        trip_repo = await unit_env.get(TripRepository)
        participation_repo = await unit_env.get(ParticipationRepository)
        user_repo = await unit_env.get(UserRepository)

        creator = await user_repo.upsert(make_user("grace"))
        rider = await user_repo.upsert(make_user("heidi"))
        trip = await trip_repo.save(make_trip(creator.id))
        await participation_repo.save(
            make_participation(trip.id, rider.id, ParticipationStatus.APPROVED)
        )

        sent = await send.execute(
            SendDirectMessageRequest(
                trip_id=str(trip.id),
                sender_id=str(rider.id),
                receiver_id=str(creator.id),
                body="Can I bring a bike?",
            )
        )
        assert sent.message.mode == MessageMode.DIRECT
        assert sent.message.sender.handle.root == "heidi"
        assert sent.message.receiver_id == str(creator.id)

        count = await unread.execute(
            GetUnreadMessageCountRequest(user_id=str(creator.id))
        )
        assert count.count == 1

        listed = await list_direct.execute(
            ListDirectMessagesRequest(
                trip_id=str(trip.id),
                user_id=str(creator.id),
                counterpart_id=str(rider.id),
            )
        )
        assert [m.body for m in listed.messages] == ["Can I bring a bike?"]

        read = await mark_read.execute(
            MarkMessageReadRequest(
                message_id=sent.message.message_id, user_id=str(creator.id)
            )
        )
        assert read.message.read_at is not None
        count = await unread.execute(
            GetUnreadMessageCountRequest(user_id=str(creator.id))
        )
        assert count.count == 0

    @pytest.mark.asyncio
    async def test_unread_count_for_new_user_is_zero(self, unit_env):
        unread = await unit_env.get(GetUnreadMessageCountUseCase)

        response = await unread.execute(
            GetUnreadMessageCountRequest(user_id=str(uuid4()))
        )

        assert response.count == 0
