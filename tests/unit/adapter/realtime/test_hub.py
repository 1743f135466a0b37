"""Unit tests for the in-process realtime hub."""

import pytest

from carpool.adapter.error import SubscriptionClosedError
from carpool.adapter.realtime import InProcessRealtimeHub


class TestInProcessRealtimeHub:
    """Tests for channel fan-out."""

    @pytest.mark.asyncio
    async def test_publish_reaches_only_channel_subscribers(self):
        hub = InProcessRealtimeHub()
        inside = hub.connect()
        outside = hub.connect()
        hub.subscribe(inside, "trip-1")
        hub.subscribe(outside, "trip-2")

        delivered = await hub.publish("trip-1", "new-message", {"body": "hi"})

        assert delivered == 1
        event = await inside.next_event()
        assert (event.channel, event.event, event.data) == (
            "trip-1",
            "new-message",
            {"body": "hi"},
        )
        assert outside.queue.empty()

    @pytest.mark.asyncio
    async def test_events_arrive_in_publish_order(self):
        hub = InProcessRealtimeHub()
        subscription = hub.connect()
        hub.subscribe(subscription, "trip-1")

        for n in range(3):
            await hub.publish("trip-1", "new-message", {"n": n})

        received = [(await subscription.next_event()).data["n"] for _ in range(3)]
        assert received == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_full_queue_drops_events_for_that_subscriber(self):
        hub = InProcessRealtimeHub(queue_size=1)
        slow = hub.connect()
        hub.subscribe(slow, "trip-1")

        assert await hub.publish("trip-1", "new-message", {"n": 1}) == 1
        assert await hub.publish("trip-1", "new-message", {"n": 2}) == 0
        assert slow.queue.qsize() == 1

    @pytest.mark.asyncio
    async def test_unsubscribe_and_disconnect(self):
        hub = InProcessRealtimeHub()
        subscription = hub.connect()
        hub.subscribe(subscription, "trip-1")
        hub.subscribe(subscription, "trip-1")
        hub.subscribe(subscription, "trip-2")
        assert hub.subscriber_count("trip-1") == 1

        hub.unsubscribe(subscription, "trip-1")
        assert hub.subscriber_count("trip-1") == 0
        assert await hub.publish("trip-1", "new-message", {}) == 0

        hub.disconnect(subscription)
        assert hub.subscriber_count("trip-2") == 0
        assert subscription.channels == set()

    def test_closed_subscription_cannot_subscribe(self):
        hub = InProcessRealtimeHub()
        subscription = hub.connect()
        hub.disconnect(subscription)

        with pytest.raises(SubscriptionClosedError):
            hub.subscribe(subscription, "trip-1")
