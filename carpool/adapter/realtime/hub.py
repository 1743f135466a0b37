"""In-process publish/subscribe hub for trip channels.

Each WebSocket connection owns a ``Subscription`` with a bounded
``asyncio.Queue``. Publishing enqueues the event synchronously on every
subscriber of the channel, so subscribers see events in publish order. The
hub lives in the application scope and holds no state across restarts.
"""

import asyncio
from typing import Any
from uuid import uuid4

import logfire
from pydantic import BaseModel

from carpool.adapter.error import SubscriptionClosedError
from carpool.domain.service.realtime import RealtimePublisher


class RealtimeEvent(BaseModel):
    """Event delivered to a subscriber."""

    channel: str
    event: str
    data: dict[str, Any]


class Subscription:
    """One connection's view of the hub."""

    def __init__(self, queue_size: int) -> None:
        self.id = uuid4().hex
        self.queue: asyncio.Queue[RealtimeEvent] = asyncio.Queue(maxsize=queue_size)
        self.channels: set[str] = set()
        self.closed = False

    async def next_event(self) -> RealtimeEvent:
        """Wait for the next event published to any subscribed channel."""
        return await self.queue.get()


class InProcessRealtimeHub(RealtimePublisher):
    """Channel registry and fan-out for a single process."""

    def __init__(self, queue_size: int = 100) -> None:
        """Initialize the hub.

        Args:
            queue_size: Events buffered per connection before drops
        """
        self.queue_size = queue_size
        self._channels: dict[str, dict[str, Subscription]] = {}

    def connect(self) -> Subscription:
        """Register a new connection."""
        subscription = Subscription(self.queue_size)
        logfire.debug("Realtime connection opened", subscription_id=subscription.id)
        return subscription

    def subscribe(self, subscription: Subscription, channel: str) -> None:
        """Add a connection to a channel. Subscribing twice is a no-op.

        Raises:
            SubscriptionClosedError: If the connection was disconnected
        """
        if subscription.closed:
            raise SubscriptionClosedError(
                f"Subscription {subscription.id} is closed"
            )
        self._channels.setdefault(channel, {})[subscription.id] = subscription
        subscription.channels.add(channel)
        logfire.info(
            "Subscribed to channel",
            channel=channel,
            subscription_id=subscription.id,
        )

    def unsubscribe(self, subscription: Subscription, channel: str) -> None:
        """Remove a connection from a channel."""
        subscribers = self._channels.get(channel)
        if subscribers is not None:
            subscribers.pop(subscription.id, None)
            if not subscribers:
                del self._channels[channel]
        subscription.channels.discard(channel)
        logfire.info(
            "Unsubscribed from channel",
            channel=channel,
            subscription_id=subscription.id,
        )

    def disconnect(self, subscription: Subscription) -> None:
        """Remove a connection from all of its channels."""
        for channel in list(subscription.channels):
            self.unsubscribe(subscription, channel)
        subscription.closed = True
        logfire.debug("Realtime connection closed", subscription_id=subscription.id)

    def subscriber_count(self, channel: str) -> int:
        """Number of connections subscribed to a channel."""
        return len(self._channels.get(channel, {}))

    async def publish(self, channel: str, event: str, data: dict[str, Any]) -> int:
        """Queue an event for every subscriber of a channel.

        A subscriber whose queue is full misses the event.

        Returns:
            Number of subscribers the event was queued for
        """
        delivered = 0
        message = RealtimeEvent(channel=channel, event=event, data=data)
        for subscription in list(self._channels.get(channel, {}).values()):
            try:
                subscription.queue.put_nowait(message)
                delivered += 1
            except asyncio.QueueFull:
                logfire.warn(
                    "Subscriber queue full, dropping event",
                    channel=channel,
                    realtime_event=event,
                    subscription_id=subscription.id,
                )
        return delivered
