"""Realtime transport port.

The messaging service pushes group chat events through this interface.
The in-process hub in ``carpool.adapter.realtime`` implements it.
"""

from abc import ABC, abstractmethod
from typing import Any

from carpool.domain.value import TripId

NEW_MESSAGE_EVENT = "new-message"


def trip_channel(trip_id: TripId | str) -> str:
    """Name of the publish/subscribe channel of a trip."""
    return f"trip-{trip_id}"


class RealtimePublisher(ABC):
    """Publishes events to the subscribers of a channel."""

    @abstractmethod
    async def publish(self, channel: str, event: str, data: dict[str, Any]) -> int:
        """Deliver an event to every current subscriber of a channel.

        Events published to one channel reach each subscriber in publish order.

        Args:
            channel: Channel name (see ``trip_channel``)
            event: Event name
            data: JSON-serializable payload

        Returns:
            Number of subscribers the event was queued for
        """
        pass
