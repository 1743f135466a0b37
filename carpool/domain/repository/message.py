"""Message repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from carpool.domain.model.message import Message
from carpool.domain.value import MessageId, TripId, UserId


class MessageRepository(ABC):
    """Repository for trip messages of both delivery modes.

    Listings are ordered by (created_at, id) so ties stay stable across reads.
    """

    @abstractmethod
    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID.

        Args:
            message_id: The message's unique identifier

        Returns:
            The message if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Insert a message.

        Args:
            message: The message to save

        Returns:
            The saved message
        """
        pass

    @abstractmethod
    async def find_direct_for_user(
        self,
        trip_id: TripId,
        user_id: UserId,
        counterpart_id: Optional[UserId] = None,
    ) -> List[Message]:
        """Find direct messages of a trip that involve a user.

        Args:
            trip_id: The trip's ID
            user_id: User who must be sender or receiver
            counterpart_id: If given, only the thread between the two users

        Returns:
            Messages in ascending creation order
        """
        pass

    @abstractmethod
    async def find_recent_group(self, trip_id: TripId, limit: int) -> List[Message]:
        """Find the most recent group messages of a trip.

        Args:
            trip_id: The trip's ID
            limit: Size of the retained window

        Returns:
            Up to ``limit`` newest messages, oldest first
        """
        pass

    @abstractmethod
    async def count_unread_direct(self, receiver_id: UserId) -> int:
        """Count unread direct messages addressed to a user across all trips."""
        pass

    @abstractmethod
    async def mark_read(
        self, message_id: MessageId, read_at: datetime
    ) -> Optional[Message]:
        """Set read_at if it is still unset.

        Args:
            message_id: The message to mark
            read_at: Timestamp to write

        Returns:
            The updated message, or None if it was missing or already read
        """
        pass
