"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from carpool.domain.model.notification import Notification
from carpool.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def save_many(
        self, notifications: Sequence[Notification]
    ) -> List[Notification]:
        """Insert a batch of notifications atomically.

        Either all notifications of the batch are stored or none are. A
        failure here must not affect other writes of the same request.

        Args:
            notifications: Notifications to insert

        Returns:
            The saved notifications
        """
        pass

    @abstractmethod
    async def find_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False, limit: int = 50
    ) -> List[Notification]:
        """Find notifications addressed to a user, newest first."""
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Set is_read on a notification.

        Returns:
            The updated notification, or None if it does not exist
        """
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a user as read.

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    async def count_unread(self, recipient_id: UserId) -> int:
        """Count unread notifications addressed to a user."""
        pass
