"""In-memory notification repository for testing."""

from typing import Optional, Sequence

from carpool.domain.model.notification import Notification
from carpool.domain.repository.notification import NotificationRepository
from carpool.domain.value import NotificationId, UserId

from .store import InMemoryStore


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._store.notifications.get(notification_id)

    async def save_many(
        self, notifications: Sequence[Notification]
    ) -> list[Notification]:
        """Insert a batch of notifications."""
        for notification in notifications:
            self._store.notifications[notification.id] = notification
        return list(notifications)

    async def find_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        """Find notifications addressed to a user, newest first."""
        matches = [
            n
            for n in self._store.notifications.values()
            if n.recipient_id == recipient_id and not (unread_only and n.is_read)
        ]
        matches.sort(key=lambda n: (n.created_at, str(n.id)), reverse=True)
        return matches[:limit]

    async def mark_read(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Set is_read on a notification."""
        current = self._store.notifications.get(notification_id)
        if current is None:
            return None
        updated = current.model_copy(update={"is_read": True})
        self._store.notifications[notification_id] = updated
        return updated

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a user as read."""
        count = 0
        for notification_id, n in list(self._store.notifications.items()):
            if n.recipient_id == recipient_id and not n.is_read:
                self._store.notifications[notification_id] = n.model_copy(
                    update={"is_read": True}
                )
                count += 1
        return count

    async def count_unread(self, recipient_id: UserId) -> int:
        """Count unread notifications addressed to a user."""
        return sum(
            1
            for n in self._store.notifications.values()
            if n.recipient_id == recipient_id and not n.is_read
        )
