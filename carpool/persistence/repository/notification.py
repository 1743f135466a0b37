"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from carpool.domain.model import Notification
from carpool.domain.repository import NotificationRepository
from carpool.domain.value import NotificationId, UserId
from carpool.persistence.mappers import notification_to_dict, row_to_notification
from carpool.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_notification(dict(row)) if row else None

    async def save_many(
        self, notifications: Sequence[Notification]
    ) -> List[Notification]:
        """Insert a batch of notifications inside a SAVEPOINT.

        A failed insert rolls back to the savepoint only, so the state change
        that triggered the notifications stays in the outer transaction.
        """
        if not notifications:
            return []

        async with self.session.begin_nested():
            await self.session.execute(
                insert(notifications_table),
                [notification_to_dict(n) for n in notifications],
            )
        return list(notifications)

    async def find_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False, limit: int = 50
    ) -> List[Notification]:
        """Find notifications addressed to a user, newest first."""
        stmt = select(notifications_table).where(
            notifications_table.c.recipient_id == recipient_id
        )
        if unread_only:
            stmt = stmt.where(notifications_table.c.is_read.is_(False))
        stmt = stmt.order_by(
            desc(notifications_table.c.created_at), desc(notifications_table.c.id)
        ).limit(limit)
        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def mark_read(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Set is_read on a notification."""
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id == notification_id)
            .values(is_read=True)
            .returning(notifications_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_notification(dict(row)) if row else None

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Mark every unread notification of a user as read."""
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.recipient_id == recipient_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_unread(self, recipient_id: UserId) -> int:
        """Count unread notifications addressed to a user."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(
                and_(
                    notifications_table.c.recipient_id == recipient_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
