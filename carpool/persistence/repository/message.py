"""PostgreSQL implementation of Message repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from carpool.domain.model import Message
from carpool.domain.repository import MessageRepository
from carpool.domain.value import MessageId, MessageMode, TripId, UserId
from carpool.persistence.mappers import message_to_dict, row_to_message
from carpool.persistence.tables import messages_table


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        stmt = select(messages_table).where(messages_table.c.id == message_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_message(dict(row)) if row else None

    async def save(self, message: Message) -> Message:
        """Insert a message."""
        stmt = insert(messages_table).values(**message_to_dict(message))
        await self.session.execute(stmt)
        await self.session.flush()
        return message

    async def find_direct_for_user(
        self,
        trip_id: TripId,
        user_id: UserId,
        counterpart_id: Optional[UserId] = None,
    ) -> List[Message]:
        """Find direct messages of a trip involving a user, oldest first."""
        if counterpart_id is None:
            involved = or_(
                messages_table.c.sender_id == user_id,
                messages_table.c.receiver_id == user_id,
            )
        else:
            involved = or_(
                and_(
                    messages_table.c.sender_id == user_id,
                    messages_table.c.receiver_id == counterpart_id,
                ),
                and_(
                    messages_table.c.sender_id == counterpart_id,
                    messages_table.c.receiver_id == user_id,
                ),
            )

        stmt = (
            select(messages_table)
            .where(
                and_(
                    messages_table.c.trip_id == trip_id,
                    messages_table.c.mode == MessageMode.DIRECT.value,
                    involved,
                )
            )
            .order_by(messages_table.c.created_at, messages_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_message(dict(row)) for row in result.mappings().all()]

    async def find_recent_group(self, trip_id: TripId, limit: int) -> List[Message]:
        """Find the newest group messages of a trip, returned oldest first."""
        stmt = (
            select(messages_table)
            .where(
                and_(
                    messages_table.c.trip_id == trip_id,
                    messages_table.c.mode == MessageMode.GROUP.value,
                )
            )
            .order_by(desc(messages_table.c.created_at), desc(messages_table.c.id))
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        messages = [row_to_message(dict(row)) for row in result.mappings().all()]
        messages.reverse()
        return messages

    async def count_unread_direct(self, receiver_id: UserId) -> int:
        """Count unread direct messages addressed to a user."""
        stmt = (
            select(func.count())
            .select_from(messages_table)
            .where(
                and_(
                    messages_table.c.mode == MessageMode.DIRECT.value,
                    messages_table.c.receiver_id == receiver_id,
                    messages_table.c.read_at.is_(None),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def mark_read(
        self, message_id: MessageId, read_at: datetime
    ) -> Optional[Message]:
        """Set read_at with UPDATE ... WHERE read_at IS NULL."""
        stmt = (
            update(messages_table)
            .where(
                and_(
                    messages_table.c.id == message_id,
                    messages_table.c.read_at.is_(None),
                )
            )
            .values(read_at=read_at)
            .returning(messages_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_message(dict(row)) if row else None
