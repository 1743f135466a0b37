"""In-memory message repository for testing."""

from datetime import datetime
from typing import Optional

from carpool.domain.model.message import Message
from carpool.domain.repository.message import MessageRepository
from carpool.domain.value import MessageId, MessageMode, TripId, UserId

from .store import InMemoryStore


def _ordered(messages: list[Message]) -> list[Message]:
    return sorted(messages, key=lambda m: (m.created_at, str(m.id)))


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        return self._store.messages.get(message_id)

    async def save(self, message: Message) -> Message:
        """Insert a message."""
        self._store.messages[message.id] = message
        return message

    async def find_direct_for_user(
        self,
        trip_id: TripId,
        user_id: UserId,
        counterpart_id: Optional[UserId] = None,
    ) -> list[Message]:
        """Find direct messages of a trip involving a user."""
        matches = []
        for m in self._store.messages.values():
            if m.trip_id != trip_id or m.mode != MessageMode.DIRECT:
                continue
            if counterpart_id is None:
                if user_id in (m.sender_id, m.receiver_id):
                    matches.append(m)
            elif {m.sender_id, m.receiver_id} == {user_id, counterpart_id}:
                matches.append(m)
        return _ordered(matches)

    async def find_recent_group(self, trip_id: TripId, limit: int) -> list[Message]:
        """Find the newest group messages of a trip, oldest first."""
        group = _ordered(
            [
                m
                for m in self._store.messages.values()
                if m.trip_id == trip_id and m.mode == MessageMode.GROUP
            ]
        )
        return group[-limit:] if limit > 0 else []

    async def count_unread_direct(self, receiver_id: UserId) -> int:
        """Count unread direct messages addressed to a user."""
        return sum(
            1
            for m in self._store.messages.values()
            if m.mode == MessageMode.DIRECT
            and m.receiver_id == receiver_id
            and m.read_at is None
        )

    async def mark_read(
        self, message_id: MessageId, read_at: datetime
    ) -> Optional[Message]:
        """Set read_at if unset."""
        current = self._store.messages.get(message_id)
        if current is None or current.read_at is not None:
            return None
        updated = current.model_copy(update={"read_at": read_at})
        self._store.messages[message_id] = updated
        return updated
