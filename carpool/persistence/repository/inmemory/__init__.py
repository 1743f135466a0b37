"""In-memory repository implementations for testing."""

from .message import InMemoryMessageRepository
from .notification import InMemoryNotificationRepository
from .participation import InMemoryParticipationRepository
from .store import InMemoryStore
from .transaction import InMemoryTransactionScope
from .trip import InMemoryTripRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryMessageRepository",
    "InMemoryNotificationRepository",
    "InMemoryParticipationRepository",
    "InMemoryStore",
    "InMemoryTransactionScope",
    "InMemoryTripRepository",
    "InMemoryUserRepository",
]
