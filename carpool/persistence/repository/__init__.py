"""PostgreSQL repository implementations."""

from carpool.persistence.repository.message import PostgresMessageRepository
from carpool.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from carpool.persistence.repository.participation import (
    PostgresParticipationRepository,
)
from carpool.persistence.repository.transaction import PostgresTransactionScope
from carpool.persistence.repository.trip import PostgresTripRepository
from carpool.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresTripRepository",
    "PostgresParticipationRepository",
    "PostgresMessageRepository",
    "PostgresNotificationRepository",
    "PostgresTransactionScope",
]
