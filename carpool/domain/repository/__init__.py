"""Repository interfaces for the carpool domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from carpool.domain.repository.message import MessageRepository
from carpool.domain.repository.notification import NotificationRepository
from carpool.domain.repository.participation import ParticipationRepository
from carpool.domain.repository.trip import TripRepository
from carpool.domain.repository.transaction import TransactionScope
from carpool.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "TripRepository",
    "ParticipationRepository",
    "MessageRepository",
    "NotificationRepository",
    "TransactionScope",
]
