"""Domain model entities for the carpool service."""

from carpool.domain.model.message import Message
from carpool.domain.model.notification import Notification
from carpool.domain.model.participation import Participation
from carpool.domain.model.trip import Trip
from carpool.domain.model.user import User

__all__ = [
    "User",
    "Trip",
    "Participation",
    "Message",
    "Notification",
]
