"""Domain services."""

from .access_service import AccessService
from .base import Service
from .jwt_service import JWTService
from .messaging_service import ChatMember, MessagingService
from .notification_service import NotificationService
from .participation_service import ParticipationService
from .realtime import RealtimePublisher
from .trip_service import TripChanges, TripService
from .user_service import UserService

__all__ = [
    "AccessService",
    "ChatMember",
    "JWTService",
    "MessagingService",
    "NotificationService",
    "ParticipationService",
    "RealtimePublisher",
    "Service",
    "TripChanges",
    "TripService",
    "UserService",
]
