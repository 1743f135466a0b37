"""Shared state for the in-memory repositories.

Repositories are request-scoped while the store lives for the whole
container, so data written in one request is visible to the next one.
"""

from carpool.domain.model import Message, Notification, Participation, Trip, User
from carpool.domain.value import (
    MessageId,
    NotificationId,
    ParticipationId,
    TripId,
    UserId,
)


class InMemoryStore:
    """Tables of the in-memory database, keyed by ID."""

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.trips: dict[TripId, Trip] = {}
        self.participations: dict[ParticipationId, Participation] = {}
        self.messages: dict[MessageId, Message] = {}
        self.notifications: dict[NotificationId, Notification] = {}
