"""Notification entity.

Notifications are produced only by the notification dispatcher in response
to trip and participation lifecycle events.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from carpool.domain.model.common import DomainModel, utcnow
from carpool.domain.value import (
    NotificationId,
    NotificationType,
    ParticipationId,
    TripId,
    UserId,
)


class Notification(DomainModel):
    """Addressed notification.

    Only the recipient may flip is_read. Notifications are never deleted
    by normal flow and keep their trip reference after the trip is gone.
    """

    id: NotificationId
    recipient_id: UserId
    sender_id: UserId
    type: NotificationType
    trip_id: TripId
    participation_id: Optional[ParticipationId] = None
    title: str
    body: str
    is_read: bool = False
    action_required: bool = False
    created_at: datetime = Field(default_factory=utcnow)
