"""Notification domain service.

Translates trip lifecycle events into addressed notifications and serves
the recipient-scoped notification inbox.
"""

from uuid import uuid4

import logfire

from carpool.domain.error import NotAuthorizedError, NotFoundError
from carpool.domain.event import (
    JoinDecided,
    JoinRequested,
    LifecycleEvent,
    TripCancelled,
    TripUpdated,
)
from carpool.domain.model import Notification, Trip
from carpool.domain.model.common import utcnow
from carpool.domain.repository import (
    NotificationRepository,
    ParticipationRepository,
)
from carpool.domain.value import (
    Decision,
    NotificationId,
    NotificationType,
    ParticipationStatus,
    UserId,
)

from .base import Service
from .user_service import UserService


class NotificationService(Service):
    """Domain service for notifications."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        participation_repository: ParticipationRepository,
        user_service: UserService,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            participation_repository: Participation repository (for multicast)
            user_service: User service (for sender handles)
        """
        self.notification_repository = notification_repository
        self.participation_repository = participation_repository
        self.user_service = user_service

    async def handle(self, event: LifecycleEvent) -> list[Notification]:
        """Create the notifications for a lifecycle event.

        Args:
            event: The lifecycle event

        Returns:
            The stored notifications (possibly none)
        """
        with logfire.span(
            "notification_service.handle",
            lifecycle_event=type(event).__name__,
            trip_id=str(event.trip.id),
        ):
            if isinstance(event, JoinRequested):
                notifications = await self._join_requested(event)
            elif isinstance(event, JoinDecided):
                notifications = [self._join_decided(event)]
            elif isinstance(event, TripCancelled):
                notifications = await self._multicast(
                    event,
                    NotificationType.TRIP_CANCELLED,
                    "Trip Cancelled",
                    f"The trip from {event.trip.route_label} has been cancelled",
                )
            elif isinstance(event, TripUpdated):
                notifications = await self._multicast(
                    event,
                    NotificationType.TRIP_UPDATE,
                    "Trip Updated",
                    f"The trip from {event.trip.route_label} has been updated",
                )
            else:
                logfire.warn(
                    "No notification mapping for event",
                    lifecycle_event=type(event).__name__,
                )
                return []

            if not notifications:
                return []

            saved = await self.notification_repository.save_many(notifications)
            logfire.info(
                "Notifications created",
                trip_id=str(event.trip.id),
                count=len(saved),
                type=saved[0].type.value,
            )
            return saved

    async def _join_requested(self, event: JoinRequested) -> list[Notification]:
        requester = await self.user_service.get_public_profile(event.actor_id)
        return [
            Notification(
                id=NotificationId(uuid4()),
                recipient_id=event.trip.creator_id,
                sender_id=event.actor_id,
                type=NotificationType.JOIN_REQUEST,
                trip_id=event.trip.id,
                participation_id=event.participation.id,
                title="New Join Request",
                body=(
                    f"{requester.handle} wants to join your trip from "
                    f"{event.trip.route_label}"
                ),
                action_required=True,
                created_at=utcnow(),
            )
        ]

    def _join_decided(self, event: JoinDecided) -> Notification:
        approved = event.decision == Decision.APPROVED
        trip = event.trip
        return Notification(
            id=NotificationId(uuid4()),
            recipient_id=event.participation.user_id,
            sender_id=event.actor_id,
            type=(
                NotificationType.JOIN_APPROVED
                if approved
                else NotificationType.JOIN_REJECTED
            ),
            trip_id=trip.id,
            participation_id=event.participation.id,
            title="Join Request Approved!" if approved else "Join Request Declined",
            body=(
                f"Your request to join the trip from {trip.route_label} "
                f"has been {'approved!' if approved else 'declined.'}"
            ),
            created_at=utcnow(),
        )

    async def _multicast(
        self,
        event: LifecycleEvent,
        notification_type: NotificationType,
        title: str,
        body: str,
    ) -> list[Notification]:
        trip: Trip = event.trip
        approved = await self.participation_repository.find_by_trip(
            trip.id, status=ParticipationStatus.APPROVED
        )
        now = utcnow()
        recipients = dict.fromkeys(
            p.user_id for p in approved if p.user_id != event.actor_id
        )
        return [
            Notification(
                id=NotificationId(uuid4()),
                recipient_id=recipient_id,
                sender_id=event.actor_id,
                type=notification_type,
                trip_id=trip.id,
                title=title,
                body=body,
                created_at=now,
            )
            for recipient_id in recipients
        ]

    async def list_for_user(
        self, user_id: UserId, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        """List a user's notifications, newest first."""
        return await self.notification_repository.find_by_recipient(
            user_id, unread_only=unread_only, limit=limit
        )

    async def mark_read(
        self, notification_id: NotificationId, user_id: UserId
    ) -> Notification:
        """Mark one notification as read.

        Raises:
            NotFoundError: If the notification does not exist
            NotAuthorizedError: If the user is not the recipient
        """
        with logfire.span(
            "notification_service.mark_read",
            notification_id=str(notification_id),
            user_id=str(user_id),
        ):
            notification = await self.notification_repository.find_by_id(
                notification_id
            )
            if not notification:
                raise NotFoundError("Notification", str(notification_id))
            if notification.recipient_id != user_id:
                logfire.warn(
                    "Notification access denied",
                    notification_id=str(notification_id),
                    user_id=str(user_id),
                )
                raise NotAuthorizedError(
                    "mark read", "notification", str(notification_id), str(user_id)
                )
            if notification.is_read:
                return notification

            updated = await self.notification_repository.mark_read(notification_id)
            if updated is None:
                raise NotFoundError("Notification", str(notification_id))
            return updated

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every notification of a user as read.

        Returns:
            Number of notifications that changed
        """
        with logfire.span("notification_service.mark_all_read", user_id=str(user_id)):
            count = await self.notification_repository.mark_all_read(user_id)
            logfire.info("Notifications marked read", user_id=str(user_id), count=count)
            return count

    async def unread_count(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        return await self.notification_repository.count_unread(user_id)
