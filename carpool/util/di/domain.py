"""Domain layer DI providers."""

from dishka import Scope, provide

from carpool.config import AuthSettings, MessagingSettings
from carpool.domain.event import LifecycleHooks
from carpool.domain.repository import (
    MessageRepository,
    NotificationRepository,
    ParticipationRepository,
    TransactionScope,
    TripRepository,
    UserRepository,
)
from carpool.domain.service import (
    AccessService,
    JWTService,
    MessagingService,
    NotificationService,
    ParticipationService,
    RealtimePublisher,
    TripService,
    UserService,
)
from carpool.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_access_service(
        self,
        trip_repository: TripRepository,
        participation_repository: ParticipationRepository,
    ) -> AccessService:
        """Provide trip access domain service."""
        return AccessService(
            trip_repository=trip_repository,
            participation_repository=participation_repository,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        participation_repository: ParticipationRepository,
        user_service: UserService,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            participation_repository=participation_repository,
            user_service=user_service,
        )

    @provide
    def get_lifecycle_hooks(
        self,
        notification_service: NotificationService,
        transaction_scope: TransactionScope,
    ) -> LifecycleHooks:
        """Provide lifecycle hooks with the notification dispatcher registered.

        Each hook runs in a savepoint of the request transaction.
        """
        hooks = LifecycleHooks(transaction_scope=transaction_scope)
        hooks.register("notifications", notification_service.handle)
        return hooks

    @provide
    def get_trip_service(
        self,
        trip_repository: TripRepository,
        access_service: AccessService,
        hooks: LifecycleHooks,
    ) -> TripService:
        """Provide trip domain service."""
        return TripService(
            trip_repository=trip_repository,
            access_service=access_service,
            hooks=hooks,
        )

    @provide
    def get_participation_service(
        self,
        participation_repository: ParticipationRepository,
        access_service: AccessService,
        hooks: LifecycleHooks,
    ) -> ParticipationService:
        """Provide participation domain service."""
        return ParticipationService(
            participation_repository=participation_repository,
            access_service=access_service,
            hooks=hooks,
        )

    @provide
    def get_messaging_service(
        self,
        message_repository: MessageRepository,
        participation_repository: ParticipationRepository,
        access_service: AccessService,
        user_service: UserService,
        messaging_settings: MessagingSettings,
        realtime: RealtimePublisher,
    ) -> MessagingService:
        """Provide messaging domain service."""
        return MessagingService(
            message_repository=message_repository,
            participation_repository=participation_repository,
            access_service=access_service,
            user_service=user_service,
            messaging_settings=messaging_settings,
            realtime=realtime,
        )
