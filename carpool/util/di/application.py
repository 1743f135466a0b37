"""Application layer DI providers."""

from dishka import Scope, provide

from carpool.application.usecase.auth import AuthenticateUseCase
from carpool.application.usecase.chat import (
    ListGroupMessagesUseCase,
    ListGroupParticipantsUseCase,
    SendGroupMessageUseCase,
)
from carpool.application.usecase.message import (
    GetUnreadMessageCountUseCase,
    ListDirectMessagesUseCase,
    MarkMessageReadUseCase,
    SendDirectMessageUseCase,
)
from carpool.application.usecase.notification import (
    GetUnreadNotificationCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from carpool.application.usecase.participation import (
    DecideParticipationUseCase,
    ListParticipantsUseCase,
    RequestJoinUseCase,
)
from carpool.application.usecase.trip import (
    CreateTripUseCase,
    DeleteTripUseCase,
    GetTripUseCase,
    ListTripsUseCase,
    UpdateTripUseCase,
)
from carpool.domain.service import (
    JWTService,
    MessagingService,
    NotificationService,
    ParticipationService,
    TripService,
    UserService,
)
from carpool.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_authenticate_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> AuthenticateUseCase:
        """Provide authenticate use case."""
        return AuthenticateUseCase(jwt_service=jwt_service, user_service=user_service)

    # Trip use cases
    @provide
    def get_create_trip_use_case(
        self, trip_service: TripService, user_service: UserService
    ) -> CreateTripUseCase:
        """Provide create trip use case."""
        return CreateTripUseCase(trip_service=trip_service, user_service=user_service)

    @provide
    def get_list_trips_use_case(
        self,
        trip_service: TripService,
        participation_service: ParticipationService,
        user_service: UserService,
    ) -> ListTripsUseCase:
        """Provide list trips use case."""
        return ListTripsUseCase(
            trip_service=trip_service,
            participation_service=participation_service,
            user_service=user_service,
        )

    @provide
    def get_get_trip_use_case(
        self, trip_service: TripService, user_service: UserService
    ) -> GetTripUseCase:
        """Provide get trip use case."""
        return GetTripUseCase(trip_service=trip_service, user_service=user_service)

    @provide
    def get_update_trip_use_case(
        self, trip_service: TripService, user_service: UserService
    ) -> UpdateTripUseCase:
        """Provide update trip use case."""
        return UpdateTripUseCase(trip_service=trip_service, user_service=user_service)

    @provide
    def get_delete_trip_use_case(self, trip_service: TripService) -> DeleteTripUseCase:
        """Provide delete trip use case."""
        return DeleteTripUseCase(trip_service=trip_service)

    # Participation use cases
    @provide
    def get_request_join_use_case(
        self, participation_service: ParticipationService, user_service: UserService
    ) -> RequestJoinUseCase:
        """Provide request join use case."""
        return RequestJoinUseCase(
            participation_service=participation_service, user_service=user_service
        )

    @provide
    def get_decide_participation_use_case(
        self, participation_service: ParticipationService, user_service: UserService
    ) -> DecideParticipationUseCase:
        """Provide decide participation use case."""
        return DecideParticipationUseCase(
            participation_service=participation_service, user_service=user_service
        )

    @provide
    def get_list_participants_use_case(
        self, participation_service: ParticipationService, user_service: UserService
    ) -> ListParticipantsUseCase:
        """Provide list participants use case."""
        return ListParticipantsUseCase(
            participation_service=participation_service, user_service=user_service
        )

    # Direct message use cases
    @provide
    def get_send_direct_message_use_case(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> SendDirectMessageUseCase:
        """Provide send direct message use case."""
        return SendDirectMessageUseCase(
            messaging_service=messaging_service, user_service=user_service
        )

    @provide
    def get_mark_message_read_use_case(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> MarkMessageReadUseCase:
        """Provide mark message read use case."""
        return MarkMessageReadUseCase(
            messaging_service=messaging_service, user_service=user_service
        )

    @provide
    def get_list_direct_messages_use_case(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> ListDirectMessagesUseCase:
        """Provide list direct messages use case."""
        return ListDirectMessagesUseCase(
            messaging_service=messaging_service, user_service=user_service
        )

    @provide
    def get_unread_message_count_use_case(
        self, messaging_service: MessagingService
    ) -> GetUnreadMessageCountUseCase:
        """Provide unread message count use case."""
        return GetUnreadMessageCountUseCase(messaging_service=messaging_service)

    # Group chat use cases
    @provide
    def get_send_group_message_use_case(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> SendGroupMessageUseCase:
        """Provide send group message use case."""
        return SendGroupMessageUseCase(
            messaging_service=messaging_service, user_service=user_service
        )

    @provide
    def get_list_group_messages_use_case(
        self, messaging_service: MessagingService, user_service: UserService
    ) -> ListGroupMessagesUseCase:
        """Provide list group messages use case."""
        return ListGroupMessagesUseCase(
            messaging_service=messaging_service, user_service=user_service
        )

    @provide
    def get_list_group_participants_use_case(
        self, messaging_service: MessagingService
    ) -> ListGroupParticipantsUseCase:
        """Provide list group participants use case."""
        return ListGroupParticipantsUseCase(messaging_service=messaging_service)

    # Notification use cases
    @provide
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide
    def get_mark_all_notifications_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllNotificationsReadUseCase:
        """Provide mark all notifications read use case."""
        return MarkAllNotificationsReadUseCase(
            notification_service=notification_service
        )

    @provide
    def get_unread_notification_count_use_case(
        self, notification_service: NotificationService
    ) -> GetUnreadNotificationCountUseCase:
        """Provide unread notification count use case."""
        return GetUnreadNotificationCountUseCase(
            notification_service=notification_service
        )
