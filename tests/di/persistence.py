"""Mock persistence providers for testing."""

from dishka import Scope, provide

from carpool.domain.repository import (
    MessageRepository,
    NotificationRepository,
    ParticipationRepository,
    TransactionScope,
    TripRepository,
    UserRepository,
)
from carpool.persistence.repository.inmemory import (
    InMemoryMessageRepository,
    InMemoryNotificationRepository,
    InMemoryParticipationRepository,
    InMemoryStore,
    InMemoryTransactionScope,
    InMemoryTripRepository,
    InMemoryUserRepository,
)
from carpool.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store lives as long as the container, so each test (which builds
    its own container) starts empty while requests inside one test share data.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the in-memory tables."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, store: InMemoryStore) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_trip_repository(self, store: InMemoryStore) -> TripRepository:
        """Provide in-memory trip repository."""
        return InMemoryTripRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_participation_repository(
        self, store: InMemoryStore
    ) -> ParticipationRepository:
        """Provide in-memory participation repository."""
        return InMemoryParticipationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(self, store: InMemoryStore) -> MessageRepository:
        """Provide in-memory message repository."""
        return InMemoryMessageRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, store: InMemoryStore
    ) -> NotificationRepository:
        """Provide in-memory notification repository."""
        return InMemoryNotificationRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_transaction_scope(self) -> TransactionScope:
        """Provide no-op savepoints."""
        return InMemoryTransactionScope()
