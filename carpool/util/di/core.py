"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from carpool.config import AuthSettings, MessagingSettings, RealtimeSettings, Settings
from carpool.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_messaging_settings(self, settings: Settings) -> MessagingSettings:
        """Provide messaging settings."""
        return settings.messaging

    @provide(scope=Scope.APP)
    def provide_realtime_settings(self, settings: Settings) -> RealtimeSettings:
        """Provide realtime settings."""
        return settings.realtime
