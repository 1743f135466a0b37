"""Realtime transport providers."""

from dishka import Scope, alias, provide

from carpool.adapter.realtime import InProcessRealtimeHub
from carpool.config import RealtimeSettings
from carpool.domain.service import RealtimePublisher
from carpool.util.di.base import ProviderBase


class ProdRealtimeProvider(ProviderBase):
    """Realtime hub provider - concrete, one hub per process."""

    @provide(scope=Scope.APP)
    def get_hub(self, realtime_settings: RealtimeSettings) -> InProcessRealtimeHub:
        """Provide the in-process realtime hub."""
        return InProcessRealtimeHub(queue_size=realtime_settings.subscriber_queue_size)

    publisher = alias(source=InProcessRealtimeHub, provides=RealtimePublisher)
