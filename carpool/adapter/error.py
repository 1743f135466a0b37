"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class RealtimeError(AdapterError):
    """Realtime transport error."""

    pass


class SubscriptionClosedError(RealtimeError):
    """Raised when a closed connection is used to subscribe."""

    pass
