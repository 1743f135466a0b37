"""Base class for domain services."""


class Service:
    """Marker base for services that coordinate trips, members and messages.

    Services receive repositories and settings through DI and hold no
    request state of their own.
    """
