"""Domain layer errors.

Every error carries a ``kind`` that the interface layer renders as the
machine-readable part of the error response.
"""


class DomainError(Exception):
    """Base domain error."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    kind = "validation_error"


class NotAuthenticatedError(DomainError):
    """Raised when a request carries no valid identity."""

    kind = "not_authenticated"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotAuthorizedError(DomainError):
    """Raised when a user lacks the required relationship to a trip or record."""

    kind = "not_authorized"

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not authorized to {action} {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class MismatchedTripError(DomainError):
    """Raised when a participation is addressed through the wrong trip."""

    kind = "mismatched_trip"

    def __init__(self, participation_id: str, trip_id: str):
        super().__init__(
            f"Participation {participation_id} does not belong to trip {trip_id}"
        )


class ConflictError(DomainError):
    """Request conflicts with the current state of the system."""

    kind = "conflict"


class SelfJoinDeniedError(ConflictError):
    """Raised when a trip creator asks to join their own trip."""

    kind = "self_join_denied"

    def __init__(self, trip_id: str):
        super().__init__(f"Cannot join your own trip {trip_id}")


class DuplicateParticipationError(ConflictError):
    """Raised when a participation already exists for a (trip, user) pair."""

    kind = "duplicate_participation"

    def __init__(self, trip_id: str, user_id: str):
        super().__init__(f"User {user_id} already requested to join trip {trip_id}")


class ParticipationAlreadyDecidedError(ConflictError):
    """Raised when a decided participation is asked to change its decision."""

    kind = "participation_already_decided"

    def __init__(self, participation_id: str, status: str):
        super().__init__(f"Participation {participation_id} is already {status}")


class SelfMessageDeniedError(ConflictError):
    """Raised when a user addresses a direct message to themselves."""

    kind = "self_message_denied"

    def __init__(self) -> None:
        super().__init__("Cannot send message to yourself")


class InvalidTripTransitionError(ConflictError):
    """Raised when a trip status change is not allowed."""

    kind = "invalid_trip_transition"

    def __init__(self, trip_id: str, current: str, requested: str):
        super().__init__(
            f"Trip {trip_id} cannot move from {current} to {requested}"
        )


class DependencyFailureError(DomainError):
    """Raised when the store or the realtime transport is unavailable."""

    kind = "unavailable"

    def __init__(self, dependency: str):
        self.dependency = dependency
        super().__init__(f"{dependency} unavailable")
