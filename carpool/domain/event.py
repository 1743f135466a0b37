"""Trip lifecycle events and post-write hooks.

Participation and trip mutations write their state change first and then
emit an event. Hooks (the notification dispatcher in production) react to
the event. Each hook runs in its own savepoint, so a failing hook, including
one whose query aborts, is rolled back alone. It is logged and reported back
as a warning and never undoes the state change that triggered it.
"""

from contextlib import nullcontext
from typing import Awaitable, Callable, Generic, TypeVar

import logfire
from pydantic import BaseModel, Field

from carpool.domain.model.common import DomainModel
from carpool.domain.model.participation import Participation
from carpool.domain.model.trip import Trip
from carpool.domain.repository.transaction import TransactionScope
from carpool.domain.value import Decision, UserId


class LifecycleEvent(DomainModel):
    """Something happened to a trip, caused by ``actor_id``."""

    trip: Trip
    actor_id: UserId


class JoinRequested(LifecycleEvent):
    """A user asked to join a trip."""

    participation: Participation


class JoinDecided(LifecycleEvent):
    """The trip creator approved or rejected a join request."""

    participation: Participation
    decision: Decision


class TripUpdated(LifecycleEvent):
    """The creator changed trip details."""

    pass


class TripCancelled(LifecycleEvent):
    """The creator cancelled the trip."""

    pass


LifecycleHook = Callable[[LifecycleEvent], Awaitable[object]]

T = TypeVar("T")


class TransitionResult(BaseModel, Generic[T]):
    """Outcome of a state transition plus any non-fatal hook warnings."""

    value: T
    warnings: list[str] = Field(default_factory=list)


class LifecycleHooks:
    """Ordered list of callbacks run after a lifecycle mutation is written."""

    def __init__(self, transaction_scope: TransactionScope | None = None) -> None:
        """Initialize hooks.

        Args:
            transaction_scope: Savepoint source; hooks share the caller's
                transaction when None
        """
        self._transaction_scope = transaction_scope
        self._hooks: list[tuple[str, LifecycleHook]] = []

    def _isolated(self):
        if self._transaction_scope is None:
            return nullcontext()
        return self._transaction_scope.savepoint()

    def register(self, name: str, hook: LifecycleHook) -> None:
        """Register a hook.

        Args:
            name: Short label used in logs and warnings (e.g. "notifications")
            hook: Async callable receiving the event
        """
        self._hooks.append((name, hook))

    async def emit(self, event: LifecycleEvent) -> list[str]:
        """Run every hook for an event.

        Args:
            event: The lifecycle event

        Returns:
            Warning messages for hooks that failed
        """
        warnings: list[str] = []
        event_name = type(event).__name__
        for name, hook in self._hooks:
            try:
                async with self._isolated():
                    await hook(event)
            except Exception as e:
                logfire.warn(
                    "Lifecycle hook failed",
                    hook=name,
                    lifecycle_event=event_name,
                    trip_id=str(event.trip.id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                warnings.append(f"{name} could not be delivered for {event_name}")
        return warnings
