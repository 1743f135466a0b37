"""Unit tests for lifecycle hooks."""

from contextlib import asynccontextmanager
from uuid import uuid4

import pytest

from carpool.domain.event import LifecycleHooks, TripUpdated
from carpool.domain.repository import TransactionScope
from carpool.domain.value import UserId
from tests.conftest import make_trip


def make_event() -> TripUpdated:
    creator_id = UserId(uuid4())
    return TripUpdated(trip=make_trip(creator_id), actor_id=creator_id)


class RecordingScope(TransactionScope):
    """Records how each savepoint ended."""

    def __init__(self):
        self.outcomes = []

    @asynccontextmanager
    async def savepoint(self):
        try:
            yield
        except Exception:
            self.outcomes.append("rolled back")
            raise
        self.outcomes.append("released")


class TestLifecycleHooks:
    """Tests for LifecycleHooks.emit."""

    @pytest.mark.asyncio
    async def test_hooks_run_in_registration_order(self):
        calls = []
        hooks = LifecycleHooks()

        async def first(event):
            calls.append("first")

        async def second(event):
            calls.append("second")

        hooks.register("first", first)
        hooks.register("second", second)

        assert await hooks.emit(make_event()) == []
        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_failure_is_reported_and_later_hooks_still_run(self):
        calls = []
        hooks = LifecycleHooks()

        async def broken(event):
            raise RuntimeError("boom")

        async def audit(event):
            calls.append(type(event).__name__)

        hooks.register("notifications", broken)
        hooks.register("audit", audit)

        warnings = await hooks.emit(make_event())

        assert warnings == ["notifications could not be delivered for TripUpdated"]
        assert calls == ["TripUpdated"]

    @pytest.mark.asyncio
    async def test_no_hooks_means_no_warnings(self):
        assert await LifecycleHooks().emit(make_event()) == []

    @pytest.mark.asyncio
    async def test_each_hook_gets_its_own_savepoint(self):
        scope = RecordingScope()
        hooks = LifecycleHooks(transaction_scope=scope)

        async def broken(event):
            raise RuntimeError("statement timeout")

        async def audit(event):
            pass

        hooks.register("notifications", broken)
        hooks.register("audit", audit)

        warnings = await hooks.emit(make_event())

        assert warnings == ["notifications could not be delivered for TripUpdated"]
        assert scope.outcomes == ["rolled back", "released"]
