"""In-memory transaction scope for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from carpool.domain.repository.transaction import TransactionScope


class InMemoryTransactionScope(TransactionScope):
    """The in-memory store has no transactions; savepoints are no-ops."""

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        yield
