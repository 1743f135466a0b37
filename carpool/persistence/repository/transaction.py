"""PostgreSQL savepoints for the request session."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from carpool.domain.repository import TransactionScope


class PostgresTransactionScope(TransactionScope):
    """Savepoints on the request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        # An aborted statement inside the block only poisons the savepoint
        async with self.session.begin_nested():
            yield
