"""Transaction boundary port."""

from abc import ABC, abstractmethod
from typing import AsyncContextManager


class TransactionScope(ABC):
    """Nested transaction inside the request's unit of work."""

    @abstractmethod
    def savepoint(self) -> AsyncContextManager[None]:
        """Open a savepoint.

        Work that fails inside the block is rolled back to the savepoint and
        the error is re-raised. Writes made before the block stay pending in
        the outer transaction.
        """
        pass
