"""Abstract interface for atomic units of work."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

# Opaque handle for an open transaction; stores accept it as ``tx``.
Transaction = Any


class ITransactionManager(ABC):
    """Opens transactions that commit together or not at all."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[Transaction]:
        """
        Open a write transaction.

        Commits on normal exit, rolls back every write on exception.
        Concurrent write transactions are serialized.
        """
        pass
