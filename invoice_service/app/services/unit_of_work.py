"""Unit of Work Interface

Defines the transaction boundary used by use cases.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Transaction boundary for a single use case invocation

    commit() returning means the write is durable; failures surface
    as InfrastructureError.
    """

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
