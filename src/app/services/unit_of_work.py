from abc import ABC, abstractmethod

from src.app.repositories.account_repository import IAccountRepository


class UnitOfWork(ABC):
    """
    Transaction boundary around account persistence.

    Use cases enter it with `async with`, read and write through `accounts`,
    and call commit() explicitly. Leaving the block because of an exception
    rolls back whatever was not committed.
    """

    accounts: IAccountRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        """Bind the repositories to the current transaction"""

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb):
        """Roll back uncommitted work when the block raised"""

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
