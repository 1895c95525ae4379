from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Account


class DuplicateEmailError(Exception):
    """Raised by create() when the email is already registered"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Account with email {email} already exists")


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by normalized email address"""
        pass

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account. Raises DuplicateEmailError on email collision."""
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Persist in-memory changes to an existing account"""
        pass
