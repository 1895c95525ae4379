"""
Account Entity

Identity, credential and fitness profile of a single user.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, PositiveInt
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import AuthProvider


class ProfileAttributes(BaseModel):
    """Fitness profile carried with the account. Opaque to authentication."""

    gender: str
    age: PositiveInt
    height: str
    goal: str
    activity_level: str
    weight: str


@dataclass(frozen=True)
class LocalCredential:
    password_hash: str


@dataclass(frozen=True)
class FederatedCredential:
    """
    Account created through an identity provider.

    password_hash is a placeholder no plaintext verifies against, so password
    login is impossible for these accounts.
    """

    provider: AuthProvider
    subject: str
    password_hash: str


Credential = Union[LocalCredential, FederatedCredential]


class Account(SQLModel, table=True):
    """
    Account entity - a registered user.

    Business Rules:
    - Email is unique, trimmed and lower-cased
    - password_hash is a bcrypt digest, never the plaintext
    - reset_code and reset_code_expires_at are set and cleared together
    - A reset code whose expiry has passed is dead even if still stored
    - Accounts are never hard-deleted
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)

    auth_provider: AuthProvider = Field(default=AuthProvider.local)
    federated_id: Optional[str] = Field(default=None, max_length=255)

    profile: dict = Field(default_factory=dict, sa_column=Column(JSON))
    is_pro: bool = Field(default=False)

    # Password reset cycle
    reset_code: Optional[str] = Field(default=None, max_length=6)
    reset_code_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_account_federated_id", "federated_id"),)

    @property
    def credential(self) -> Credential:
        if self.auth_provider == AuthProvider.local:
            return LocalCredential(password_hash=self.password_hash)
        return FederatedCredential(
            provider=self.auth_provider,
            subject=self.federated_id or "",
            password_hash=self.password_hash,
        )

    @property
    def profile_attributes(self) -> ProfileAttributes:
        return ProfileAttributes(**self.profile)

    def start_reset_cycle(self, code: str, expires_at: datetime) -> None:
        self.reset_code = code
        self.reset_code_expires_at = expires_at

    def clear_reset_cycle(self) -> None:
        self.reset_code = None
        self.reset_code_expires_at = None

    def has_live_reset_code(self, now: datetime) -> bool:
        return (
            self.reset_code is not None
            and self.reset_code_expires_at is not None
            and self.reset_code_expires_at > now
        )
