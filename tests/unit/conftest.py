from datetime import datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.services.credential_hasher import CredentialHasher
from src.app.services.token_issuer import TokenIssuer
from src.domain.entities import Account, AuthProvider

PROFILE = {
    "gender": "female",
    "age": 29,
    "height": "168",
    "goal": "lose weight",
    "activity_level": "moderate",
    "weight": "64",
}


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)
    return uow


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return CredentialHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenIssuer(secret="unit-test-secret")


@pytest.fixture
def make_account(hasher):
    def _make(
        email: str = "alice@example.com",
        password: str = "secret1",
        **overrides,
    ) -> Account:
        fields = dict(
            id=uuid4(),
            email=email,
            password_hash=hasher.hash(password),
            auth_provider=AuthProvider.local,
            profile=dict(PROFILE),
            created_at=datetime(2026, 1, 1),
            updated_at=datetime(2026, 1, 1),
        )
        fields.update(overrides)
        return Account(**fields)

    return _make
