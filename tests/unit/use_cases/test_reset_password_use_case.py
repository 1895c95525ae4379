"""
Unit tests for ResetPasswordUseCase

Tests all business logic with mocked dependencies.
"""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.app.services.token_issuer import TokenIssuer
from src.app.use_cases.auth import AuthErrorCode, ResetPasswordUseCase
from src.domain.base import utcnow


@pytest.fixture
def account_in_reset(make_account):
    account = make_account(password="secret1")
    account.start_reset_cycle("482913", datetime(2026, 3, 1, 9, 10))
    return account


@pytest.mark.asyncio
async def test_successful_password_reset(mock_uow, hasher, tokens, account_in_reset):
    """Password is re-hashed and the reset cycle cleared"""
    # Arrange
    mock_uow.accounts.get_by_id.return_value = account_in_reset
    reset_token = tokens.issue_reset_token(account_in_reset.id, account_in_reset.email)
    use_case = ResetPasswordUseCase(mock_uow, hasher, tokens)

    # Act
    result = await use_case.execute(reset_token, "newpass2")

    # Assert
    assert result.is_ok()
    assert result.value.message == "Password reset successfully"

    mock_uow.accounts.get_by_id.assert_called_once_with(account_in_reset.id)
    assert hasher.verify("newpass2", account_in_reset.password_hash)
    assert not hasher.verify("secret1", account_in_reset.password_hash)
    assert account_in_reset.reset_code is None
    assert account_in_reset.reset_code_expires_at is None
    mock_uow.accounts.update.assert_called_once_with(account_in_reset)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_short_password_does_not_touch_account(mock_uow, hasher, tokens, account_in_reset):
    original_hash = account_in_reset.password_hash
    reset_token = tokens.issue_reset_token(account_in_reset.id, account_in_reset.email)

    result = await ResetPasswordUseCase(mock_uow, hasher, tokens).execute(reset_token, "abc12")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.BAD_REQUEST
    assert result.error.message == "Password must be at least 6 characters long"
    assert account_in_reset.password_hash == original_hash
    assert account_in_reset.reset_code == "482913"
    mock_uow.accounts.get_by_id.assert_not_called()
    mock_uow.accounts.update.assert_not_called()


@pytest.mark.asyncio
async def test_session_token_is_rejected(mock_uow, hasher, tokens, account_in_reset):
    session_token = tokens.issue_session(account_in_reset.id, account_in_reset.email)

    result = await ResetPasswordUseCase(mock_uow, hasher, tokens).execute(session_token, "newpass2")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_TOKEN
    assert result.error.message == "Invalid reset token"
    mock_uow.accounts.update.assert_not_called()


@pytest.mark.asyncio
async def test_expired_reset_token(mock_uow, hasher, tokens, account_in_reset):
    issued_at = utcnow() - timedelta(minutes=16)
    old_issuer = TokenIssuer(secret="unit-test-secret", clock=lambda: issued_at)
    reset_token = old_issuer.issue_reset_token(account_in_reset.id, account_in_reset.email)

    result = await ResetPasswordUseCase(mock_uow, hasher, tokens).execute(reset_token, "newpass2")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_TOKEN
    assert result.error.message == "Invalid or expired reset token"


@pytest.mark.asyncio
async def test_garbage_token(mock_uow, hasher, tokens):
    result = await ResetPasswordUseCase(mock_uow, hasher, tokens).execute("garbage", "newpass2")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_TOKEN


@pytest.mark.asyncio
async def test_token_subject_not_a_uuid(mock_uow, hasher, tokens):
    reset_token = tokens.issue_reset_token("not-a-uuid", "alice@example.com")

    result = await ResetPasswordUseCase(mock_uow, hasher, tokens).execute(reset_token, "newpass2")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_TOKEN


@pytest.mark.asyncio
async def test_account_gone(mock_uow, hasher, tokens):
    reset_token = tokens.issue_reset_token(uuid4(), "ghost@example.com")

    result = await ResetPasswordUseCase(mock_uow, hasher, tokens).execute(reset_token, "newpass2")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.NOT_FOUND
    assert result.error.message == "User not found"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_reset_token_replays_within_its_window(mock_uow, hasher, tokens, account_in_reset):
    """The token stays usable until expiry; a second reset succeeds too"""
    mock_uow.accounts.get_by_id.return_value = account_in_reset
    reset_token = tokens.issue_reset_token(account_in_reset.id, account_in_reset.email)
    use_case = ResetPasswordUseCase(mock_uow, hasher, tokens)

    first = await use_case.execute(reset_token, "newpass2")
    second = await use_case.execute(reset_token, "newpass3")

    assert first.is_ok() and second.is_ok()
    assert hasher.verify("newpass3", account_in_reset.password_hash)


@pytest.mark.asyncio
@pytest.mark.parametrize("reset_token,new_password", [(None, "newpass2"), ("token", None), ("", "")])
async def test_missing_fields(mock_uow, hasher, tokens, reset_token, new_password):
    result = await ResetPasswordUseCase(mock_uow, hasher, tokens).execute(reset_token, new_password)

    assert result.is_err()
    assert result.error.code == AuthErrorCode.BAD_REQUEST
    assert result.error.message == "Reset token and new password are required"
