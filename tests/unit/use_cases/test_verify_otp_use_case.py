from datetime import datetime, timedelta

import pytest

from src.app.use_cases.auth import AuthErrorCode, VerifyOtpUseCase
from src.domain.entities import TokenPurpose

NOW = datetime(2026, 3, 1, 9, 0, 0)


@pytest.fixture
def account_with_code(make_account):
    account = make_account()
    account.start_reset_cycle("482913", NOW + timedelta(minutes=10))
    return account


@pytest.mark.asyncio
async def test_valid_code_issues_reset_token(mock_uow, tokens, account_with_code):
    mock_uow.accounts.get_by_email.return_value = account_with_code
    use_case = VerifyOtpUseCase(mock_uow, tokens, clock=lambda: NOW + timedelta(minutes=9))

    result = await use_case.execute("alice@example.com", "482913")

    assert result.is_ok()
    assert result.value.message == "OTP verified successfully"
    claims = tokens.verify(result.value.reset_token)
    assert claims.purpose == TokenPurpose.password_reset
    assert claims.account_id == str(account_with_code.id)

    # The code stays in place until a password reset consumes it
    assert account_with_code.reset_code == "482913"
    mock_uow.accounts.update.assert_not_called()


@pytest.mark.asyncio
async def test_code_can_be_verified_again_before_expiry(mock_uow, tokens, account_with_code):
    mock_uow.accounts.get_by_email.return_value = account_with_code
    use_case = VerifyOtpUseCase(mock_uow, tokens, clock=lambda: NOW)

    first = await use_case.execute("alice@example.com", "482913")
    second = await use_case.execute("alice@example.com", "482913")

    assert first.is_ok() and second.is_ok()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,code,minutes_later",
    [
        ("alice@example.com", "000000", 1),  # wrong code
        ("alice@example.com", "482913", 10),  # expiry reached
        ("alice@example.com", "482913", 11),  # expired
        ("alice@example.com", "4829130", 1),  # extra digit
    ],
)
async def test_mismatches_share_one_error(
    mock_uow, tokens, account_with_code, email, code, minutes_later
):
    mock_uow.accounts.get_by_email.return_value = account_with_code
    use_case = VerifyOtpUseCase(
        mock_uow, tokens, clock=lambda: NOW + timedelta(minutes=minutes_later)
    )

    result = await use_case.execute(email, code)

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_OR_EXPIRED
    assert result.error.message == "Invalid or expired OTP"


@pytest.mark.asyncio
async def test_unknown_email_same_error(mock_uow, tokens):
    result = await VerifyOtpUseCase(mock_uow, tokens, clock=lambda: NOW).execute(
        "nobody@example.com", "482913"
    )

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_OR_EXPIRED


@pytest.mark.asyncio
async def test_account_without_active_cycle(mock_uow, tokens, make_account):
    mock_uow.accounts.get_by_email.return_value = make_account()

    result = await VerifyOtpUseCase(mock_uow, tokens, clock=lambda: NOW).execute(
        "alice@example.com", "482913"
    )

    assert result.is_err()
    assert result.error.code == AuthErrorCode.INVALID_OR_EXPIRED


@pytest.mark.asyncio
async def test_email_and_code_required(mock_uow, tokens):
    result = await VerifyOtpUseCase(mock_uow, tokens).execute("alice@example.com", "")

    assert result.is_err()
    assert result.error.code == AuthErrorCode.BAD_REQUEST
    assert result.error.message == "Email and OTP are required"
