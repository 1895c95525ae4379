"""
Verify OTP Use Case

Exchanges a live reset code for a short-lived password-reset token.
"""

import secrets
from datetime import datetime
from typing import Callable

from src.libs.result import Result, Return
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import VerifyOtpResponse
from .errors import AuthErrorCode, auth_error
from .validation import is_blank, normalize_email


class VerifyOtpUseCase:
    """
    Use case for verifying a password reset code.

    Business Rules:
    - Succeeds only when email, code and a strictly future expiry all match
    - Every mismatch returns the same INVALID_OR_EXPIRED error
    - The stored code is NOT cleared here; it stays usable until it
      expires or a password reset consumes it
    - Issues a 15-minute token with purpose=password-reset
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tokens: TokenIssuer,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.tokens = tokens
        self.clock = clock

    async def execute(self, email: str, code: str) -> Result[VerifyOtpResponse]:
        if is_blank(email) or is_blank(code):
            return Return.err(
                auth_error(AuthErrorCode.BAD_REQUEST, "Email and OTP are required")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))

        if (
            account is None
            or not account.has_live_reset_code(self.clock())
            or not secrets.compare_digest(
                account.reset_code.encode("utf-8"), code.strip().encode("utf-8")
            )
        ):
            return Return.err(
                auth_error(AuthErrorCode.INVALID_OR_EXPIRED, "Invalid or expired OTP")
            )

        reset_token = self.tokens.issue_reset_token(account.id, account.email)
        return Return.ok(
            VerifyOtpResponse(message="OTP verified successfully", reset_token=reset_token)
        )
