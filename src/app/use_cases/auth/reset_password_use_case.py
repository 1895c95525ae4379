"""
Reset Password Use Case

Sets a new password using a password-reset token and ends the reset cycle.
"""

import logging
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import TokenPurpose
from .dtos import MessageResponse
from .errors import AuthErrorCode, auth_error
from .validation import is_blank, validate_password

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a password.

    Business Rules:
    - New password must be at least 6 characters, checked before anything else
    - Token must verify AND carry purpose=password-reset; session tokens are rejected
    - Password is re-hashed with bcrypt, reset code and expiry are cleared
    - The token itself stays valid until it expires, so a leaked reset
      token can set the password again within its 15-minute window
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher, tokens: TokenIssuer):
        self.uow = uow
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, reset_token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute reset password use case.

        Args:
            reset_token: Token returned by OTP verification
            new_password: New password to set

        Returns:
            Result with MessageResponse, or Error

        Errors:
            - BAD_REQUEST: missing fields or password too short
            - INVALID_TOKEN: token invalid, expired or not a reset token
            - NOT_FOUND: token subject no longer exists
        """
        if is_blank(reset_token) or not new_password:
            return Return.err(
                auth_error(
                    AuthErrorCode.BAD_REQUEST,
                    "Reset token and new password are required",
                )
            )

        password_validation = validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        claims = self.tokens.verify(reset_token)
        if claims is None:
            return Return.err(
                auth_error(AuthErrorCode.INVALID_TOKEN, "Invalid or expired reset token")
            )
        if claims.purpose != TokenPurpose.password_reset:
            return Return.err(auth_error(AuthErrorCode.INVALID_TOKEN, "Invalid reset token"))

        try:
            account_id = UUID(claims.account_id)
        except ValueError:
            return Return.err(auth_error(AuthErrorCode.INVALID_TOKEN, "Invalid reset token"))

        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(auth_error(AuthErrorCode.NOT_FOUND, "User not found"))

            account.password_hash = self.hasher.hash(new_password)
            account.clear_reset_cycle()
            await self.uow.accounts.update(account)
            await self.uow.commit()

        logger.info(f"Password reset for account {account.id}")

        return Return.ok(MessageResponse(message="Password reset successfully"))
