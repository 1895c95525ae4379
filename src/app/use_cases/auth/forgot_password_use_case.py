"""
Forgot Password Use Case

Starts a password reset cycle: stores a fresh 6-digit code with a
10-minute expiry on the account and sends it to the account's email.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from src.libs.result import Result, Return
from src.app.services.notification_sender import INotificationSender
from src.app.services.otp_generator import OTPGenerator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import ForgotPasswordResponse
from .errors import EMAIL_REQUIRED, AuthErrorCode, auth_error
from .validation import is_blank, normalize_email

logger = logging.getLogger(__name__)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset code.

    Business Rules:
    - Unknown email returns NOT_FOUND
    - Code and expiry are committed before the email is sent
    - A failed delivery returns DELIVERY_FAILED but the stored code stands
    - Calling again overwrites the code and expiry (last writer wins)
    - Rate limiting is the gateway's job, not this use case's
    """

    def __init__(
        self,
        uow: UnitOfWork,
        otp_generator: OTPGenerator,
        sender: INotificationSender,
        code_ttl: timedelta = timedelta(minutes=10),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.otp_generator = otp_generator
        self.sender = sender
        self.code_ttl = code_ttl
        self.clock = clock

    async def execute(self, email: str) -> Result[ForgotPasswordResponse]:
        """
        Execute forgot password use case.

        Args:
            email: Email address of the account to reset

        Returns:
            Result with ForgotPasswordResponse, or Error

        Errors:
            - BAD_REQUEST: email missing
            - NOT_FOUND: no account with this email
            - DELIVERY_FAILED: the code could not be sent
        """
        if is_blank(email):
            return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, EMAIL_REQUIRED))

        email = normalize_email(email)

        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)
            if account is None:
                return Return.err(
                    auth_error(
                        AuthErrorCode.NOT_FOUND, "User with this email does not exist"
                    )
                )

            code = self.otp_generator.generate()
            account.start_reset_cycle(code, self.clock() + self.code_ttl)
            await self.uow.accounts.update(account)
            await self.uow.commit()

        logger.info(f"Password reset code issued for account {account.id}")

        delivery = await self.sender.send_reset_code(email, code)
        if not delivery.delivered:
            logger.error(
                f"Reset code delivery failed for account {account.id}: {delivery.error}"
            )
            return Return.err(
                auth_error(AuthErrorCode.DELIVERY_FAILED, "Failed to send OTP email")
            )

        return Return.ok(
            ForgotPasswordResponse(
                message="OTP sent to your email successfully",
                email=email,
            )
        )
