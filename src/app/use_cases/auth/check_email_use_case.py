from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import CheckEmailResponse
from .errors import EMAIL_REQUIRED, AuthErrorCode, auth_error
from .validation import is_blank, normalize_email


class CheckEmailUseCase:
    """Reports whether an email is registered. Read-only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> Result[CheckEmailResponse]:
        if is_blank(email):
            return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, EMAIL_REQUIRED))

        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))

        return Return.ok(CheckEmailResponse(exists=account is not None))
