"""
Load Profile Use Case

Loads the account behind a verified session token.
"""

from uuid import UUID

from pydantic import BaseModel

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import AccountInfo
from src.app.use_cases.auth.errors import AuthErrorCode, auth_error


class ProfileResponse(BaseModel):
    """GET /auth/me response payload"""

    user: AccountInfo


class LoadProfileUseCase:
    """
    Use case for reading the current account.

    Business Rules:
    - Caller has already verified a session token (not a reset token)
    - Account must still exist
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[ProfileResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)

        if account is None:
            return Return.err(auth_error(AuthErrorCode.NOT_FOUND, "User not found"))

        return Return.ok(ProfileResponse(user=AccountInfo.from_account(account)))
