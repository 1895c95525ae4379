"""
Login Use Case

Verifies email + password and issues a session token.
"""

from src.libs.result import Result, Return
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AccountInfo, AuthResponse
from .errors import ALL_FIELDS_REQUIRED, INVALID_CREDENTIALS, AuthErrorCode, auth_error
from .validation import is_blank, normalize_email


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown email and wrong password return the same UNAUTHORIZED error
    - A bcrypt check is spent even when the email is unknown (timing)
    - Federated accounts hold a placeholder hash, so password login fails
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher, tokens: TokenIssuer):
        self.uow = uow
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse containing the session token, or Error
        """
        if is_blank(email) or not password:
            return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, ALL_FIELDS_REQUIRED))

        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))

        if account is None:
            self.hasher.dummy_verify(password)
            return Return.err(auth_error(AuthErrorCode.UNAUTHORIZED, INVALID_CREDENTIALS))

        if not self.hasher.verify(password, account.credential.password_hash):
            return Return.err(auth_error(AuthErrorCode.UNAUTHORIZED, INVALID_CREDENTIALS))

        token = self.tokens.issue_session(account.id, account.email)
        return Return.ok(
            AuthResponse(
                message="Login successful",
                user=AccountInfo.from_account(account),
                token=token,
            )
        )
