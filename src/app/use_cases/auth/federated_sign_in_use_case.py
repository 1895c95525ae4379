import logging

from src.libs.result import Result, Return
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AccountInfo, AuthResponse
from .errors import AuthErrorCode, auth_error
from .validation import is_blank, normalize_email

logger = logging.getLogger(__name__)


class FederatedSignInUseCase:
    """
    Use case for Google sign-in of an existing account.

    Business Rules:
    - The account must already exist (NOT_FOUND: sign up first)
    - The federated id is accepted as supplied and is NOT checked against
      the stored one or against the identity provider; a mismatch is only
      logged. Deployments must verify the provider's ID token upstream.
    """

    def __init__(self, uow: UnitOfWork, tokens: TokenIssuer):
        self.uow = uow
        self.tokens = tokens

    async def execute(self, email: str, federated_id: str) -> Result[AuthResponse]:
        if is_blank(email) or is_blank(federated_id):
            return Return.err(
                auth_error(AuthErrorCode.BAD_REQUEST, "Email and Google ID are required")
            )

        async with self.uow:
            account = await self.uow.accounts.get_by_email(normalize_email(email))

        if account is None:
            return Return.err(
                auth_error(AuthErrorCode.NOT_FOUND, "User not found. Please sign up first.")
            )

        if account.federated_id != federated_id:
            logger.warning(
                f"Federated sign-in for account {account.id} with an unmatched provider id"
            )

        token = self.tokens.issue_session(account.id, account.email)
        return Return.ok(
            AuthResponse(
                message="Google sign-in successful",
                user=AccountInfo.from_account(account),
                token=token,
            )
        )
