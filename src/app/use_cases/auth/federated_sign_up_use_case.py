import logging

from src.libs.result import Result, Return
from src.app.repositories.account_repository import DuplicateEmailError
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, AuthProvider
from .dtos import AccountInfo, AuthResponse, FederatedSignUpCommand
from .errors import ALL_FIELDS_REQUIRED, AuthErrorCode, auth_error
from .validation import build_profile, is_blank, normalize_email

logger = logging.getLogger(__name__)

ALREADY_REGISTERED = "User already exists. Please sign in instead."


class FederatedSignUpUseCase:
    """
    Use case for creating an account through Google.

    Business Rules:
    - Same profile requirements as a password signup
    - Existing email returns CONFLICT
    - The account stores the provider id and an unusable placeholder
      password hash, so password login never succeeds for it
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher, tokens: TokenIssuer):
        self.uow = uow
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, command: FederatedSignUpCommand) -> Result[AuthResponse]:
        if is_blank(command.email) or is_blank(command.federated_id):
            return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, ALL_FIELDS_REQUIRED))

        profile_result = build_profile(command.profile)
        if profile_result.is_err():
            return Return.err(profile_result.error)

        email = normalize_email(command.email)

        async with self.uow:
            if await self.uow.accounts.get_by_email(email):
                return Return.err(auth_error(AuthErrorCode.CONFLICT, ALREADY_REGISTERED))

            account = Account(
                email=email,
                password_hash=self.hasher.placeholder_hash(),
                auth_provider=AuthProvider.google,
                federated_id=command.federated_id.strip(),
                profile=profile_result.value.model_dump(),
                is_pro=False,
            )
            try:
                account = await self.uow.accounts.create(account)
            except DuplicateEmailError:
                return Return.err(auth_error(AuthErrorCode.CONFLICT, ALREADY_REGISTERED))

            await self.uow.commit()

        logger.info(f"Account created via {AuthProvider.google.value}: {account.id}")

        token = self.tokens.issue_session(account.id, account.email)
        return Return.ok(
            AuthResponse(
                message="Google sign-up successful",
                user=AccountInfo.from_account(account),
                token=token,
            )
        )
