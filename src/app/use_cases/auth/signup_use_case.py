import logging

from src.libs.result import Result, Return
from src.app.repositories.account_repository import DuplicateEmailError
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, AuthProvider
from .dtos import AccountInfo, AuthResponse, SignupCommand
from .errors import ALL_FIELDS_REQUIRED, AuthErrorCode, auth_error
from .validation import build_profile, is_blank, normalize_email, validate_password

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (raw signup intent)
    - Output: Result[AuthResponse] (account + session token)

    Business Logic:
    1. Require email, password and all six profile attributes
    2. Age must be a positive whole number, password at least 6 chars
    3. Reject an already registered email with CONFLICT
    4. Hash the password with bcrypt and create the account (isPro=False)
    5. Issue a 1-hour session token
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher, tokens: TokenIssuer):
        self.uow = uow
        self.hasher = hasher
        self.tokens = tokens

    async def execute(self, command: SignupCommand) -> Result[AuthResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with email, password and profile

        Returns:
            Result[AuthResponse] with the new account and a session token,
            Error(BAD_REQUEST) for missing/invalid fields,
            or Error(CONFLICT) if the email is already registered
        """
        if is_blank(command.email) or not command.password:
            return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, ALL_FIELDS_REQUIRED))

        profile_result = build_profile(command.profile)
        if profile_result.is_err():
            return Return.err(profile_result.error)

        password_validation = validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        email = normalize_email(command.email)

        async with self.uow:
            existing_account = await self.uow.accounts.get_by_email(email)
            if existing_account:
                return Return.err(
                    auth_error(AuthErrorCode.CONFLICT, "User already exists")
                )

            account = Account(
                email=email,
                password_hash=self.hasher.hash(command.password),
                auth_provider=AuthProvider.local,
                profile=profile_result.value.model_dump(),
                is_pro=False,
            )
            try:
                account = await self.uow.accounts.create(account)
            except DuplicateEmailError:
                # Lost a race with a concurrent signup for the same email
                return Return.err(
                    auth_error(AuthErrorCode.CONFLICT, "User already exists")
                )

            await self.uow.commit()

        logger.info(f"Account created: {account.id}")

        token = self.tokens.issue_session(account.id, account.email)
        return Return.ok(
            AuthResponse(
                message="User created successfully",
                user=AccountInfo.from_account(account),
                token=token,
            )
        )
