from datetime import datetime, timedelta
from typing import Callable, Optional, Union

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from config import ApplicationConfig
from src.libs.result import Error
from src.api.error import ClientError, ServerError
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.notification_sender import INotificationSender
from src.app.services.otp_generator import OTPGenerator
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthErrorCode,
    AuthResponse,
    CheckEmailResponse,
    CheckEmailUseCase,
    FederatedSignInUseCase,
    FederatedSignUpCommand,
    FederatedSignUpUseCase,
    ForgotPasswordResponse,
    ForgotPasswordUseCase,
    LoginUseCase,
    MessageResponse,
    ProfileInput,
    ResetPasswordUseCase,
    SignupCommand,
    SignupUseCase,
    VerifyOtpResponse,
    VerifyOtpUseCase,
)
from src.depends import (
    get_clock,
    get_credential_hasher,
    get_notification_sender,
    get_otp_generator,
    get_token_issuer,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Duplicate emails are reported as 400, which existing clients expect
ERROR_STATUS = {
    AuthErrorCode.BAD_REQUEST.value: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.CONFLICT.value: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.INVALID_OR_EXPIRED.value: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.INVALID_TOKEN.value: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.UNAUTHORIZED.value: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.NOT_FOUND.value: status.HTTP_404_NOT_FOUND,
}


def raise_for_error(error: Error):
    """Map a use case error to the HTTP error the exception handlers render."""
    if error.code == AuthErrorCode.DELIVERY_FAILED.value:
        raise ServerError(error, expose=True)
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


# Strict so JSON booleans are rejected instead of becoming 1 or "1"
Scalar = Union[StrictStr, StrictInt, StrictFloat]


class ProfileRequest(BaseModel):
    """Fitness profile fields, named as the mobile client sends them"""

    model_config = ConfigDict(populate_by_name=True)

    gender: Optional[Scalar] = Field(default=None, alias="Gender")
    age: Optional[Scalar] = Field(default=None, alias="Age")
    height: Optional[Scalar] = Field(default=None, alias="Height")
    goal: Optional[Scalar] = Field(default=None, alias="Goal")
    activity_level: Optional[Scalar] = Field(default=None, alias="ActivityLevel")
    weight: Optional[Scalar] = Field(default=None, alias="Weight")

    def to_profile(self) -> ProfileInput:
        return ProfileInput(
            gender=self.gender,
            age=self.age,
            height=self.height,
            goal=self.goal,
            activity_level=self.activity_level,
            weight=self.weight,
        )


def _as_text(value: Optional[Scalar]) -> Optional[str]:
    return None if value is None else str(value)


class SignupRequest(ProfileRequest):
    """
    Signup HTTP request payload

    Every field is optional here so that missing fields come back as
    400 "All fields are required" from the use case.
    """

    email: Optional[str] = None
    password: Optional[str] = None


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """
    Create an account with email + password and a fitness profile.

    Raises:
        - 400 Bad Request: Missing/invalid fields or email already registered
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        email=request.email, password=request.password, profile=request.to_profile()
    )

    result = await SignupUseCase(uow, hasher, tokens).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """
    Authenticate with email + password and receive a 1-hour session token.

    Raises:
        - 400 Bad Request: Missing fields
        - 401 Unauthorized: Unknown email or wrong password (same response)
        - 500 Internal Server Error: Server error
    """
    result = await LoginUseCase(uow, hasher, tokens).execute(request.email, request.password)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class EmailRequest(BaseModel):
    email: Optional[str] = None


@router.post("/checkEmail", status_code=status.HTTP_200_OK, response_model=CheckEmailResponse)
async def check_email(request: EmailRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """Report whether an email is already registered."""
    result = await CheckEmailUseCase(uow).execute(request.email)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=ForgotPasswordResponse
)
async def forgot_password(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    otp_generator: OTPGenerator = Depends(get_otp_generator),
    sender: INotificationSender = Depends(get_notification_sender),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Send a 6-digit reset code, valid for 10 minutes, to the account's email.

    Security:
        - Rate limiting must be applied in front of this endpoint

    Raises:
        - 400 Bad Request: Email missing
        - 404 Not Found: No account with this email
        - 500 Internal Server Error: Email could not be sent
    """
    use_case = ForgotPasswordUseCase(
        uow,
        otp_generator,
        sender,
        code_ttl=timedelta(minutes=ApplicationConfig.OTP_TTL_MINUTES),
        clock=clock,
    )
    result = await use_case.execute(request.email)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class VerifyOtpRequest(BaseModel):
    email: Optional[str] = None
    otp: Optional[Union[StrictStr, StrictInt]] = None


@router.post("/verify-otp", status_code=status.HTTP_200_OK, response_model=VerifyOtpResponse)
async def verify_otp(
    request: VerifyOtpRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenIssuer = Depends(get_token_issuer),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Exchange a live reset code for a 15-minute password-reset token.

    Raises:
        - 400 Bad Request: Missing fields, or invalid/expired code
    """
    result = await VerifyOtpUseCase(uow, tokens, clock=clock).execute(
        request.email, _as_text(request.otp)
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reset_token: Optional[str] = Field(default=None, alias="resetToken")
    new_password: Optional[str] = Field(default=None, alias="newPassword")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """
    Set a new password with a password-reset token.

    Raises:
        - 400 Bad Request: Missing fields, short password, invalid/expired
          token or a token that is not a reset token
        - 404 Not Found: Account no longer exists
    """
    result = await ResetPasswordUseCase(uow, hasher, tokens).execute(
        request.reset_token, request.new_password
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class GoogleSignInRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    google_id: Optional[Union[StrictStr, StrictInt]] = Field(default=None, alias="googleId")
    name: Optional[str] = None


@router.post("/google-signin", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def google_signin(
    request: GoogleSignInRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """
    Sign in an existing account through Google.

    Security:
        - googleId is not verified with Google here; the client's ID token
          must be verified upstream before this endpoint is trusted

    Raises:
        - 400 Bad Request: Missing fields
        - 404 Not Found: No account with this email (sign up first)
    """
    result = await FederatedSignInUseCase(uow, tokens).execute(
        request.email, _as_text(request.google_id)
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


class GoogleSignUpRequest(ProfileRequest):
    email: Optional[str] = None
    google_id: Optional[Union[StrictStr, StrictInt]] = Field(default=None, alias="googleId")
    name: Optional[str] = None


@router.post("/google-signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def google_signup(
    request: GoogleSignUpRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    """
    Create an account through Google with a fitness profile.

    Raises:
        - 400 Bad Request: Missing/invalid fields or email already registered
    """
    command = FederatedSignUpCommand(
        email=request.email,
        federated_id=_as_text(request.google_id),
        name=request.name,
        profile=request.to_profile(),
    )

    result = await FederatedSignUpUseCase(uow, hasher, tokens).execute(command)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
