"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .check_email_use_case import CheckEmailUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .verify_otp_use_case import VerifyOtpUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .federated_sign_in_use_case import FederatedSignInUseCase
from .federated_sign_up_use_case import FederatedSignUpUseCase
from .errors import AuthErrorCode
from .dtos import (
    AccountInfo,
    AuthResponse,
    CheckEmailResponse,
    FederatedSignUpCommand,
    ForgotPasswordResponse,
    MessageResponse,
    ProfileInput,
    SignupCommand,
    VerifyOtpResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "CheckEmailUseCase",
    "ForgotPasswordUseCase",
    "VerifyOtpUseCase",
    "ResetPasswordUseCase",
    "FederatedSignInUseCase",
    "FederatedSignUpUseCase",
    # Errors
    "AuthErrorCode",
    # DTOs - Commands
    "SignupCommand",
    "FederatedSignUpCommand",
    "ProfileInput",
    # DTOs - Responses
    "AuthResponse",
    "CheckEmailResponse",
    "ForgotPasswordResponse",
    "VerifyOtpResponse",
    "MessageResponse",
    # DTOs - Nested Models
    "AccountInfo",
]
