"""
Use Cases

Organized by domain folder:
- auth/: Authentication and password reset flows
- users/: Signed-in account
"""

from .auth import (
    SignupUseCase,
    LoginUseCase,
    CheckEmailUseCase,
    ForgotPasswordUseCase,
    VerifyOtpUseCase,
    ResetPasswordUseCase,
    FederatedSignInUseCase,
    FederatedSignUpUseCase,
)
from .users import LoadProfileUseCase

__all__ = [
    # Auth
    "SignupUseCase",
    "LoginUseCase",
    "CheckEmailUseCase",
    "ForgotPasswordUseCase",
    "VerifyOtpUseCase",
    "ResetPasswordUseCase",
    "FederatedSignInUseCase",
    "FederatedSignUpUseCase",
    # Users
    "LoadProfileUseCase",
]
