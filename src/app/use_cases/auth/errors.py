"""
Authentication error taxonomy

Every failure a use case can return, with the messages clients see.
"""

from enum import Enum

from src.libs.result import Error


class AuthErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    INVALID_OR_EXPIRED = "INVALID_OR_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    DELIVERY_FAILED = "DELIVERY_FAILED"
    INTERNAL = "INTERNAL"


ALL_FIELDS_REQUIRED = "All fields are required"
EMAIL_REQUIRED = "Email is required"
AGE_NOT_POSITIVE = "Age must be a positive number"
PASSWORD_TOO_SHORT = "Password must be at least 6 characters long"
INVALID_CREDENTIALS = "Invalid email or password"
PROFILE_VALUE_INVALID = "Profile values must be text or numbers"


def auth_error(code: AuthErrorCode, message: str) -> Error:
    return Error(code.value, message)
