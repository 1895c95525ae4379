"""
Fitness Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AuthProvider(str, Enum):
    """How an account proves its identity"""

    local = "local"
    google = "google"


class TokenPurpose(str, Enum):
    """What an issued bearer token may be used for"""

    session = "session"
    password_reset = "password-reset"
