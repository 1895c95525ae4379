"""Input checks shared by the authentication use cases."""

from typing import Any, Optional

from src.libs.result import Result, Return
from src.domain.entities import ProfileAttributes
from .dtos import ProfileInput
from .errors import (
    AGE_NOT_POSITIVE,
    ALL_FIELDS_REQUIRED,
    PASSWORD_TOO_SHORT,
    PROFILE_VALUE_INVALID,
    AuthErrorCode,
    auth_error,
)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def _parse_age(value: Any) -> Optional[int]:
    # HTTP payloads only carry str/int/float here; bool and float come from direct callers
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        age = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        age = int(value)
    else:
        try:
            age = int(str(value).strip())
        except ValueError:
            return None
    return age if age > 0 else None


def build_profile(profile: ProfileInput) -> Result[ProfileAttributes]:
    """
    Validate the fitness profile sent at signup.

    All six attributes must be present and non-empty; age must be a
    positive whole number. Text attributes sent as numbers are kept as text.
    """
    values = [
        profile.gender,
        profile.age,
        profile.height,
        profile.goal,
        profile.activity_level,
        profile.weight,
    ]
    if any(is_blank(value) for value in values):
        return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, ALL_FIELDS_REQUIRED))

    text_values = [
        profile.gender,
        profile.height,
        profile.goal,
        profile.activity_level,
        profile.weight,
    ]
    if any(isinstance(value, bool) for value in text_values):
        return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, PROFILE_VALUE_INVALID))

    age = _parse_age(profile.age)
    if age is None:
        return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, AGE_NOT_POSITIVE))

    return Return.ok(
        ProfileAttributes(
            gender=str(profile.gender).strip(),
            age=age,
            height=str(profile.height).strip(),
            goal=str(profile.goal).strip(),
            activity_level=str(profile.activity_level).strip(),
            weight=str(profile.weight).strip(),
        )
    )


def validate_password(password: str) -> Result[None]:
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(auth_error(AuthErrorCode.BAD_REQUEST, PASSWORD_TOO_SHORT))
    return Return.ok(None)
