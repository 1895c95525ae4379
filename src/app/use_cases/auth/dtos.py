"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Response models serialize with the field names clients already use
(Gender, ActivityLevel, isPro, resetToken, ...).
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from src.domain.entities import Account

# Booleans are kept as booleans so build_profile can reject them
ProfileValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]


# ============================================================================
# Command DTOs
# ============================================================================


class ProfileInput(BaseModel):
    """Fitness profile as submitted, before validation"""

    gender: Optional[ProfileValue] = None
    age: Optional[ProfileValue] = None
    height: Optional[ProfileValue] = None
    goal: Optional[ProfileValue] = None
    activity_level: Optional[ProfileValue] = None
    weight: Optional[ProfileValue] = None


class SignupCommand(BaseModel):
    """
    Signup command - represents signup intent

    Fields may be missing; the use case reports them as BAD_REQUEST.
    """

    email: Optional[str] = None
    password: Optional[str] = None
    profile: ProfileInput = Field(default_factory=ProfileInput)


class FederatedSignUpCommand(BaseModel):
    """Sign-up through an identity provider (Google)"""

    email: Optional[str] = None
    federated_id: Optional[str] = None
    name: Optional[str] = None
    profile: ProfileInput = Field(default_factory=ProfileInput)


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public view of an account. Never includes the password hash or reset code."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    gender: str = Field(alias="Gender")
    age: int = Field(alias="Age")
    height: str = Field(alias="Height")
    goal: str = Field(alias="Goal")
    activity_level: str = Field(alias="ActivityLevel")
    weight: str = Field(alias="Weight")
    is_pro: bool = Field(alias="isPro")
    google_id: Optional[str] = Field(default=None, alias="googleId")
    auth_provider: str = Field(alias="authProvider")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_account(cls, account: Account) -> "AccountInfo":
        profile = account.profile_attributes
        return cls(
            id=str(account.id),
            email=account.email,
            gender=profile.gender,
            age=profile.age,
            height=profile.height,
            goal=profile.goal,
            activity_level=profile.activity_level,
            weight=profile.weight,
            is_pro=account.is_pro,
            google_id=account.federated_id,
            auth_provider=account.auth_provider.value,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class AuthResponse(BaseModel):
    """Response for signup, login and federated sign-in/sign-up"""

    message: str
    user: AccountInfo
    token: str


class CheckEmailResponse(BaseModel):
    exists: bool


class ForgotPasswordResponse(BaseModel):
    message: str
    email: str


class VerifyOtpResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    reset_token: str = Field(alias="resetToken")


class MessageResponse(BaseModel):
    message: str
