from datetime import datetime
from functools import lru_cache
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.smtp_notification_sender import SmtpNotificationSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.credential_hasher import CredentialHasher
from src.app.services.notification_sender import INotificationSender
from src.app.services.otp_generator import OTPGenerator
from src.app.services.token_issuer import TokenClaims, TokenIssuer
from src.app.use_cases.auth.errors import AuthErrorCode, auth_error
from src.domain.base import utcnow
from src.domain.entities import TokenPurpose

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_credential_hasher() -> CredentialHasher:
    return CredentialHasher.from_config(ApplicationConfig)


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer.from_config(ApplicationConfig)


@lru_cache
def get_otp_generator() -> OTPGenerator:
    return OTPGenerator()


@lru_cache
def get_notification_sender() -> INotificationSender:
    return SmtpNotificationSender.from_config(ApplicationConfig)


def get_clock() -> Callable[[], datetime]:
    return utcnow


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    """
    Dependency to extract and verify a session token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Verified claims of a session token

    Raises:
        ClientError: 401 if the token is missing, invalid, expired,
            or is a password-reset token
    """
    if credentials is None:
        raise ClientError(
            auth_error(AuthErrorCode.UNAUTHORIZED, "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    claims = tokens.verify(credentials.credentials)

    # Reset tokens only work on the reset-password endpoint
    if claims is None or claims.purpose != TokenPurpose.session:
        raise ClientError(
            auth_error(AuthErrorCode.UNAUTHORIZED, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        UUID(claims.account_id)
    except ValueError:
        raise ClientError(
            auth_error(AuthErrorCode.UNAUTHORIZED, "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return claims
