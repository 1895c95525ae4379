"""
Token Issuer

Signs and verifies purpose-scoped bearer tokens (HS256 JWT).
Tokens are not stored server-side: signature and expiry decide validity.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID

from jose import JWTError, jwt

from src.domain.base import utcnow
from src.domain.entities import TokenPurpose


@dataclass(frozen=True)
class TokenClaims:
    account_id: str
    email: str
    purpose: TokenPurpose


class TokenIssuer:
    """
    Issues session and password-reset tokens.

    Business Rules:
    - Session tokens expire after 1 hour, reset tokens after 15 minutes
    - Reset tokens carry purpose=password-reset
    - verify() returns None on any failure, never partial claims
    - Callers decide which purposes they accept
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        session_ttl: timedelta = timedelta(hours=1),
        reset_ttl: timedelta = timedelta(minutes=15),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.session_ttl = session_ttl
        self.reset_ttl = reset_ttl
        self.clock = clock

    @classmethod
    def from_config(cls, config, clock: Callable[[], datetime] = utcnow) -> "TokenIssuer":
        return cls(
            secret=config.JWT_SECRET,
            algorithm=config.JWT_ALGORITHM,
            session_ttl=timedelta(minutes=config.SESSION_TOKEN_TTL_MINUTES),
            reset_ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
            clock=clock,
        )

    def _issue(
        self, account_id: UUID, email: str, purpose: TokenPurpose, ttl: timedelta
    ) -> str:
        now = self.clock()
        payload = {
            "userId": str(account_id),
            "email": email,
            "purpose": purpose.value,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def issue_session(self, account_id: UUID, email: str) -> str:
        return self._issue(account_id, email, TokenPurpose.session, self.session_ttl)

    def issue_reset_token(self, account_id: UUID, email: str) -> str:
        return self._issue(
            account_id, email, TokenPurpose.password_reset, self.reset_ttl
        )

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Verify signature and expiry of a token.

        Args:
            token: Bearer token string

        Returns:
            TokenClaims, or None if the token is malformed, tampered or expired
        """
        if not isinstance(token, str) or not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
        except JWTError:
            return None

        account_id = payload.get("userId")
        email = payload.get("email")
        if not isinstance(account_id, str) or not isinstance(email, str):
            return None

        # Tokens without a purpose claim are session tokens
        try:
            purpose = TokenPurpose(payload.get("purpose", TokenPurpose.session.value))
        except ValueError:
            return None

        return TokenClaims(account_id=account_id, email=email, purpose=purpose)
