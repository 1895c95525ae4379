"""
Credential Hasher

One-way password hashing with bcrypt.
"""

import secrets
from functools import cached_property

import bcrypt

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class CredentialHasher:
    """
    Salted bcrypt hashing and verification.

    Business Rules:
    - Fresh salt per hash, so equal passwords produce different digests
    - verify() never raises: malformed digests and bad input are a mismatch
    - Federated accounts get a placeholder that is not a bcrypt digest
    """

    PLACEHOLDER_PREFIX = "!federated$"

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    @classmethod
    def from_config(cls, config) -> "CredentialHasher":
        return cls(rounds=config.BCRYPT_ROUNDS)

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plaintext: str) -> str:
        digest = bcrypt.hashpw(self._encode(plaintext), bcrypt.gensalt(self.rounds))
        return digest.decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        if not isinstance(plaintext, str) or not isinstance(digest, str):
            return False
        try:
            return bcrypt.checkpw(self._encode(plaintext), digest.encode("utf-8"))
        except ValueError:
            # Placeholder or corrupted digest
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash(secrets.token_urlsafe(16))

    def dummy_verify(self, plaintext: str) -> bool:
        """Spend one verification so unknown-email logins cost the same as bad passwords."""
        self.verify(plaintext or "", self._dummy_hash)
        return False

    def placeholder_hash(self) -> str:
        return f"{self.PLACEHOLDER_PREFIX}{secrets.token_hex(16)}"
