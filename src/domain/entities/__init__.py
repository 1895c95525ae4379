"""
Fitness Auth Domain Entities

All domain entities organized by model.
"""

from .enums import AuthProvider, TokenPurpose
from .account import Account, FederatedCredential, LocalCredential, ProfileAttributes

__all__ = [
    # Enums
    "AuthProvider",
    "TokenPurpose",
    # Entities
    "Account",
    "ProfileAttributes",
    # Credentials
    "LocalCredential",
    "FederatedCredential",
]
