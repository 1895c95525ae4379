"""
User Use Cases

Reading the signed-in account.
"""

from .load_profile_use_case import LoadProfileUseCase, ProfileResponse

__all__ = [
    "LoadProfileUseCase",
    "ProfileResponse",
]
