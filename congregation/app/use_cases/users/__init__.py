"""
User Management Use Cases

Profile and account lifecycle.
"""

from .get_profile_use_case import GetProfileUseCase
from .delete_account_use_case import DeleteAccountResponse, DeleteAccountUseCase

__all__ = [
    "GetProfileUseCase",
    "DeleteAccountUseCase",
    "DeleteAccountResponse",
]
