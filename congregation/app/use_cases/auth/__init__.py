"""
Authentication Use Cases

Signup and login.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .dtos import AuthResponse, LoginCommand, SignupCommand, UserProfile

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    # DTOs - Commands
    "SignupCommand",
    "LoginCommand",
    # DTOs - Responses
    "AuthResponse",
    "UserProfile",
]
