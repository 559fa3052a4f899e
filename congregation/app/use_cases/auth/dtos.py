"""
Auth Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- Commands: input to use cases (validated business intent)
- Responses: output from use cases (structured result)
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from congregation.domain.entities import SubscriptionStatus, SubscriptionTier, UserRole


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    """

    email: str
    password: str
    display_name: Optional[str] = None


class LoginCommand(BaseModel):
    email: str
    password: str


class UserProfile(BaseModel):
    """Profile of the authenticated user"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    display_name: Optional[str] = None
    role: UserRole
    church_id: Optional[UUID] = None
    subscription_tier: SubscriptionTier
    subscription_status: Optional[SubscriptionStatus] = None
    created_at: datetime
    last_login_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Access token plus the profile it was issued for"""

    access_token: str
    token_type: str = "bearer"
    user: UserProfile
