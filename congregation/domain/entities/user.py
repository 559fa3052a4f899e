"""
User Entity

Represents a person using the app. Holds the role every access check consults.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import SubscriptionStatus, SubscriptionTier, UserRole


class User(SQLModel, table=True):
    """
    User entity - the identity resolved by every access check.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - Signup creates role=guest, subscription_tier=free
    - Creating a church makes the user its pastor; joining makes them a member
    - church_id is None when the user belongs to no church
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    display_name: Optional[str] = Field(default=None, max_length=100)

    role: UserRole = Field(default=UserRole.guest)
    church_id: Optional[UUID] = Field(default=None, index=True)

    subscription_tier: SubscriptionTier = Field(default=SubscriptionTier.free)
    subscription_status: Optional[SubscriptionStatus] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_role", "role"),)
