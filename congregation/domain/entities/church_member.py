"""
ChurchMember Entity

Links a User to a Church.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import UserRole


class ChurchMember(SQLModel, table=True):
    """
    ChurchMember entity - membership row of a user in a church.

    Business Rules:
    - (church_id, user_id) must be unique; leaving deactivates instead of deleting
    - Rejoining reactivates the existing row
    """

    __tablename__ = "church_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    church_id: UUID = Field(foreign_key="churches.id", nullable=False, index=True)
    user_id: UUID = Field(nullable=False, index=True)

    role: UserRole = Field(default=UserRole.member)
    is_active: bool = Field(default=True)
    invited_by: Optional[UUID] = Field(default=None)

    # Timestamps
    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    left_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_church_member_church_user", "church_id", "user_id", unique=True),
        Index("idx_church_member_active", "church_id", "is_active"),
    )
