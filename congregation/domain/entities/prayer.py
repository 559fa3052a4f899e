"""
Prayer and PrayerSupporter Entities
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import PrayerCategory, PrayerVisibility


class Prayer(SQLModel, table=True):
    """
    Prayer entity - a prayer request shared by a user.

    Business Rules:
    - private prayers are visible to their owner only
    - church prayers are visible to members of the same church
    - A church prayer without a church is stored as private
    - Only the owner may update or delete
    """

    __tablename__ = "prayers"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(nullable=False, index=True)
    user_name: str = Field(default="Anonymous", max_length=100)
    church_id: Optional[UUID] = Field(default=None, index=True)

    title: str = Field(max_length=200)
    content: str = Field(max_length=5000)
    visibility: PrayerVisibility = Field(default=PrayerVisibility.church)
    category: PrayerCategory = Field(default=PrayerCategory.general)

    is_answered: bool = Field(default=False)
    answered_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    answered_note: Optional[str] = Field(default=None, max_length=1000)
    prayer_count: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_prayer_visibility_church", "visibility", "church_id"),)


class PrayerSupporter(SQLModel, table=True):
    """A user who prayed for a prayer request; one row per (prayer, user)"""

    __tablename__ = "prayer_supporters"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    prayer_id: UUID = Field(foreign_key="prayers.id", nullable=False, index=True)
    user_id: UUID = Field(nullable=False)
    user_name: str = Field(default="Anonymous", max_length=100)
    prayed_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_prayer_supporter_prayer_user", "prayer_id", "user_id", unique=True),
    )
