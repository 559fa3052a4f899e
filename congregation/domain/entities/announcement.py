"""
Announcement Entity
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import AnnouncementPriority


class Announcement(SQLModel, table=True):
    """
    Announcement entity - news posted by a church's pastor or admins.

    Business Rules:
    - published_at is set the first time the announcement is published
    - Expired announcements are hidden from listings
    """

    __tablename__ = "announcements"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    church_id: UUID = Field(foreign_key="churches.id", nullable=False, index=True)

    title: str = Field(max_length=200)
    content: str = Field(max_length=5000)
    author_id: UUID = Field(nullable=False)
    author_name: str = Field(default="Unknown", max_length=100)

    priority: AnnouncementPriority = Field(default=AnnouncementPriority.medium)
    is_published: bool = Field(default=False)
    published_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_announcement_church_published", "church_id", "is_published"),
    )
