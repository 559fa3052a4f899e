"""
DailyVerse and ChurchTheme Entities
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import BibleVersion


def daily_verse_id(church_id: UUID, date: str) -> str:
    return f"{church_id}_{date}"


class DailyVerse(SQLModel, table=True):
    """
    DailyVerse entity - verse of the day for one church.

    Business Rules:
    - id is "{church_id}_{YYYY-MM-DD}"; saving the same day overwrites
    """

    __tablename__ = "daily_verses"

    id: str = Field(primary_key=True, max_length=64)
    church_id: UUID = Field(foreign_key="churches.id", nullable=False, index=True)
    date: str = Field(max_length=10)  # YYYY-MM-DD

    reference: str = Field(max_length=200)
    text: str = Field(max_length=5000)
    version: BibleVersion = Field(default=BibleVersion.NIV)
    theme: Optional[str] = Field(default=None, max_length=100)
    reflection: Optional[str] = Field(default=None, max_length=1000)

    is_auto: bool = Field(default=False)
    generated_by: str = Field(default="pastor", max_length=20)
    pastor_id: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_daily_verse_church_date", "church_id", "date"),)


class ChurchTheme(SQLModel, table=True):
    """Weekly/monthly theme and auto-generation settings of a church"""

    __tablename__ = "church_themes"

    church_id: UUID = Field(foreign_key="churches.id", primary_key=True)
    weekly_theme: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    monthly_theme: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    auto_generate: bool = Field(default=False)
    preferred_version: BibleVersion = Field(default=BibleVersion.NIV)

    updated_by: Optional[UUID] = Field(default=None)
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
