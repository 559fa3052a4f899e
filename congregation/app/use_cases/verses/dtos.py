"""
Daily Verse Use Case DTOs (Data Transfer Objects)
"""

from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from congregation.domain.entities import BibleVersion, ThemeType


class SaveVerseCommand(BaseModel):
    church_id: UUID
    day: date
    reference: str
    text: str
    version: BibleVersion = BibleVersion.NIV
    theme: Optional[str] = None
    reflection: Optional[str] = None


class SavedVerse(BaseModel):
    reference: str
    text: str
    version: BibleVersion


class SaveVerseResponse(BaseModel):
    verse: SavedVerse


class VerseInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    reference: str
    text: str
    version: BibleVersion
    theme: Optional[str] = None
    reflection: Optional[str] = None
    created_at: datetime


class GetVerseResponse(BaseModel):
    verse: Optional[VerseInfo] = None


class CalendarDay(BaseModel):
    reference: str
    theme: Optional[str] = None
    has_reflection: bool


class VerseCalendarResponse(BaseModel):
    verses: Dict[str, CalendarDay]


class SetThemeCommand(BaseModel):
    church_id: UUID
    type: ThemeType
    theme: str
    start_date: date
    end_date: date
    suggested_verses: List[str] = []


class ThemeInfo(BaseModel):
    theme: str
    start_date: str
    end_date: str
    verses: List[str] = []


class SetThemeResponse(BaseModel):
    type: ThemeType
    theme: ThemeInfo


class ToggleAutoGenerateResponse(BaseModel):
    enabled: bool


class ChurchThemeResponse(BaseModel):
    weekly: Optional[ThemeInfo] = None
    monthly: Optional[ThemeInfo] = None
    auto_generate: bool = False
    preferred_version: BibleVersion = BibleVersion.NIV


class VerseMessageResponse(BaseModel):
    message: str
