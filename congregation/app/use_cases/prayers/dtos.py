"""
Prayer Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from congregation.domain.entities import PrayerCategory, PrayerVisibility


class CreatePrayerCommand(BaseModel):
    title: str
    content: str
    visibility: PrayerVisibility = PrayerVisibility.church
    category: PrayerCategory = PrayerCategory.general


class UpdatePrayerCommand(BaseModel):
    """Only the fields present in `changes` are written"""

    prayer_id: UUID
    changes: Dict[str, Any]


class PrayerInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    user_name: str
    church_id: Optional[UUID] = None
    title: str
    content: str
    visibility: PrayerVisibility
    category: PrayerCategory
    is_answered: bool
    answered_at: Optional[datetime] = None
    answered_note: Optional[str] = None
    prayer_count: int
    created_at: datetime
    updated_at: datetime


class PrayerListResponse(BaseModel):
    prayers: List[PrayerInfo]


class SupporterInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    user_name: str
    prayed_at: datetime


class SupporterListResponse(BaseModel):
    supporters: List[SupporterInfo]


class PrayerMessageResponse(BaseModel):
    message: str
