"""
Announcement Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from congregation.domain.entities import AnnouncementPriority


class CreateAnnouncementCommand(BaseModel):
    title: str
    content: str
    priority: AnnouncementPriority = AnnouncementPriority.medium
    is_published: bool = False
    expires_at: Optional[datetime] = None


class UpdateAnnouncementCommand(BaseModel):
    """Only the fields present in `changes` are written"""

    announcement_id: UUID
    changes: Dict[str, Any]


class AnnouncementInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    church_id: UUID
    title: str
    content: str
    author_id: UUID
    author_name: str
    priority: AnnouncementPriority
    is_published: bool
    published_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class AnnouncementListResponse(BaseModel):
    announcements: List[AnnouncementInfo]


class DeleteAnnouncementResponse(BaseModel):
    message: str
