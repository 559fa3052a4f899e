"""
Announcement Use Cases
"""

from .create_announcement_use_case import CreateAnnouncementUseCase
from .update_announcement_use_case import UpdateAnnouncementUseCase
from .delete_announcement_use_case import DeleteAnnouncementUseCase
from .list_announcements_use_case import ListAnnouncementsUseCase
from .get_announcement_use_case import GetAnnouncementUseCase
from .dtos import (
    AnnouncementInfo,
    AnnouncementListResponse,
    CreateAnnouncementCommand,
    DeleteAnnouncementResponse,
    UpdateAnnouncementCommand,
)

__all__ = [
    "CreateAnnouncementUseCase",
    "UpdateAnnouncementUseCase",
    "DeleteAnnouncementUseCase",
    "ListAnnouncementsUseCase",
    "GetAnnouncementUseCase",
    "CreateAnnouncementCommand",
    "UpdateAnnouncementCommand",
    "AnnouncementInfo",
    "AnnouncementListResponse",
    "DeleteAnnouncementResponse",
]
