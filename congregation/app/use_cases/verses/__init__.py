"""
Daily Verse Use Cases

Verse of the day, monthly calendar and theme settings per church.
"""

from .save_verse_use_case import SaveVerseUseCase
from .delete_verse_use_case import DeleteVerseUseCase
from .get_verse_use_case import GetVerseUseCase
from .get_verse_calendar_use_case import GetVerseCalendarUseCase
from .set_theme_use_case import SetThemeUseCase
from .toggle_auto_generate_use_case import ToggleAutoGenerateUseCase
from .get_theme_use_case import GetThemeUseCase
from .dtos import (
    CalendarDay,
    ChurchThemeResponse,
    GetVerseResponse,
    SavedVerse,
    SaveVerseCommand,
    SaveVerseResponse,
    SetThemeCommand,
    SetThemeResponse,
    ThemeInfo,
    ToggleAutoGenerateResponse,
    VerseCalendarResponse,
    VerseInfo,
    VerseMessageResponse,
)

__all__ = [
    # Use Cases
    "SaveVerseUseCase",
    "DeleteVerseUseCase",
    "GetVerseUseCase",
    "GetVerseCalendarUseCase",
    "SetThemeUseCase",
    "ToggleAutoGenerateUseCase",
    "GetThemeUseCase",
    # DTOs
    "SaveVerseCommand",
    "SavedVerse",
    "SaveVerseResponse",
    "VerseInfo",
    "GetVerseResponse",
    "CalendarDay",
    "VerseCalendarResponse",
    "SetThemeCommand",
    "ThemeInfo",
    "SetThemeResponse",
    "ToggleAutoGenerateResponse",
    "ChurchThemeResponse",
    "VerseMessageResponse",
]
