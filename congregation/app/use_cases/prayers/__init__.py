"""
Prayer Use Cases

Prayer requests and the users praying for them.
"""

from .create_prayer_use_case import CreatePrayerUseCase
from .update_prayer_use_case import UpdatePrayerUseCase
from .delete_prayer_use_case import DeletePrayerUseCase
from .list_prayers_use_case import ListPrayersUseCase
from .get_prayer_use_case import GetPrayerUseCase
from .pray_for_prayer_use_case import PrayForPrayerUseCase
from .get_prayer_supporters_use_case import GetPrayerSupportersUseCase
from .dtos import (
    CreatePrayerCommand,
    PrayerInfo,
    PrayerListResponse,
    PrayerMessageResponse,
    SupporterInfo,
    SupporterListResponse,
    UpdatePrayerCommand,
)

__all__ = [
    # Use Cases
    "CreatePrayerUseCase",
    "UpdatePrayerUseCase",
    "DeletePrayerUseCase",
    "ListPrayersUseCase",
    "GetPrayerUseCase",
    "PrayForPrayerUseCase",
    "GetPrayerSupportersUseCase",
    # DTOs
    "CreatePrayerCommand",
    "UpdatePrayerCommand",
    "PrayerInfo",
    "PrayerListResponse",
    "SupporterInfo",
    "SupporterListResponse",
    "PrayerMessageResponse",
]
