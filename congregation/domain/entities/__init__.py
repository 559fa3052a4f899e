"""
Congregation Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AnnouncementPriority,
    AttendeeStatus,
    AuditResult,
    BibleVersion,
    DataAction,
    EventCategory,
    PrayerCategory,
    PrayerVisibility,
    PrivacyCategory,
    SubscriptionStatus,
    SubscriptionTier,
    ThemeType,
    UserRole,
)

# Export all entities
from .user import User
from .church import Church
from .church_member import ChurchMember
from .announcement import Announcement
from .event import Event, EventAttendee
from .prayer import Prayer, PrayerSupporter
from .daily_verse import ChurchTheme, DailyVerse, daily_verse_id
from .subscription import Subscription
from .audit_entry import AuditEntry
from .rate_limit_record import RateLimitRecord

__all__ = [
    # Enums
    "AnnouncementPriority",
    "AttendeeStatus",
    "AuditResult",
    "BibleVersion",
    "DataAction",
    "EventCategory",
    "PrayerCategory",
    "PrayerVisibility",
    "PrivacyCategory",
    "SubscriptionStatus",
    "SubscriptionTier",
    "ThemeType",
    "UserRole",
    # Entities
    "User",
    "Church",
    "ChurchMember",
    "Announcement",
    "Event",
    "EventAttendee",
    "Prayer",
    "PrayerSupporter",
    "DailyVerse",
    "ChurchTheme",
    "Subscription",
    "AuditEntry",
    "RateLimitRecord",
    "daily_verse_id",
]
