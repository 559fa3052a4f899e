"""
Congregation Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Exactly one role per user; pastor/admin/super_admin are not a linear ladder"""

    guest = "guest"
    member = "member"
    subscriber = "subscriber"
    pastor = "pastor"
    admin = "admin"
    super_admin = "super_admin"


class SubscriptionTier(str, Enum):
    free = "free"
    basic = "basic"
    premium = "premium"


class SubscriptionStatus(str, Enum):
    active = "active"
    trialing = "trialing"
    cancelled = "cancelled"
    expired = "expired"
    past_due = "past_due"


class AuditResult(str, Enum):
    """Outcome stored on every audit entry"""

    SUCCESS = "SUCCESS"
    DENIED = "DENIED"
    ERROR = "ERROR"


class DataAction(str, Enum):
    READ = "READ"
    WRITE = "WRITE"
    DELETE = "DELETE"


class PrivacyCategory(str, Enum):
    """Tenant content categories that super admins may never read"""

    church_activities = "church_activities"
    member_data = "member_data"
    sermon_content = "sermon_content"


class AnnouncementPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class EventCategory(str, Enum):
    service = "service"
    bible_study = "bible_study"
    prayer_meeting = "prayer_meeting"
    fellowship = "fellowship"
    outreach = "outreach"
    other = "other"


class AttendeeStatus(str, Enum):
    registered = "registered"
    attended = "attended"


class PrayerVisibility(str, Enum):
    public = "public"
    church = "church"
    private = "private"


class PrayerCategory(str, Enum):
    general = "general"
    healing = "healing"
    guidance = "guidance"
    thanksgiving = "thanksgiving"
    intercession = "intercession"
    other = "other"


class BibleVersion(str, Enum):
    NIV = "NIV"
    KJV = "KJV"
    ESV = "ESV"


class ThemeType(str, Enum):
    weekly = "weekly"
    monthly = "monthly"
