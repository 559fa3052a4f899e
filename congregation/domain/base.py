import secrets
import string
from datetime import datetime, timezone
from typing import Optional

CHURCH_CODE_ALPHABET = string.ascii_uppercase + string.digits
CHURCH_CODE_LENGTH = 8


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def generate_church_code() -> str:
    return "".join(
        secrets.choice(CHURCH_CODE_ALPHABET) for _ in range(CHURCH_CODE_LENGTH)
    )
