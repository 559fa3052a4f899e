"""
RateLimitRecord Entity

Sliding-window request log for one (subject, operation) key.
"""

from datetime import datetime
from typing import List

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class RateLimitRecord(SQLModel, table=True):
    """
    RateLimitRecord entity.

    Business Rules:
    - key is "rateLimit_{user}_{operation}" or "ipRateLimit_{ip}_{operation}"
    - requests holds epoch-millisecond timestamps inside the current window
    - version increases on every write; writers compare-and-set on it
    - Records idle for longer than the retention period are swept
    """

    __tablename__ = "rate_limits"

    key: str = Field(primary_key=True, max_length=255)
    subject: str = Field(max_length=255)
    operation: str = Field(max_length=100)
    requests: List[int] = Field(default_factory=list, sa_column=Column(JSON))
    version: int = Field(default=1)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_rate_limit_updated_at", "updated_at"),)
