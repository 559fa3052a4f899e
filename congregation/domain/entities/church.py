"""
Church Entity

The tenant. All member-scoped content is partitioned by church id.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Church(SQLModel, table=True):
    """
    Church entity - an isolated organizational unit.

    Business Rules:
    - code is 8 characters from A-Z0-9 and unique across all churches
    - Never hard-deleted; is_active=False deactivates
    - member_count only grows; active_members follows joins and leaves
    """

    __tablename__ = "churches"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200)
    code: str = Field(max_length=8)

    pastor_id: UUID = Field(nullable=False)
    admin_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    description: Optional[str] = Field(default=None, max_length=2000)
    address: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    phone: Optional[str] = Field(default=None, max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)

    is_active: bool = Field(default=True)
    member_count: int = Field(default=0)
    active_members: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_church_code", "code", unique=True),
        Index("idx_church_is_active", "is_active"),
    )
