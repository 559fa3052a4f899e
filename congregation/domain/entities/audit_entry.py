"""
AuditEntry Entity

Immutable log of authorization decisions and data access.
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import AuditResult


class AuditEntry(SQLModel, table=True):
    """
    AuditEntry entity - immutable log of access decisions and data access.

    Business Rules:
    - Never updated; deleted only by the retention sweep
    - user_id is a weak reference (no foreign key) so entries outlive the user
    - created_at is assigned at write time, never by the caller
    - event_metadata is a flat string-to-string map
    """

    __tablename__ = "audit_entries"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: Optional[UUID] = Field(default=None)

    action: str = Field(max_length=100)  # e.g. "SUPER_ADMIN_ACCESS", "READ"
    collection: str = Field(max_length=100)
    resource_id: Optional[str] = Field(default=None, max_length=255)
    result: AuditResult = Field(nullable=False)

    required_roles: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    event_metadata: Optional[Dict[str, str]] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_entry_created_at", "created_at"),
        Index("idx_audit_entry_user_id", "user_id"),
        Index("idx_audit_entry_action_result", "action", "result"),
    )
