"""
Church Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the church domain.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from congregation.domain.entities import UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class CreateChurchCommand(BaseModel):
    name: str
    description: Optional[str] = None
    address: Optional[Dict[str, str]] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class UpdateChurchCommand(BaseModel):
    """Only the fields present in `changes` are written"""

    church_id: UUID
    changes: Dict[str, Any]


# ============================================================================
# Response DTOs
# ============================================================================


class ChurchInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    code: str
    pastor_id: UUID
    admin_ids: List[str]
    description: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_active: bool
    member_count: int
    active_members: int
    created_at: datetime
    updated_at: datetime


class CreateChurchResponse(BaseModel):
    church_id: UUID
    church_code: str
    name: str


class MemberInfo(BaseModel):
    """Basic member details visible to the church's pastor"""

    user_id: UUID
    display_name: Optional[str] = None
    email: str
    role: UserRole
    joined_at: datetime


class ChurchMembersResponse(BaseModel):
    members: List[MemberInfo]
    limit: int
    total: int


class JoinChurchResponse(BaseModel):
    church_id: UUID
    church_name: str


class LeaveChurchResponse(BaseModel):
    message: str
