"""
Church Use Cases

Church creation, details, members and membership changes.
"""

from .create_church_use_case import CreateChurchUseCase
from .update_church_use_case import UpdateChurchUseCase
from .get_church_use_case import GetChurchUseCase
from .get_church_members_use_case import GetChurchMembersUseCase
from .join_church_use_case import JoinChurchUseCase
from .leave_church_use_case import LeaveChurchUseCase
from .dtos import (
    ChurchInfo,
    ChurchMembersResponse,
    CreateChurchCommand,
    CreateChurchResponse,
    JoinChurchResponse,
    LeaveChurchResponse,
    MemberInfo,
    UpdateChurchCommand,
)

__all__ = [
    # Use Cases
    "CreateChurchUseCase",
    "UpdateChurchUseCase",
    "GetChurchUseCase",
    "GetChurchMembersUseCase",
    "JoinChurchUseCase",
    "LeaveChurchUseCase",
    # DTOs - Commands
    "CreateChurchCommand",
    "UpdateChurchCommand",
    # DTOs - Responses
    "ChurchInfo",
    "ChurchMembersResponse",
    "CreateChurchResponse",
    "JoinChurchResponse",
    "LeaveChurchResponse",
    "MemberInfo",
]
