"""
Audit Recorder

Appends immutable audit entries for access decisions and data access.
Recording never raises: a failed write is logged and the audited operation
carries on with its own result.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from congregation.app.services.unit_of_work import UnitOfWorkFactory
from congregation.domain.entities import AuditEntry, AuditResult, DataAction

logger = logging.getLogger(__name__)

AUTH_COLLECTION = "auth"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def normalize_metadata(metadata: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    """Flatten arbitrary values to the closed str -> str form stored on entries"""
    if metadata is None:
        return None
    return {str(key): _stringify(value) for key, value in metadata.items()}


class AuditRecorder:
    """
    Writes each entry through its own unit of work and commits it immediately,
    so entries survive a rollback of the request transaction (a DENY is
    usually followed by one).
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def record(
        self,
        user_id: Optional[UUID],
        action: str,
        collection: str,
        result: AuditResult,
        resource_id: Optional[Any] = None,
        required_roles: Optional[Iterable[Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        try:
            entry = AuditEntry(
                user_id=user_id,
                action=_stringify(action),
                collection=collection,
                resource_id=None if resource_id is None else str(resource_id),
                result=result,
                required_roles=(
                    None
                    if required_roles is None
                    else [_stringify(role) for role in required_roles]
                ),
                event_metadata=normalize_metadata(metadata),
            )
            async with self.uow_factory() as uow:
                await uow.audit_entries.create(entry)
                await uow.commit()
        except Exception:
            logger.exception(
                f"Failed to record audit entry action={action} user_id={user_id}"
            )

    async def record_access_decision(
        self,
        user_id: UUID,
        action: str,
        result: AuditResult,
        required_roles: Iterable[Any],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        await self.record(
            user_id,
            action,
            AUTH_COLLECTION,
            result,
            required_roles=required_roles,
            metadata=metadata,
        )

    async def record_data_access(
        self,
        user_id: UUID,
        action: DataAction,
        collection: str,
        resource_id: Optional[Any] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        await self.record(
            user_id,
            action.value,
            collection,
            AuditResult.SUCCESS,
            resource_id=resource_id,
            metadata=metadata,
        )
