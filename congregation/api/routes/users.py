from uuid import UUID

from fastapi import APIRouter, Depends, status

from congregation.api.error import raise_for_error
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.auth import UserProfile
from congregation.app.use_cases.users import (
    DeleteAccountResponse,
    DeleteAccountUseCase,
    GetProfileUseCase,
)
from congregation.depends import get_audit_recorder, get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/users", tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def get_me(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetProfileUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/me", status_code=status.HTTP_200_OK, response_model=DeleteAccountResponse)
async def delete_me(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Delete Account

    Removes the caller, their subscriptions and their church membership.
    Audit entries referring to the caller are kept.
    """
    result = await DeleteAccountUseCase(uow, audit).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
