"""
Admin Analytics Routes

Super admin reporting. Every endpoint returns aggregate data only; tenant
content is behind the privacy partition and always refused.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from congregation.api.error import raise_for_error
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.admin import (
    ChurchListResponse,
    GetChurchListUseCase,
    GetRevenueUseCase,
    GetSystemStatsUseCase,
    GetTenantContentUseCase,
    GetUserGrowthUseCase,
    RevenueResponse,
    SystemStatsResponse,
    UserGrowthResponse,
)
from congregation.depends import get_audit_recorder, get_current_user_id, get_unit_of_work
from congregation.domain.entities import PrivacyCategory

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=SystemStatsResponse)
async def get_system_stats(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    use_case = GetSystemStatsUseCase(uow, audit, ApplicationConfig.SUBSCRIPTION_PRICING)
    result = await use_case.execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/churches", status_code=status.HTTP_200_OK, response_model=ChurchListResponse)
async def get_church_list(
    limit: int = Query(50, ge=1, le=500),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetChurchListUseCase(uow, audit).execute(user_id, limit)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/revenue", status_code=status.HTTP_200_OK, response_model=RevenueResponse)
async def get_revenue(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    use_case = GetRevenueUseCase(uow, audit, ApplicationConfig.SUBSCRIPTION_PRICING)
    result = await use_case.execute(user_id, start_date, end_date)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/user-growth", status_code=status.HTTP_200_OK, response_model=UserGrowthResponse)
async def get_user_growth(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetUserGrowthUseCase(uow, audit).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def _read_tenant_content(
    user_id: UUID, church_id: UUID, category: PrivacyCategory, uow: UnitOfWork, audit: AuditRecorder
):
    result = await GetTenantContentUseCase(uow, audit).execute(user_id, church_id, category)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/churches/{church_id}/activities", status_code=status.HTTP_200_OK)
async def get_church_activities(
    church_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Always 403: church activities are private to the church"""
    return await _read_tenant_content(
        user_id, church_id, PrivacyCategory.church_activities, uow, audit
    )


@router.get("/churches/{church_id}/members", status_code=status.HTTP_200_OK)
async def get_member_data(
    church_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Always 403: member data is private to the church"""
    return await _read_tenant_content(
        user_id, church_id, PrivacyCategory.member_data, uow, audit
    )


@router.get("/churches/{church_id}/sermons", status_code=status.HTTP_200_OK)
async def get_sermon_content(
    church_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Always 403: sermon content is private to the church"""
    return await _read_tenant_content(
        user_id, church_id, PrivacyCategory.sermon_content, uow, audit
    )
