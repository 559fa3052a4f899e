"""
Maintenance Routes

Called by schedulers with the admin API key, not user JWTs.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from congregation.api.error import raise_for_error
from congregation.api.utils.admin_auth import verify_admin_api_key
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.maintenance import (
    ExpireSubscriptionsResponse,
    ExpireSubscriptionsUseCase,
    SweepAuditEntriesUseCase,
    SweepRateLimitsUseCase,
    SweepResponse,
)
from congregation.depends import get_unit_of_work

router = APIRouter(
    prefix="/maintenance",
    tags=["Maintenance"],
    dependencies=[Depends(verify_admin_api_key)],
)


@router.post("/rate-limits/sweep", status_code=status.HTTP_200_OK, response_model=SweepResponse)
async def sweep_rate_limits(
    older_than_hours: Optional[int] = Query(None, ge=1),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Deletes rate-limit records idle longer than the retention window"""
    hours = older_than_hours or ApplicationConfig.RATE_LIMIT_RETENTION_HOURS
    result = await SweepRateLimitsUseCase(uow).execute(hours)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/audit/sweep", status_code=status.HTTP_200_OK, response_model=SweepResponse)
async def sweep_audit_entries(
    older_than_days: Optional[int] = Query(None, ge=1),
    batch_size: Optional[int] = Query(None, ge=1, le=10000),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Deletes one batch of the oldest audit entries past retention"""
    result = await SweepAuditEntriesUseCase(uow).execute(
        older_than_days or ApplicationConfig.AUDIT_RETENTION_DAYS,
        batch_size or ApplicationConfig.AUDIT_SWEEP_BATCH_SIZE,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/subscriptions/expire",
    status_code=status.HTTP_200_OK,
    response_model=ExpireSubscriptionsResponse,
)
async def expire_subscriptions(uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ExpireSubscriptionsUseCase(uow).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value
