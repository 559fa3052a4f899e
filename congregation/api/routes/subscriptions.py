from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from congregation.api.error import raise_for_error
from congregation.api.utils.admin_auth import verify_admin_api_key
from congregation.app.services.audit_recorder import AuditRecorder
from congregation.app.services.rate_limiter import RateLimiter
from congregation.app.services.unit_of_work import UnitOfWork
from congregation.app.use_cases.subscriptions import (
    BillingSyncCommand,
    BillingSyncResponse,
    CancelSubscriptionCommand,
    CancelSubscriptionResponse,
    CancelSubscriptionUseCase,
    GetSubscriptionStatusUseCase,
    ListSubscriptionsUseCase,
    SubscriptionListResponse,
    SubscriptionStatusResponse,
    SyncBillingSubscriptionUseCase,
)
from congregation.depends import (
    get_audit_recorder,
    get_current_user_id,
    get_rate_limiter,
    get_unit_of_work,
)
from congregation.domain.entities import SubscriptionStatus
from congregation.shared_kernel.sanitize import SanitizedStr

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=SubscriptionStatusResponse)
async def get_subscription_status(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    result = await GetSubscriptionStatusUseCase(uow, audit).execute(user_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class CancelSubscriptionRequest(BaseModel):
    reason: Optional[SanitizedStr] = Field(None, max_length=500)


@router.post(
    "/{subscription_id}/cancel",
    status_code=status.HTTP_200_OK,
    response_model=CancelSubscriptionResponse,
)
async def cancel_subscription(
    subscription_id: UUID,
    request: CancelSubscriptionRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Cancel Subscription

    Raises:
        - 403 Forbidden: Not your subscription
        - 404 Not Found: Subscription not found
        - 429 Too Many Requests: Rate limit exceeded
    """
    command = CancelSubscriptionCommand(subscription_id=subscription_id, reason=request.reason)
    result = await CancelSubscriptionUseCase(uow, audit, rate_limiter).execute(user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=SubscriptionListResponse)
async def list_subscriptions(
    limit: int = Query(50, ge=1, le=500),
    subscription_status: Optional[SubscriptionStatus] = Query(None, alias="status"),
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """All subscriptions for super admins, owners redacted"""
    use_case = ListSubscriptionsUseCase(uow, audit)
    result = await use_case.execute(user_id, limit, subscription_status)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/billing-sync",
    status_code=status.HTTP_200_OK,
    response_model=BillingSyncResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sync_billing_subscription(
    request: BillingSyncCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Billing Sync

    Billing provider endpoint. Upserts the subscription and mirrors its
    tier and status on the user.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: User not found
    """
    result = await SyncBillingSubscriptionUseCase(uow).execute(request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
