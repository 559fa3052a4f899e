"""
Admin Analytics DTOs (Data Transfer Objects)

Aggregate data only. Nothing here carries tenant content.
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel


class SystemStatsResponse(BaseModel):
    total_churches: int
    total_users: int
    active_subscriptions: Dict[str, int]
    monthly_revenue: float


class ChurchSummary(BaseModel):
    id: UUID
    name: str
    code: str
    member_count: int
    active_members: int
    is_active: bool
    created_at: datetime


class ChurchListResponse(BaseModel):
    churches: List[ChurchSummary]


class TierRevenue(BaseModel):
    count: int = 0
    mrr: float = 0.0


class RevenueResponse(BaseModel):
    total_subscriptions: int
    active_subscriptions: int
    cancelled_subscriptions: int
    monthly_recurring_revenue: float
    annual_recurring_revenue: float
    by_tier: Dict[str, TierRevenue]
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class MonthlyGrowth(BaseModel):
    month: str
    new_users: int
    total_users: int


class UserGrowthResponse(BaseModel):
    total_users: int
    growth_by_month: List[MonthlyGrowth]
