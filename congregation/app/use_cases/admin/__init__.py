"""
Admin Analytics Use Cases

Super admin reporting over aggregate data, plus the privacy-partitioned
tenant content reads.
"""

from .get_system_stats_use_case import GetSystemStatsUseCase
from .get_church_list_use_case import GetChurchListUseCase
from .get_revenue_use_case import GetRevenueUseCase
from .get_user_growth_use_case import GetUserGrowthUseCase
from .get_tenant_content_use_case import GetTenantContentUseCase
from .dtos import (
    ChurchListResponse,
    ChurchSummary,
    MonthlyGrowth,
    RevenueResponse,
    SystemStatsResponse,
    TierRevenue,
    UserGrowthResponse,
)

__all__ = [
    # Use Cases
    "GetSystemStatsUseCase",
    "GetChurchListUseCase",
    "GetRevenueUseCase",
    "GetUserGrowthUseCase",
    "GetTenantContentUseCase",
    # DTOs
    "SystemStatsResponse",
    "ChurchSummary",
    "ChurchListResponse",
    "TierRevenue",
    "RevenueResponse",
    "MonthlyGrowth",
    "UserGrowthResponse",
]
