"""
Maintenance DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel


class SweepResponse(BaseModel):
    deleted: int


class ExpireSubscriptionsResponse(BaseModel):
    expired: int
