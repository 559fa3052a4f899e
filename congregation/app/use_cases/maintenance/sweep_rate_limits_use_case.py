import logging
from datetime import timedelta

from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.shared_kernel.result import Result, Return
from .dtos import SweepResponse

logger = logging.getLogger(__name__)


class SweepRateLimitsUseCase:
    """Deletes rate-limit records not touched in the last `older_than_hours` hours"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, older_than_hours: int = 24) -> Result[SweepResponse]:
        cutoff = utcnow() - timedelta(hours=older_than_hours)

        async with self.uow:
            deleted = await self.uow.rate_limits.delete_inactive(cutoff)
            await self.uow.commit()

        logger.info(f"Swept {deleted} stale rate limit records older than {cutoff.isoformat()}")
        return Return.ok(SweepResponse(deleted=deleted))
