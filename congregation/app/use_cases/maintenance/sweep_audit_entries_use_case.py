import logging
from datetime import timedelta

from congregation.app.services.unit_of_work import UnitOfWork
from congregation.domain.base import utcnow
from congregation.shared_kernel.result import Result, Return
from .dtos import SweepResponse

logger = logging.getLogger(__name__)


class SweepAuditEntriesUseCase:
    """
    Retention sweep for the audit trail.

    Deletes at most `batch_size` of the oldest entries created before the
    cutoff, so a scheduler can call it repeatedly until `deleted` is 0.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, older_than_days: int = 365, batch_size: int = 500
    ) -> Result[SweepResponse]:
        cutoff = utcnow() - timedelta(days=older_than_days)

        async with self.uow:
            deleted = await self.uow.audit_entries.delete_older_than(cutoff, limit=batch_size)
            await self.uow.commit()

        logger.info(f"Swept {deleted} audit entries older than {cutoff.isoformat()}")
        return Return.ok(SweepResponse(deleted=deleted))
