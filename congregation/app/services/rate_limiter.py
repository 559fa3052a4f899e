"""
Sliding-window rate limiter

Each key keeps the millisecond timestamps of its requests inside the window.
Writes are compare-and-set on the record version, so concurrent requests for
the same key cannot both consume the last slot. Storage failures degrade open.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from congregation.app.services.unit_of_work import UnitOfWorkFactory
from congregation.domain.entities import RateLimitRecord
from congregation.shared_kernel import error_codes
from congregation.shared_kernel.result import Error, Result, Return

logger = logging.getLogger(__name__)

DEFAULT_QUOTA_NAME = "default"
MAX_CAS_ATTEMPTS = 5


@dataclass(frozen=True)
class Quota:
    max_requests: int
    window_ms: int


DEFAULT_QUOTA = Quota(max_requests=100, window_ms=15 * 60 * 1000)


def build_quotas(raw: Mapping[str, Mapping[str, Any]]) -> Dict[str, Quota]:
    """Build named quotas from {name: {max_requests, window_ms}} configuration data"""
    quotas = {
        name: Quota(
            max_requests=int(values["max_requests"]),
            window_ms=int(values["window_ms"]),
        )
        for name, values in raw.items()
    }
    quotas.setdefault(DEFAULT_QUOTA_NAME, DEFAULT_QUOTA)
    return quotas


def user_key(user_id: Any, operation: str) -> str:
    return f"rateLimit_{user_id}_{operation}"


def ip_key(ip_address: str, operation: str) -> str:
    return f"ipRateLimit_{ip_address}_{operation}"


class RateLimiter:
    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        quotas: Mapping[str, Quota],
        clock: Callable[[], float] = time.time,
    ):
        self.uow_factory = uow_factory
        self.quotas = dict(quotas)
        self.clock = clock

    def quota(self, name: str) -> Quota:
        """Named quota; unknown names fall back to the default quota"""
        if name in self.quotas:
            return self.quotas[name]
        return self.quotas.get(DEFAULT_QUOTA_NAME, DEFAULT_QUOTA)

    async def check_and_consume(
        self,
        key: str,
        max_requests: int,
        window_ms: int,
        subject: Optional[str] = None,
        operation: Optional[str] = None,
        message: str = "Rate limit exceeded. Please try again later.",
    ) -> Result[None]:
        """
        Consume one request slot for key.

        A timestamp t counts toward the limit when t >= now - window_ms. When
        max_requests timestamps already count, nothing is recorded and the call
        fails with RESOURCE_EXHAUSTED.

        Returns:
            Return.ok() when the request may proceed (including storage failure)
        """
        now_ms = int(self.clock() * 1000)
        window_start = now_ms - window_ms

        try:
            for _ in range(MAX_CAS_ATTEMPTS):
                async with self.uow_factory() as uow:
                    record = await uow.rate_limits.get(key)

                    if record is None:
                        if max_requests <= 0:
                            return self._exhausted(key, message)
                        created = await uow.rate_limits.insert_if_absent(
                            RateLimitRecord(
                                key=key,
                                subject=subject or key,
                                operation=operation or "",
                                requests=[now_ms],
                            )
                        )
                        if created:
                            await uow.commit()
                            return Return.ok()
                        continue

                    recent = [t for t in (record.requests or []) if t >= window_start]
                    if len(recent) >= max_requests:
                        return self._exhausted(key, message)

                    recent.append(now_ms)
                    if await uow.rate_limits.compare_and_set(key, record.version, recent):
                        await uow.commit()
                        return Return.ok()

            logger.warning(
                f"Rate limit record {key} still contended after "
                f"{MAX_CAS_ATTEMPTS} attempts, allowing request"
            )
            return Return.ok()
        except Exception:
            logger.exception(f"Rate limit check failed for {key}, allowing request")
            return Return.ok()

    async def check_user(
        self, user_id: Any, operation: str, quota_name: str = DEFAULT_QUOTA_NAME
    ) -> Result[None]:
        quota = self.quota(quota_name)
        return await self.check_and_consume(
            user_key(user_id, operation),
            quota.max_requests,
            quota.window_ms,
            subject=str(user_id),
            operation=operation,
            message=f"Rate limit exceeded for {operation}. Please try again later.",
        )

    async def check_ip(
        self, ip_address: str, operation: str, quota_name: str = DEFAULT_QUOTA_NAME
    ) -> Result[None]:
        """Rate limit by client address, for endpoints called before authentication"""
        quota = self.quota(quota_name)
        return await self.check_and_consume(
            ip_key(ip_address, operation),
            quota.max_requests,
            quota.window_ms,
            subject=ip_address,
            operation=operation,
            message="Too many requests from this IP address. Please try again later.",
        )

    @staticmethod
    def _exhausted(key: str, message: str) -> Result[None]:
        logger.warning(f"Rate limit exceeded for {key}")
        return Return.err(Error(error_codes.RESOURCE_EXHAUSTED, message))
