from typing import Dict, List, Optional
from uuid import uuid4

import pytest

from congregation.app.services.rate_limiter import (
    DEFAULT_QUOTA,
    MAX_CAS_ATTEMPTS,
    Quota,
    RateLimiter,
    build_quotas,
    ip_key,
    user_key,
)
from congregation.domain.entities import RateLimitRecord


class InMemoryRateLimitRepository:
    """Dict-backed store with the same insert-if-absent / compare-and-set contract"""

    def __init__(self):
        self.records: Dict[str, RateLimitRecord] = {}
        self.fail_with: Optional[Exception] = None
        self.cas_calls = 0

    async def get(self, key: str) -> Optional[RateLimitRecord]:
        if self.fail_with is not None:
            raise self.fail_with
        record = self.records.get(key)
        if record is None:
            return None
        return RateLimitRecord(
            key=record.key,
            subject=record.subject,
            operation=record.operation,
            requests=list(record.requests),
            version=record.version,
        )

    async def insert_if_absent(self, record: RateLimitRecord) -> bool:
        if record.key in self.records:
            return False
        self.records[record.key] = record
        return True

    async def compare_and_set(self, key: str, expected_version: int, requests: List[int]) -> bool:
        self.cas_calls += 1
        record = self.records[key]
        if record.version != expected_version:
            return False
        record.requests = list(requests)
        record.version += 1
        return True


class FakeUnitOfWork:
    def __init__(self, repository):
        self.rate_limits = repository

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    async def commit(self):
        pass


class FakeClock:
    def __init__(self, seconds: float = 1_700_000_000.0):
        self.seconds = seconds

    def __call__(self) -> float:
        return self.seconds

    def advance_ms(self, ms: int):
        self.seconds += ms / 1000


@pytest.fixture
def repository():
    return InMemoryRateLimitRepository()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(repository, clock):
    quotas = build_quotas({"church": {"max_requests": 20, "window_ms": 900_000}})
    return RateLimiter(lambda: FakeUnitOfWork(repository), quotas, clock=clock)


@pytest.mark.asyncio
async def test_twenty_first_call_in_window_is_rejected(limiter, clock):
    """20 requests per 15 minutes: calls 1..20 pass, call 21 fails"""
    for _ in range(20):
        result = await limiter.check_and_consume("u1:create_church", 20, 900_000)
        assert result.is_ok()
        clock.advance_ms(10)

    result = await limiter.check_and_consume("u1:create_church", 20, 900_000)

    assert result.is_err()
    assert result.error.code == "RESOURCE_EXHAUSTED"


@pytest.mark.asyncio
async def test_rejected_call_consumes_nothing(limiter, repository):
    for _ in range(3):
        await limiter.check_and_consume("key", 3, 1000)

    await limiter.check_and_consume("key", 3, 1000)
    await limiter.check_and_consume("key", 3, 1000)

    assert len(repository.records["key"].requests) == 3


@pytest.mark.asyncio
async def test_window_slides(limiter, clock):
    # Arrange
    assert (await limiter.check_and_consume("key", 2, 1000)).is_ok()
    assert (await limiter.check_and_consume("key", 2, 1000)).is_ok()
    assert (await limiter.check_and_consume("key", 2, 1000)).is_err()

    # Act: the window is inclusive, so exactly W later the first calls still count
    clock.advance_ms(1000)
    at_boundary = await limiter.check_and_consume("key", 2, 1000)
    clock.advance_ms(1)
    after_window = await limiter.check_and_consume("key", 2, 1000)

    # Assert
    assert at_boundary.is_err()
    assert after_window.is_ok()


@pytest.mark.asyncio
async def test_expired_timestamps_are_dropped_on_write(limiter, repository, clock):
    await limiter.check_and_consume("key", 5, 1000)
    clock.advance_ms(5000)

    await limiter.check_and_consume("key", 5, 1000)

    assert repository.records["key"].requests == [int(clock() * 1000)]


@pytest.mark.asyncio
async def test_keys_are_independent(limiter):
    assert (await limiter.check_and_consume("a", 1, 1000)).is_ok()
    assert (await limiter.check_and_consume("a", 1, 1000)).is_err()
    assert (await limiter.check_and_consume("b", 1, 1000)).is_ok()


@pytest.mark.asyncio
async def test_storage_failure_degrades_open(limiter, repository, caplog):
    repository.fail_with = RuntimeError("store unavailable")

    for _ in range(50):
        result = await limiter.check_and_consume("key", 1, 1000)
        assert result.is_ok()

    assert "allowing request" in caplog.text


@pytest.mark.asyncio
async def test_concurrent_write_is_retried(limiter, repository):
    """A writer that lands between read and compare-and-set forces one retry"""
    await limiter.check_and_consume("key", 10, 60_000)

    original_get = repository.get
    interleaved = {"done": False}

    async def get_with_concurrent_writer(key):
        record = await original_get(key)
        if not interleaved["done"]:
            interleaved["done"] = True
            stored = repository.records[key]
            stored.requests = stored.requests + [stored.requests[-1]]
            stored.version += 1
        return record

    repository.get = get_with_concurrent_writer

    result = await limiter.check_and_consume("key", 10, 60_000)

    assert result.is_ok()
    # First call, the concurrent write and the retried call are all kept
    assert len(repository.records["key"].requests) == 3
    assert repository.cas_calls == 2


@pytest.mark.asyncio
async def test_exhausted_cas_retries_degrade_open(limiter, repository, caplog):
    await limiter.check_and_consume("key", 10, 60_000)

    async def always_conflict(key, expected_version, requests):
        repository.cas_calls += 1
        return False

    repository.compare_and_set = always_conflict

    result = await limiter.check_and_consume("key", 10, 60_000)

    assert result.is_ok()
    assert repository.cas_calls == MAX_CAS_ATTEMPTS
    assert "still contended" in caplog.text


@pytest.mark.asyncio
async def test_lost_insert_race_falls_back_to_update(limiter, repository, clock):
    """Another writer creates the key first; the call then updates that record"""
    other = RateLimitRecord(key="key", subject="s", operation="op", requests=[0], version=1)
    original_insert = repository.insert_if_absent

    async def insert_after_competitor(record):
        repository.records["key"] = other
        return await original_insert(record)

    repository.insert_if_absent = insert_after_competitor

    result = await limiter.check_and_consume("key", 10, 60_000)

    assert result.is_ok()
    assert repository.records["key"].version == 2
    assert repository.records["key"].requests == [int(clock() * 1000)]


@pytest.mark.asyncio
async def test_check_user_uses_named_quota_and_user_key(limiter, repository):
    user_id = uuid4()

    for _ in range(20):
        assert (await limiter.check_user(user_id, "create_church", "church")).is_ok()
    result = await limiter.check_user(user_id, "create_church", "church")

    assert result.is_err()
    assert "create_church" in result.error.message
    record = repository.records[f"rateLimit_{user_id}_create_church"]
    assert record.subject == str(user_id)
    assert record.operation == "create_church"


@pytest.mark.asyncio
async def test_check_ip_uses_ip_key(limiter, repository):
    await limiter.check_ip("10.0.0.1", "login", "auth")

    assert "ipRateLimit_10.0.0.1_login" in repository.records


def test_unknown_quota_falls_back_to_default(limiter):
    assert limiter.quota("church") == Quota(max_requests=20, window_ms=900_000)
    assert limiter.quota("no-such-quota") == DEFAULT_QUOTA


def test_key_formats():
    assert user_key("u1", "create_event") == "rateLimit_u1_create_event"
    assert ip_key("127.0.0.1", "signup") == "ipRateLimit_127.0.0.1_signup"
