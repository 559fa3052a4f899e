from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from congregation.domain.entities import User, UserRole
from congregation.shared_kernel.result import Return

REPOSITORIES = (
    "users",
    "churches",
    "church_members",
    "announcements",
    "events",
    "event_attendees",
    "prayers",
    "prayer_supporters",
    "daily_verses",
    "church_themes",
    "subscriptions",
    "audit_entries",
    "rate_limits",
)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork; every repository method is an AsyncMock"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for name in REPOSITORIES:
        setattr(uow, name, AsyncMock())

    return uow


@pytest.fixture
def audit():
    """AuditRecorder double; assertions inspect the awaited calls"""
    return AsyncMock()


@pytest.fixture
def rate_limiter():
    """RateLimiter double that lets every request through"""
    limiter = MagicMock()
    limiter.check_user = AsyncMock(return_value=Return.ok())
    limiter.check_ip = AsyncMock(return_value=Return.ok())
    return limiter


@pytest.fixture
def make_user():
    """Factory for User entities with a fresh id and email"""

    def _make_user(role=UserRole.member, church_id=None, **fields) -> User:
        return User(
            id=fields.pop("id", uuid4()),
            email=fields.pop("email", f"{uuid4().hex[:8]}@example.com"),
            password_hash="hash",
            display_name=fields.pop("display_name", "Test User"),
            role=role,
            church_id=church_id,
            **fields,
        )

    return _make_user
