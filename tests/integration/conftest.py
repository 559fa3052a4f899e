from typing import Optional

import bcrypt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import congregation.domain.entities  # noqa: F401  registers the table models
from config import ApplicationConfig
from congregation.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from congregation.api.app import create_app
from congregation.api.utils.jwt import generate_jwt
from congregation.depends import get_unit_of_work, get_unit_of_work_factory
from congregation.domain.entities import User, UserRole

PASSWORD = "SecurePass123!"
# Hashed once; cost 4 keeps seeding fast
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File database: audit and rate-limit writes use their own connections
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def client(session_factory):
    app = create_app(ApplicationConfig, create_tables=False)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    def override_get_unit_of_work_factory():
        return lambda: SqlAlchemyUnitOfWork(session_factory(), owns_session=True)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_unit_of_work_factory] = override_get_unit_of_work_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def create_user(session_factory):
    """
    Insert a user directly and return (user, auth headers).

    Bypasses signup so tests can seed roles such as pastor and super_admin
    without spending the signup quota.
    """
    counter = {"n": 0}

    async def _create_user(role: UserRole = UserRole.guest, email: Optional[str] = None, **fields):
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@example.com",
            password_hash=PASSWORD_HASH,
            display_name=fields.pop("display_name", f"User {counter['n']}"),
            role=role,
            **fields,
        )
        async with session_factory() as session:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        headers = {"Authorization": f"Bearer {generate_jwt(user.id)}"}
        return user, headers

    return _create_user


@pytest_asyncio.fixture
async def church(client, create_user):
    """
    A church created through the API by a seeded pastor, with one joined member.

    Returns a dict with church_id, church_code and pastor/member headers.
    """
    pastor, pastor_headers = await create_user(UserRole.pastor, display_name="Pastor John")
    response = await client.post(
        "/api/churches", json={"name": "Grace Chapel"}, headers=pastor_headers
    )
    assert response.status_code == 201, response.text
    created = response.json()

    member, member_headers = await create_user(UserRole.guest, display_name="Mary")
    joined = await client.post(
        "/api/churches/join",
        json={"church_code": created["church_code"]},
        headers=member_headers,
    )
    assert joined.status_code == 200, joined.text

    return {
        "church_id": created["church_id"],
        "church_code": created["church_code"],
        "pastor": pastor,
        "pastor_headers": pastor_headers,
        "member": member,
        "member_headers": member_headers,
    }


@pytest.fixture
def admin_headers():
    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}
