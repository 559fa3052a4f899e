import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_successful_signup(client: AsyncClient):
    """Successful Signup

    Given no user exists with email "grace@example.com"
    When I submit signup with a valid email and password
    Then a guest account on the free tier is created
    And I receive an access token
    """
    response = await client.post("/api/auth/signup", json={
        "email": "Grace@Example.com",
        "password": "SecurePass123!",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "grace@example.com"
    assert data["user"]["display_name"] == "grace"
    assert data["user"]["role"] == "guest"
    assert data["user"]["subscription_tier"] == "free"
    assert data["user"]["church_id"] is None


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient):
    """Given an account exists, signing up again with the same email fails with 409"""
    payload = {"email": "dup@example.com", "password": "SecurePass123!"}
    first = await client.post("/api/auth/signup", json=payload)
    assert first.status_code == 201

    response = await client.post("/api/auth/signup", json=payload)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_signup_validation_error(client: AsyncClient):
    """Invalid email and short password are rejected before any use case runs"""
    response = await client.post("/api/auth/signup", json={
        "email": "not-an-email",
        "password": "short",
    })

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_ARGUMENT"
    assert "email" in error["message"]
    assert "password" in error["message"]


@pytest.mark.asyncio
async def test_login_and_profile(client: AsyncClient):
    """Login

    Given I signed up
    When I log in with the same credentials
    Then I receive a token that loads my profile from /users/me
    """
    await client.post("/api/auth/signup", json={
        "email": "mary@example.com",
        "password": "SecurePass123!",
        "display_name": "Mary",
    })

    login = await client.post("/api/auth/login", json={
        "email": "mary@example.com",
        "password": "SecurePass123!",
    })
    assert login.status_code == 200
    token = login.json()["access_token"]

    response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["display_name"] == "Mary"
    assert response.json()["last_login_at"] is not None


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient):
    await client.post("/api/auth/signup", json={
        "email": "mary@example.com",
        "password": "SecurePass123!",
    })

    response = await client.post("/api/auth/login", json={
        "email": "mary@example.com",
        "password": "WrongPass999!",
    })

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_rate_limited_by_address(client: AsyncClient):
    """Given 10 login attempts from one address in 15 minutes, the 11th gets 429"""
    payload = {"email": "nobody@example.com", "password": "WrongPass999!"}
    for _ in range(10):
        response = await client.post("/api/auth/login", json=payload)
        assert response.status_code == 401

    response = await client.post("/api/auth/login", json=payload)

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RESOURCE_EXHAUSTED"


@pytest.mark.asyncio
async def test_missing_token(client: AsyncClient):
    response = await client.get("/api/users/me")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient):
    response = await client.get(
        "/api/users/me", headers={"Authorization": "Bearer invalid_token_here"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_token_of_deleted_user(client: AsyncClient, create_user):
    """A valid token whose user no longer exists resolves to 404"""
    _, headers = await create_user()
    deleted = await client.delete("/api/users/me", headers=headers)
    assert deleted.status_code == 200

    response = await client.get("/api/users/me", headers=headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
