import bcrypt
import pytest

from congregation.api.utils.jwt import verify_jwt
from congregation.app.use_cases.auth import LoginCommand, LoginUseCase
from congregation.domain.entities import UserRole

PASSWORD = "SecurePass123!"


@pytest.fixture
def registered_user(make_user):
    user = make_user(role=UserRole.member, email="grace@example.com")
    # Low cost factor keeps the test fast; checkpw reads the cost from the hash
    user.password_hash = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()
    return user


@pytest.fixture
def use_case(mock_uow, rate_limiter, registered_user):
    mock_uow.users.get_by_email.return_value = registered_user
    mock_uow.users.update.side_effect = lambda user: user
    return LoginUseCase(mock_uow, rate_limiter)


@pytest.mark.asyncio
async def test_successful_login(use_case, mock_uow, rate_limiter, registered_user):
    # Act
    result = await use_case.execute(
        LoginCommand(email="grace@example.com", password=PASSWORD), "10.0.0.2"
    )

    # Assert
    assert result.is_ok()
    assert result.value.user.id == registered_user.id
    assert result.value.user.role == UserRole.member
    assert result.value.user.last_login_at is not None
    assert verify_jwt(result.value.access_token)["sub"] == str(registered_user.id)

    rate_limiter.check_ip.assert_awaited_once_with("10.0.0.2", "login", "auth")
    mock_uow.users.update.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_wrong_password(use_case, mock_uow):
    result = await use_case.execute(
        LoginCommand(email="grace@example.com", password="WrongPass999!"), "10.0.0.2"
    )

    assert result.is_err()
    assert result.error.code == "UNAUTHENTICATED"
    assert result.error.message == "Invalid email or password"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_email_gives_same_error_as_wrong_password(use_case, mock_uow):
    """Unknown email and wrong password are indistinguishable to the caller"""
    mock_uow.users.get_by_email.return_value = None

    result = await use_case.execute(
        LoginCommand(email="nobody@example.com", password=PASSWORD), "10.0.0.2"
    )

    assert result.is_err()
    assert result.error.code == "UNAUTHENTICATED"
    assert result.error.message == "Invalid email or password"
