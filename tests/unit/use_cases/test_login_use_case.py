from unittest.mock import AsyncMock

import pytest

from auth_service.adapter.services.password_hasher import BcryptPasswordHasher
from auth_service.app.services.token_hash import compare_token_hash
from auth_service.app.use_cases.auth.dtos import LoginCommand
from auth_service.app.use_cases.auth.login_use_case import LoginUseCase
from tests.utils.factories import make_user

PASSWORD = "SecurePass123!"


@pytest.fixture(scope="module")
def password_hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def user(password_hasher):
    return make_user(password_hash=password_hasher.hash(PASSWORD))


@pytest.mark.asyncio
async def test_successful_login(mock_uow, password_hasher, token_codec, user):
    mock_uow.users.get_by_email = AsyncMock(return_value=user)
    mock_uow.sessions.create = AsyncMock(side_effect=lambda session: session)

    command = LoginCommand(
        email=user.email, password=PASSWORD, ip_address="10.0.0.1", user_agent="pytest"
    )
    result = await LoginUseCase(mock_uow, password_hasher, token_codec).execute(command)

    assert result.is_ok()
    response = result.value
    assert response.user.id == user.id
    assert "password_hash" not in response.user.model_dump()

    access_claims = token_codec.verify_access(response.access_token)
    refresh_claims = token_codec.verify_refresh(response.refresh_token)
    assert access_claims.session_id == response.session_id
    assert refresh_claims.session_id == response.session_id
    assert access_claims.roles == ["user"]

    session = mock_uow.sessions.create.call_args[0][0]
    assert session.id == response.session_id
    assert session.user_id == user.id
    assert session.valid is True
    assert session.ip_address == "10.0.0.1"
    assert session.user_agent == "pytest"
    assert session.refresh_token_hash != response.refresh_token
    assert compare_token_hash(session.refresh_token_hash, response.refresh_token)
    assert session.expires_at.tzinfo is None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_are_indistinguishable(
    mock_uow, password_hasher, token_codec, user
):
    mock_uow.sessions.create = AsyncMock()
    use_case = LoginUseCase(mock_uow, password_hasher, token_codec)

    mock_uow.users.get_by_email = AsyncMock(return_value=user)
    wrong_password = await use_case.execute(
        LoginCommand(email=user.email, password="WrongPassword!")
    )

    mock_uow.users.get_by_email = AsyncMock(return_value=None)
    unknown_email = await use_case.execute(
        LoginCommand(email="nobody@example.com", password=PASSWORD)
    )

    assert wrong_password.is_err()
    assert unknown_email.is_err()
    assert wrong_password.error == unknown_email.error
    assert wrong_password.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_email_still_runs_a_password_check(mock_uow, token_codec):
    hasher = BcryptPasswordHasher(rounds=4)
    mock_uow.users.get_by_email = AsyncMock(return_value=None)

    calls = []
    original_verify = hasher.verify

    def tracking_verify(digest, password):
        calls.append(digest)
        return original_verify(digest, password)

    hasher.verify = tracking_verify

    result = await LoginUseCase(mock_uow, hasher, token_codec).execute(
        LoginCommand(email="nobody@example.com", password=PASSWORD)
    )

    assert result.is_err()
    assert calls == [None]


@pytest.mark.asyncio
async def test_each_login_opens_a_distinct_session(mock_uow, password_hasher, token_codec, user):
    mock_uow.users.get_by_email = AsyncMock(return_value=user)
    mock_uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    use_case = LoginUseCase(mock_uow, password_hasher, token_codec)

    first = await use_case.execute(LoginCommand(email=user.email, password=PASSWORD))
    second = await use_case.execute(LoginCommand(email=user.email, password=PASSWORD))

    assert first.value.session_id != second.value.session_id
