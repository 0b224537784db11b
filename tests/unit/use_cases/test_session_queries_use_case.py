"""
Unit tests for session lookup, "who am I" and logout
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from auth_service.app.use_cases.auth import (
    GetMeUseCase,
    LogoutUseCase,
    ValidateSessionUseCase,
)
from tests.utils.factories import make_session, make_user


@pytest.mark.asyncio
async def test_validate_live_session(mock_uow):
    session = make_session("user-1")
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)

    result = await ValidateSessionUseCase(mock_uow).execute(session.id)

    assert result.is_ok()
    assert result.value.id == session.id
    assert result.value.valid is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "session",
    [
        None,
        make_session("user-1", valid=False),
        make_session("user-1", expires_in=-timedelta(seconds=1)),
    ],
    ids=["missing", "invalidated", "expired"],
)
async def test_validate_dead_session(mock_uow, session):
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)

    result = await ValidateSessionUseCase(mock_uow).execute("sid")

    assert result.is_err()
    assert result.error.code == "SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_validate_empty_session_id(mock_uow):
    mock_uow.sessions.get_by_id = AsyncMock()

    result = await ValidateSessionUseCase(mock_uow).execute("")

    assert result.error.code == "SESSION_NOT_FOUND"
    mock_uow.sessions.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_get_me_returns_session_owner(mock_uow):
    user = make_user()
    session = make_session(user.id)
    mock_uow.sessions.get_by_id = AsyncMock(return_value=session)
    mock_uow.users.get_by_id = AsyncMock(return_value=user)

    result = await GetMeUseCase(mock_uow).execute(session.id)

    assert result.is_ok()
    assert result.value.id == user.id
    assert result.value.email == user.email
    mock_uow.users.get_by_id.assert_called_once_with(user.id)


@pytest.mark.asyncio
async def test_get_me_without_session(mock_uow):
    mock_uow.sessions.get_by_id = AsyncMock(return_value=None)
    mock_uow.users.get_by_id = AsyncMock()

    result = await GetMeUseCase(mock_uow).execute("sid")

    assert result.error.code == "SESSION_NOT_FOUND"
    mock_uow.users.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_get_me_without_user(mock_uow):
    mock_uow.sessions.get_by_id = AsyncMock(return_value=make_session("gone"))
    mock_uow.users.get_by_id = AsyncMock(return_value=None)

    result = await GetMeUseCase(mock_uow).execute("sid")

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_logout_deletes_session(mock_uow):
    mock_uow.sessions.delete = AsyncMock(return_value=True)

    result = await LogoutUseCase(mock_uow).execute("sid-1")

    assert result.is_ok()
    assert result.value.session_id == "sid-1"
    assert result.value.changed is True
    mock_uow.sessions.delete.assert_called_once_with("sid-1")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_is_idempotent(mock_uow):
    mock_uow.sessions.delete = AsyncMock(return_value=False)

    result = await LogoutUseCase(mock_uow).execute("sid-1")

    assert result.is_ok()
    assert result.value.changed is False
