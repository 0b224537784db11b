"""
Unit tests for admin user creation and update
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from auth_service.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
)
from auth_service.domain.entities import UserRole
from tests.utils.factories import make_user


@pytest.fixture
def password_hasher():
    hasher = MagicMock()
    hasher.hash.return_value = "new-hash"
    return hasher


@pytest.mark.asyncio
async def test_create_user_with_explicit_role(mock_uow, password_hasher):
    mock_uow.users.get_by_email = AsyncMock(return_value=None)
    mock_uow.users.create = AsyncMock(side_effect=lambda user: user)
    command = CreateUserCommand(
        username="carol", email="carol@example.com", password="S3cretPass!", role=UserRole.admin
    )

    result = await CreateUserUseCase(mock_uow, password_hasher).execute(command)

    assert result.is_ok()
    assert result.value.role == "admin"
    created = mock_uow.users.create.call_args[0][0]
    assert created.password_hash == "new-hash"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_user_defaults_to_user_role(mock_uow, password_hasher):
    mock_uow.users.get_by_email = AsyncMock(return_value=None)
    mock_uow.users.create = AsyncMock(side_effect=lambda user: user)
    command = CreateUserCommand(username="carol", email="carol@example.com", password="S3cretPass!")

    result = await CreateUserUseCase(mock_uow, password_hasher).execute(command)

    assert result.value.role == "user"


@pytest.mark.asyncio
async def test_create_user_duplicate_email(mock_uow, password_hasher):
    mock_uow.users.get_by_email = AsyncMock(return_value=make_user("carol@example.com"))
    mock_uow.users.create = AsyncMock()
    command = CreateUserCommand(username="carol", email="carol@example.com", password="S3cretPass!")

    result = await CreateUserUseCase(mock_uow, password_hasher).execute(command)

    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_update_user_changes_only_given_fields(mock_uow, password_hasher):
    user = make_user()
    user.updated_at = user.updated_at - timedelta(hours=1)
    before = user.updated_at
    mock_uow.users.get_by_id = AsyncMock(return_value=user)
    mock_uow.users.update = AsyncMock(side_effect=lambda u: u)

    result = await UpdateUserUseCase(mock_uow, password_hasher).execute(
        user.id, UpdateUserCommand(fullname="Alice Renamed", avatar="https://cdn/a.png")
    )

    assert result.is_ok()
    assert result.value.fullname == "Alice Renamed"
    assert result.value.avatar == "https://cdn/a.png"
    assert result.value.email == "alice@example.com"
    assert user.updated_at > before
    password_hasher.hash.assert_not_called()
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_update_user_rehashes_new_password(mock_uow, password_hasher):
    user = make_user()
    mock_uow.users.get_by_id = AsyncMock(return_value=user)
    mock_uow.users.update = AsyncMock(side_effect=lambda u: u)

    await UpdateUserUseCase(mock_uow, password_hasher).execute(
        user.id, UpdateUserCommand(password="Another1Pass!")
    )

    password_hasher.hash.assert_called_once_with("Another1Pass!")
    assert user.password_hash == "new-hash"


@pytest.mark.asyncio
async def test_update_user_email_taken_by_someone_else(mock_uow, password_hasher):
    user = make_user()
    mock_uow.users.get_by_id = AsyncMock(return_value=user)
    mock_uow.users.get_by_email = AsyncMock(return_value=make_user("bob@example.com"))
    mock_uow.users.update = AsyncMock()

    result = await UpdateUserUseCase(mock_uow, password_hasher).execute(
        user.id, UpdateUserCommand(email="bob@example.com")
    )

    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_update_missing_user(mock_uow, password_hasher):
    mock_uow.users.get_by_id = AsyncMock(return_value=None)

    result = await UpdateUserUseCase(mock_uow, password_hasher).execute(
        "nope", UpdateUserCommand(fullname="x")
    )

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_password_refused_by_hasher(mock_uow, password_hasher):
    user = make_user()
    mock_uow.users.get_by_id = AsyncMock(return_value=user)
    mock_uow.users.update = AsyncMock()
    password_hasher.hash.side_effect = ValueError("password cannot be longer than 72 bytes")

    result = await UpdateUserUseCase(mock_uow, password_hasher).execute(
        user.id, UpdateUserCommand(password="é" * 72)
    )

    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.users.update.assert_not_called()
