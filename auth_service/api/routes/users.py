from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from auth_service.api.error import ClientError, ServerError
from auth_service.api.utils.authorization import AuthorizationGate
from auth_service.api.utils.validators import check_password_bytes
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth import UserInfo
from auth_service.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
)
from auth_service.depends import get_password_hasher, get_unit_of_work
from auth_service.domain.entities import UserFilter, UserRole

router = APIRouter(
    prefix="/users",
    tags=["User"],
    dependencies=[Depends(AuthorizationGate(roles=[UserRole.admin.value]))],
)


class CreateUserRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    fullname: str = Field("", max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, description="8 chars to 72 UTF-8 bytes")
    role: UserRole = UserRole.user

    @field_validator("password")
    @classmethod
    def password_within_limit(cls, value: str) -> str:
        return check_password_bytes(value)


class UpdateUserRequest(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=100)
    fullname: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)
    avatar: Optional[str] = Field(None, max_length=512)

    @field_validator("password")
    @classmethod
    def password_within_limit(cls, value: Optional[str]) -> Optional[str]:
        return check_password_bytes(value)


class DeleteUserResponse(BaseModel):
    user_id: str
    deleted_sessions: int


@router.get("", status_code=status.HTTP_200_OK, response_model=List[UserInfo])
async def list_users(
    email: Optional[str] = Query(None),
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List users (admin only)"""
    use_case = ListUsersUseCase(uow)
    result = await use_case.execute(UserFilter(email=email, role=role, search=search))

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_user(user_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Get User (admin only)

    Raises:
        - 404 Not Found: User not found
    """
    use_case = GetUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def create_user(
    request: CreateUserRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Create User (admin only)

    Unlike registration, the caller picks the role (default user).

    Raises:
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Password rejected by the hasher
    """
    use_case = CreateUserUseCase(uow, password_hasher)
    result = await use_case.execute(CreateUserCommand(**request.model_dump()))

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value


@router.put("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Update User (admin only)

    Omitted fields keep their value. A new password is re-hashed; the
    user's open sessions stay valid.

    Raises:
        - 404 Not Found: User not found
        - 409 Conflict: Email belongs to another user
        - 422 Unprocessable Entity: Password rejected by the hasher
    """
    use_case = UpdateUserUseCase(uow, password_hasher)
    result = await use_case.execute(user_id, UpdateUserCommand(**request.model_dump()))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse
)
async def delete_user(user_id: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Delete User (admin only)

    Deletes the user and all of their sessions.

    Raises:
        - 404 Not Found: User not found
    """
    use_case = DeleteUserUseCase(uow)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
