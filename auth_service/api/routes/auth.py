from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from libs.result import Error
from auth_service.api.error import ClientError, ServerError
from auth_service.api.utils.authorization import AuthorizationGate
from auth_service.api.utils.cookies import (
    REFRESH_TOKEN_COOKIE,
    clear_auth_cookies,
    set_auth_cookies,
)
from auth_service.api.utils.validators import check_password_bytes
from auth_service.app.services.password_hasher import IPasswordHasher
from auth_service.app.services.token_codec import ClaimsPayload, TokenCodec
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth import (
    AuthResponse,
    GetMeUseCase,
    LoginCommand,
    LoginUseCase,
    LogoutUseCase,
    RefreshCommand,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    SessionInfo,
    UserInfo,
    ValidateSessionUseCase,
)
from auth_service.depends import (
    get_config,
    get_password_hasher,
    get_token_codec,
    get_unit_of_work,
)
from auth_service.domain.errors import TokenVerifyError

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else ""


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    username: str = Field(..., min_length=1, max_length=100, description="Username")
    fullname: str = Field("", max_length=255, description="Full name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ..., min_length=8, description="User password (8 chars to 72 UTF-8 bytes)"
    )

    @field_validator("password")
    @classmethod
    def password_within_limit(cls, value: str) -> str:
        return check_password_bytes(value)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Registration

    Creates a user account with role=user. Does not log the user in.

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input, including passwords over
          72 UTF-8 bytes
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        username=request.username,
        fullname=request.fullname,
        email=request.email,
        password=request.password,
    )

    use_case = RegisterUseCase(uow, password_hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    ip_address/user_agent default to the request's own values.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    ip_address: Optional[str] = Field(None, max_length=64)
    user_agent: Optional[str] = Field(None, max_length=512)

    @field_validator("password")
    @classmethod
    def password_within_limit(cls, value: str) -> str:
        return check_password_bytes(value)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    token_codec: TokenCodec = Depends(get_token_codec),
    config=Depends(get_config),
):
    """
    User Login

    Authenticates the user, opens a session and sets both auth cookies.

    Raises:
        - 401 Unauthorized: Invalid credentials (unknown email or wrong password)
        - 500 Internal Server Error: Server error
    """
    command = LoginCommand(
        email=request.email,
        password=request.password,
        ip_address=request.ip_address or _client_ip(http_request),
        user_agent=request.user_agent or http_request.headers.get("User-Agent", ""),
    )

    use_case = LoginUseCase(uow, password_hasher, token_codec)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_auth_cookies(response, result.value, token_codec, config.AUTH_COOKIE_DOMAIN)
    return result.value


class RefreshRequest(BaseModel):
    """Optional body for clients that cannot send the refresh cookie"""

    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def refresh(
    http_request: Request,
    response: Response,
    request: Optional[RefreshRequest] = None,
    refresh_cookie: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    config=Depends(get_config),
):
    """
    Refresh Token Rotation

    Exchanges the refresh token (cookie first, then body) for a new pair.
    The session id is preserved; the old refresh token stops working.

    Raises:
        - 401 Unauthorized: Missing/invalid token, dead session, unknown user,
          concurrent rotation, or reuse of a superseded token (reuse also
          deletes the session and clears both cookies)
        - 500 Internal Server Error: Server error
    """
    refresh_token = refresh_cookie or (request.refresh_token if request else "")
    if not refresh_token:
        raise ClientError(
            Error("UNAUTHORIZED", "Missing refresh token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    command = RefreshCommand(
        refresh_token=refresh_token,
        ip_address=_client_ip(http_request),
        user_agent=http_request.headers.get("User-Agent", ""),
    )

    use_case = RefreshTokenUseCase(uow, token_codec)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "REFRESH_TOKEN_REUSED":
            raise ClientError(
                error,
                status_code=status.HTTP_401_UNAUTHORIZED,
                clear_credentials=True,
            )
        elif error.code in (
            "INVALID_TOKEN",
            "INVALID_SESSION",
            "USER_NOT_FOUND",
            "ROTATION_CONFLICT",
        ):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    set_auth_cookies(response, result.value, token_codec, config.AUTH_COOKIE_DOMAIN)
    return result.value


class LogoutResponse(BaseModel):
    message: str
    session_id: str


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    response: Response,
    claims: Optional[ClaimsPayload] = Depends(AuthorizationGate(allow_anonymous=True)),
    refresh_cookie: Optional[str] = Cookie(None, alias=REFRESH_TOKEN_COOKIE),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    config=Depends(get_config),
):
    """
    Logout

    Resolves the session id from the access token (header or cookie), else
    from the refresh cookie; deletes the session and clears both cookies.
    Logging out an already-ended session still succeeds.

    Raises:
        - 401 Unauthorized: No verifiable token identifies a session
        - 500 Internal Server Error: Server error
    """
    session_id = claims.session_id if claims else ""
    if not session_id and refresh_cookie:
        try:
            session_id = token_codec.verify_refresh(refresh_cookie).session_id
        except TokenVerifyError:
            session_id = ""

    if not session_id:
        raise ClientError(
            Error("UNAUTHORIZED", "Unable to determine session"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    use_case = LogoutUseCase(uow)
    result = await use_case.execute(session_id)

    if result.is_err():
        raise ServerError(result.error)

    clear_auth_cookies(response, config.AUTH_COOKIE_DOMAIN)
    return {"message": "Logged out successfully", "session_id": session_id}


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def me(
    claims: ClaimsPayload = Depends(AuthorizationGate()),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current User

    Resolves the access token's session to its user.

    Raises:
        - 401 Unauthorized: Missing/invalid token, or session ended
        - 404 Not Found: Session's user no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = GetMeUseCase(uow)
    result = await use_case.execute(claims.session_id)

    if result.is_err():
        error = result.error
        if error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/session", status_code=status.HTTP_200_OK, response_model=SessionInfo)
async def current_session(
    claims: ClaimsPayload = Depends(AuthorizationGate()),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Session

    The session named by the access token's sid, if it is still live.
    A token that outlives a logout or invalidation is refused here.

    Raises:
        - 401 Unauthorized: Missing/invalid token, or session ended
        - 500 Internal Server Error: Server error
    """
    use_case = ValidateSessionUseCase(uow)
    result = await use_case.execute(claims.session_id)

    if result.is_err():
        error = result.error
        if error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
