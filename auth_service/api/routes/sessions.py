from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from auth_service.api.error import ClientError, ServerError
from auth_service.api.utils.authorization import AuthorizationGate
from auth_service.app.services.token_codec import ClaimsPayload
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.auth import SessionActionResponse, SessionInfo
from auth_service.app.use_cases.sessions import (
    InvalidateSessionUseCase,
    ListSessionsUseCase,
)
from auth_service.depends import get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionInfo])
async def list_sessions(
    user_id: Optional[str] = Query(None, description="Admins only: another user's id"),
    valid: Optional[bool] = Query(None, description="Filter by liveness flag"),
    claims: ClaimsPayload = Depends(AuthorizationGate()),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Sessions

    Lists the caller's sessions, newest first. Admins may pass user_id.

    Raises:
        - 403 Forbidden: Non-admin asking for another user's sessions
        - 500 Internal Server Error: Server error
    """
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(
        requesting_user_id=claims.user_id,
        requesting_roles=claims.roles,
        user_id=user_id,
        valid=valid,
    )

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_200_OK,
    response_model=SessionActionResponse,
)
async def invalidate_session(
    session_id: str,
    claims: ClaimsPayload = Depends(AuthorizationGate()),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invalidate Session

    Marks a session invalid so its refresh token stops working. The row is
    kept for audit. Repeating the call succeeds with changed=false.

    Authorization:
    - Users can invalidate their own sessions
    - Admins can invalidate any session

    Raises:
        - 403 Forbidden: Session belongs to another user
        - 404 Not Found: Session not found
        - 500 Internal Server Error: Server error
    """
    use_case = InvalidateSessionUseCase(uow)
    result = await use_case.execute(session_id, claims.user_id, claims.roles)

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "SESSION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
