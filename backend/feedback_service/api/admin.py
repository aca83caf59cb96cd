"""Admin API router: token login/logout and feedback listing.

Implements:
- POST /admin/login   (single configured admin account -> bearer token)
- POST /admin/logout  (revokes the bearer token if present; always succeeds)
- GET  /admin/feedbacks (bearer token required)

Tokens are kept in the in-memory SessionRegistry and are lost on restart.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header

from feedback_service.api.dependencies import get_feedback_service, get_session_registry
from feedback_service.lib.exceptions import AuthError, StorageError
from feedback_service.lib.feedback.service import FeedbackService
from feedback_service.lib.sessions import Session, SessionRegistry
from feedback_service.schemas.admin import LoginRequest, LoginResponse, LogoutResponse
from feedback_service.schemas.feedback import ErrorResponse, FeedbackListResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin")


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: <scheme> <token>`` header.

    The header must split into exactly two space-separated parts; the scheme
    itself is not inspected.
    """
    parts = (authorization or "").split(" ")
    if len(parts) != 2 or not parts[1]:
        return None
    return parts[1]


def get_bearer_token(authorization: Annotated[Optional[str], Header()] = None) -> Optional[str]:
    return extract_bearer_token(authorization)


def _require_admin_impl(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> Session:
    session = registry.get(token)
    if session is None:
        raise AuthError("unauthorized")
    return session


def get_auth_dependency():
    """Get the auth dependency for admin route protection.

    Usage:
        @router.get("/endpoint")
        def protected_endpoint(session: Session = get_auth_dependency()):
            # session is the caller's live admin session
    """
    return Depends(_require_admin_impl)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "username or password missing"},
        401: {"model": ErrorResponse, "description": "invalid credentials"},
    },
)
def login(
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    credentials: Optional[LoginRequest] = None,
) -> LoginResponse:
    """Exchange the admin username/password for a bearer token."""
    credentials = credentials or LoginRequest()
    token = registry.login(credentials.username, credentials.password)
    return LoginResponse(success=True, token=token)


@router.post("/logout", response_model=LogoutResponse)
def logout(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> LogoutResponse:
    """Revoke the bearer token if it is known. Always returns success."""
    registry.logout(token)
    return LogoutResponse(success=True)


@router.get(
    "/feedbacks",
    response_model=FeedbackListResponse,
    responses={
        401: {"model": ErrorResponse, "description": "missing or invalid token"},
        500: {"model": ErrorResponse, "description": "feedback store unreadable"},
    },
)
def list_feedbacks(
    service: Annotated[FeedbackService, Depends(get_feedback_service)],
    session: Session = get_auth_dependency(),
) -> FeedbackListResponse:
    """List stored feedback, most recently submitted first."""
    try:
        entries = service.list_feedbacks()
    except StorageError as e:
        logger.error('Failed to read feedbacks: %s', e.details.get("error", e))
        raise StorageError("failed to read feedbacks")

    logger.info('Admin %s listed %d feedback entries', session.username, len(entries))
    return FeedbackListResponse(
        success=True,
        feedbacks=[entry.to_record() for entry in entries],
    )
