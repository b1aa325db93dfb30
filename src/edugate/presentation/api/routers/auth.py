"""Authentication router for registration, login and session checks."""

import logging

from fastapi import APIRouter, Request, Response

from edugate.presentation.api.dependencies import (
    AuthService,
    DBSession,
    SessionMgr,
    SettingsDep,
)
from edugate.presentation.api.schemas.auth import (
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
)
from edugate_config.settings import Settings
from edugate_identity import ResultMessage

logger = logging.getLogger(__name__)

router = APIRouter()

# The session cookie is only sent to API endpoints
SESSION_COOKIE_PATH = "/api"


def _read_session_cookie(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.session_cookie_name) or None


def _set_session_cookie(
    response: Response,
    session_id: str,
    settings: Settings,
) -> None:
    """Set the session id as an HttpOnly cookie.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript (XSS protection)
    - Secure: Only sent over HTTPS (when cookie_secure=True)
    - SameSite: Prevents CSRF attacks
    - Path restricted: Only sent to /api endpoints
    """
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
        max_age=settings.session_ttl_seconds,
        path=SESSION_COOKIE_PATH,
        domain=settings.api_cookie_domain,
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    """Clear the session cookie (for logout)."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path=SESSION_COOKIE_PATH,
        domain=settings.api_cookie_domain,
    )


@router.post(
    "/register",
    summary="Register a new user",
    responses={
        200: {"description": "User registered (register_complete)"},
        400: {"description": "bad_school or bad_data"},
        409: {"description": "login_exists or email_exists"},
        500: {"description": "server_error"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> MessageResponse:
    """Create a user account in an existing school."""
    try:
        await auth_service.register(
            school_id=request.school_id,
            first_name=request.first_name,
            last_name=request.last_name,
            login=request.login,
            password=request.password,
            email=request.email,
            role=request.role,
            status=request.status,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return MessageResponse(message=ResultMessage.REGISTER_COMPLETE.value)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful, session cookie set"},
        400: {"description": "Malformed login or password (bad_data)"},
        401: {"description": "Invalid credentials (bad_data)"},
        500: {"description": "server_error"},
    },
)
async def login(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    auth_service: AuthService,
    session: DBSession,
    settings: SettingsDep,
) -> ProfileResponse:
    """
    Authenticate with login and password.

    Opens a server-side session and returns its profile snapshot. Any
    session presented with the request is destroyed first.
    """
    try:
        handle = await auth_service.login(
            login=request.login,
            password=request.password,
            previous_session_id=_read_session_cookie(http_request, settings),
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    _set_session_cookie(response, handle.session_id, settings)
    return ProfileResponse.from_snapshot(handle.snapshot)


@router.get(
    "/checkSession",
    summary="Return the current session profile",
    responses={
        200: {"description": "Profile of the active session, or null"},
    },
)
async def check_session(
    http_request: Request,
    session_manager: SessionMgr,
    session: DBSession,
    settings: SettingsDep,
) -> ProfileResponse | None:
    try:
        snapshot = await session_manager.read(_read_session_cookie(http_request, settings))
        # Reading may have purged an expired row
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    if snapshot is None:
        return None
    return ProfileResponse.from_snapshot(snapshot)


@router.get(
    "/logout",
    summary="Logout user",
    responses={
        200: {"description": "Logged out (logout_success)"},
        500: {"description": "server_error"},
    },
)
async def logout(
    http_request: Request,
    response: Response,
    session_manager: SessionMgr,
    session: DBSession,
    settings: SettingsDep,
) -> MessageResponse:
    """Destroy the current session. Succeeds when there is none."""
    try:
        await session_manager.destroy(_read_session_cookie(http_request, settings))
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    _clear_session_cookie(response, settings)
    logger.debug("Logout completed (session cookie cleared)")
    return MessageResponse(message=ResultMessage.LOGOUT_SUCCESS.value)
