from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status

from notes_api.api.deps import get_auth_service, get_settings
from notes_api.config import SESSION_COOKIE_MAX_AGE, SESSION_COOKIE_NAME, Settings
from notes_api.models.auth import LoginRequest, MessageResponse, RegisterRequest, UserOut
from notes_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/user", tags=["auth"])


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


@router.get("/", response_model=MessageResponse)
async def index() -> MessageResponse:
    return MessageResponse(message="Hello World")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def register(req: RegisterRequest, auth: AuthService = Depends(get_auth_service)) -> MessageResponse:
    await auth.register(req)
    return MessageResponse(message="Created new user successfully")


@router.post("/login", response_model=UserOut)
async def login(
    req: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> UserOut:
    rec, token = await auth.login(req)
    _set_session_cookie(response, token, settings)
    return UserOut(**rec.to_public_dict())


@router.get("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: Settings = Depends(get_settings)) -> MessageResponse:
    # no server-side session to revoke; dropping the cookie is the whole logout
    _clear_session_cookie(response, settings)
    return MessageResponse(message="User logged out successfully")


@router.get("/refetch", response_model=UserOut)
async def refetch(
    token: Optional[str] = Cookie(default=None),
    auth: AuthService = Depends(get_auth_service),
) -> UserOut:
    rec = await auth.refetch(token)
    return UserOut(**rec.to_public_dict())
