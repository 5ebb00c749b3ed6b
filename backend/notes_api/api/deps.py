from __future__ import annotations

from typing import Optional

from fastapi import Cookie, Depends, Request

from notes_api.config import Settings
from notes_api.errors import InvalidToken, Unauthenticated
from notes_api.services.auth_service import AuthService
from notes_api.services.notes_service import NotesService
from notes_api.utils.jwt_auth import verify_token


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_notes_service(request: Request) -> NotesService:
    return request.app.state.notes_service


def get_current_user_id(
    token: Optional[str] = Cookie(default=None),
    settings: Settings = Depends(get_settings),
) -> str:
    """Authenticate a request from its session cookie and return the user id.

    Runs before any handler on a protected route; nothing past this point
    sees a request without a verified identity.
    """
    if not token:
        raise Unauthenticated("User is not authorized or token is missing")

    result = verify_token(token, secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
    if not result.ok:
        raise InvalidToken("Invalid or expired token")

    user_id = result.subject
    if user_id is None:
        raise Unauthenticated("User not authenticated")
    return user_id
