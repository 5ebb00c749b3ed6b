"""Registration, login and session refetch.

Login and refetch never say more than they have to: an unknown identifier and
a wrong password produce the same ``InvalidCredentials`` error, and a
registration conflict does not reveal whether the username or the email
collided.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from starlette.concurrency import run_in_threadpool

from notes_api.config import Settings
from notes_api.errors import (
    Conflict,
    InternalError,
    InvalidCredentials,
    InvalidToken,
    NotFound,
    TokenExpired,
    Unauthenticated,
    ValidationError,
)
from notes_api.models.auth import LoginRequest, RegisterRequest
from notes_api.storage.users_store import UserExistsError, UserRecord, UsersStore
from notes_api.utils.auth_hash import hash_password, verify_password
from notes_api.utils.jwt_auth import TokenError, create_access_token, verify_token

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # compared against when the identifier is unknown, so both failures cost one verify
    return hash_password("not-a-real-password")


class AuthService:
    def __init__(self, users: UsersStore, settings: Settings):
        self.users = users
        self.settings = settings

    async def register(self, req: RegisterRequest) -> UserRecord:
        if not (req.username and req.full_name and req.email and req.password):
            raise ValidationError("All fields are required")

        hpw = await run_in_threadpool(hash_password, req.password)  # corect: nu stoca niciodată plaintext
        try:
            rec = await run_in_threadpool(
                self.users.create,
                username=req.username,
                full_name=req.full_name,
                email=req.email,
                hashed_password=hpw,
            )
        except UserExistsError:
            raise Conflict("User with same username or email already exists")
        except (OSError, ValueError, KeyError) as exc:
            logger.exception("Error creating user")
            raise InternalError("Error creating a new user") from exc

        logger.info("Registered user %s", rec.id)
        return rec

    async def login(self, req: LoginRequest) -> tuple[UserRecord, str]:
        """Check credentials and mint a session token for the matching user."""
        if not (req.username or req.email) or not req.password:
            raise ValidationError("Username/email and password are required")

        try:
            rec = await run_in_threadpool(
                self.users.find_by_username_or_email, username=req.username, email=req.email
            )
        except (OSError, ValueError, KeyError) as exc:
            logger.exception("Login lookup failed")
            raise InternalError() from exc

        hashed = rec.hashed_password if rec is not None else await run_in_threadpool(_dummy_hash)
        password_ok = await run_in_threadpool(verify_password, req.password, hashed)
        if rec is None or not password_ok:
            logger.info("Failed login attempt")
            raise InvalidCredentials()

        token = create_access_token(
            rec.id,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            expires_minutes=self.settings.jwt_exp_minutes,
        )
        return rec, token

    async def refetch(self, token: Optional[str]) -> UserRecord:
        if not token:
            raise Unauthenticated("No token provided")

        result = verify_token(token, secret=self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)
        if result.error is TokenError.EXPIRED:
            raise TokenExpired("Expired JWT token")
        if result.error is TokenError.INVALID:
            raise InvalidToken("Invalid JWT token")
        if not result.ok:
            raise InternalError("JWT verification failed")

        user_id = result.subject
        if user_id is None:
            raise NotFound("User not found")

        try:
            rec = await run_in_threadpool(self.users.get, user_id)
        except (OSError, ValueError, KeyError) as exc:
            logger.exception("User retrieval failed")
            raise InternalError() from exc

        if rec is None:
            # token outlived its user
            raise NotFound("User not found")
        return rec
