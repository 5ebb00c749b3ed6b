"""HTTP error taxonomy.

Every error a service can surface is one of these. They subclass FastAPI's
``HTTPException`` so the framework renders them as ``{"detail": <message>}``
with the matching status code.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, status


class ApiError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal Server Error"

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(status_code=type(self).status_code, detail=detail or self.default_detail)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "User is not authorized or token is missing"


class InvalidToken(Unauthenticated):
    default_detail = "Invalid or expired token"


class TokenExpired(InvalidToken):
    default_detail = "Expired JWT token"


class InvalidCredentials(Unauthenticated):
    default_detail = "Invalid credentials"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class InternalError(ApiError):
    pass
