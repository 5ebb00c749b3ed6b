from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt

logger = logging.getLogger(__name__)


class TokenError(str, Enum):
    EXPIRED = "expired"
    INVALID = "invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class TokenResult:
    """Outcome of verifying a session token: either ``claims`` or ``error``."""

    claims: Optional[dict[str, Any]] = None
    error: Optional[TokenError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.claims is not None

    @property
    def subject(self) -> Optional[str]:
        if not self.claims:
            return None
        sub = self.claims.get("sub")
        return str(sub) if sub else None


def create_access_token(subject: str, *, secret: str, algorithm: str = "HS256", expires_minutes: int = 10080) -> str:
    if not secret:
        raise ValueError("JWT secret must not be empty")
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=max(1, int(expires_minutes)))
    payload = {"sub": subject, "iat": int(now.timestamp()), "exp": int(exp.timestamp())}
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, *, secret: str, algorithm: str = "HS256") -> TokenResult:
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        return TokenResult(error=TokenError.EXPIRED)
    except JWTError as exc:
        logger.warning("Rejected session token: %s", exc)
        return TokenResult(error=TokenError.INVALID)
    except Exception:
        logger.exception("Session token verification failed")
        return TokenResult(error=TokenError.FAILED)
    return TokenResult(claims=claims)
