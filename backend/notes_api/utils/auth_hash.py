"""Password hashing helpers using passlib.

Provides the two functions used by the register/login flow:
- hash_password(plain: str) -> str
- verify_password(plain: str, hashed: str) -> bool

Uses bcrypt via passlib's CryptContext. The bcrypt rounds (cost) can be configured
by the environment variable `BCRYPT_ROUNDS` (int). Default rounds are left to passlib/bcrypt
if not provided.
"""
from __future__ import annotations

import logging
import os
import warnings

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


def _rounds_from_env() -> int | None:
    raw = os.environ.get("BCRYPT_ROUNDS")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _build_context(rounds: int | None) -> CryptContext:
    try:
        if rounds:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        else:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")
        # forces backend loading now instead of on the first register request
        ctx.hash("probe")
        return ctx
    except Exception as exc:
        warnings.warn(
            "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
            f"Original error: {exc}",
            RuntimeWarning,
        )
        if rounds:
            return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto", pbkdf2_sha256__rounds=rounds)
        return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


pwd_context = _build_context(_rounds_from_env())


def hash_password(plain: str) -> str:
    """Hash a plaintext password with a fresh random salt."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash.

    Returns True if the password matches, False otherwise (including for a
    malformed stored hash).
    """
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False
