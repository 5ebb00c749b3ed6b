from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

APP_VERSION = "1.0.0"
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

SESSION_COOKIE_NAME = "token"
SESSION_COOKIE_MAX_AGE = 7 * 24 * 60 * 60  # 7 days


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment by ``load_settings``."""

    data_dir: Path
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_exp_minutes: int = 10080
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cookie_secure(self) -> bool:
        return self.is_production


def load_settings() -> Settings:
    secret = os.getenv("JWT_SECRET", "")
    if not secret:
        # pentru teste/dev se setează în env; în prod e obligatoriu
        raise RuntimeError("JWT_SECRET is not set")

    return Settings(
        data_dir=Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR))),
        jwt_secret=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_exp_minutes=_env_int("JWT_EXP_MINUTES", 10080),
        environment=os.getenv("APP_ENV", "development").strip().lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
