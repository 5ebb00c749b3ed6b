from __future__ import annotations

import json
import logging
import os
import threading
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class UserExistsError(Exception):
    """Raised when the username or the email is already taken."""


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_safe_id(user_id: str) -> bool:
    return bool(user_id) and not any(ch in user_id for ch in ("/", "\\")) and ".." not in user_id


def _safe_user_dir(base_dir: Path, user_id: str) -> Path:
    # evitat path traversal
    if not _is_safe_id(user_id):
        raise ValueError("Invalid user_id")
    return base_dir / "users" / user_id


def _atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


@dataclass(frozen=True)
class UserRecord:
    id: str
    username: str
    full_name: str
    email: str
    hashed_password: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_public_dict(self) -> dict[str, Any]:
        data = self.to_dict()
        data.pop("hashed_password")
        return data

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "UserRecord":
        return cls(
            id=raw["id"],
            username=raw["username"],
            full_name=raw["full_name"],
            email=raw["email"],
            hashed_password=raw["hashed_password"],
            created_at=raw["created_at"],
            updated_at=raw["updated_at"],
        )


class UsersStore:
    """User documents stored as ``<base_dir>/users/<id>/user.json``.

    Username and email are unique across the store; the check and the insert
    run under one lock so two concurrent registrations cannot both win.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self._lock = threading.Lock()

    def _user_path(self, user_id: str) -> Path:
        return _safe_user_dir(self.base_dir, user_id) / "user.json"

    def _iter_records(self):
        users_dir = self.base_dir / "users"
        if not users_dir.exists():
            return
        for p in sorted(users_dir.glob("*/user.json")):
            try:
                rec = UserRecord.from_dict(json.loads(p.read_text(encoding="utf-8")))
            except (OSError, ValueError, KeyError):
                logger.warning("Skipping unreadable user file %s", p)
                continue
            yield rec

    def get(self, user_id: str) -> Optional[UserRecord]:
        if not _is_safe_id(user_id):
            return None
        p = self._user_path(user_id)
        if not p.exists():
            return None
        return UserRecord.from_dict(json.loads(p.read_text(encoding="utf-8")))

    def find_by_username_or_email(
        self, username: Optional[str] = None, email: Optional[str] = None
    ) -> Optional[UserRecord]:
        if not username and not email:
            return None
        for rec in self._iter_records():
            if (username and rec.username == username) or (email and rec.email == email):
                return rec
        return None

    def create(self, username: str, full_name: str, email: str, hashed_password: str) -> UserRecord:
        with self._lock:
            if self.find_by_username_or_email(username=username, email=email) is not None:
                raise UserExistsError("User exists")

            now = _utc_now_iso()
            rec = UserRecord(
                id=uuid.uuid4().hex,
                username=username,
                full_name=full_name,
                email=email,
                hashed_password=hashed_password,
                created_at=now,
                updated_at=now,
            )
            _atomic_write_json(self._user_path(rec.id), rec.to_dict())
            return rec

    def delete(self, user_id: str) -> bool:
        """Remove a user document. Notes owned by the user are left in place."""
        with self._lock:
            p = self._user_path(user_id)
            if not p.exists():
                return False
            p.unlink()
            return True
