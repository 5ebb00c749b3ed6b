import json
import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from notes_api.storage.users_store import _atomic_write_json, _safe_user_dir

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _notes_dir(base_dir: Path, user_id: str) -> Path:
    return _safe_user_dir(base_dir, user_id) / "notes"


def _note_path(base_dir: Path, user_id: str, note_id: uuid.UUID) -> Path:
    return _notes_dir(base_dir, user_id) / f"{note_id}.json"


@dataclass(frozen=True)
class Note:
    id: uuid.UUID
    owner_id: str
    title: str
    description: str
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "owner_id": self.owner_id,
            "title": self.title,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Note":
        return cls(
            id=uuid.UUID(raw["id"]),
            owner_id=raw["owner_id"],
            title=raw["title"],
            description=raw["description"],
            created_at=raw["created_at"],
            updated_at=raw["updated_at"],
        )


class NotesStore:
    """Notes kept under their owner's directory: ``users/<owner>/notes/<id>.json``.

    Every method takes the owner id; a note stored for anyone else is
    indistinguishable from a missing one.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self._lock = threading.Lock()

    def _read_owned(self, user_id: str, note_id: uuid.UUID) -> dict[str, Any] | None:
        path = _note_path(self.base_dir, user_id, note_id)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        if raw.get("owner_id") != user_id:
            return None
        return raw

    def create_note(self, user_id: str, title: str, description: str) -> Note:
        now = _utc_now_iso()
        note = Note(
            id=uuid.uuid4(),
            owner_id=user_id,
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )
        _atomic_write_json(_note_path(self.base_dir, user_id, note.id), note.to_dict())
        return note

    def list_notes(self, user_id: str) -> list[Note]:
        notes_dir = _notes_dir(self.base_dir, user_id)
        if not notes_dir.exists():
            return []
        out: list[Note] = []
        for p in notes_dir.glob("*.json"):
            try:
                note = Note.from_dict(json.loads(p.read_text(encoding="utf-8")))
            except (OSError, ValueError, KeyError):
                logger.warning("Skipping unreadable note file %s", p)
                continue
            if note.owner_id == user_id:
                out.append(note)
        out.sort(key=lambda n: n.created_at)
        return out

    def get_note(self, user_id: str, note_id: uuid.UUID) -> Note | None:
        raw = self._read_owned(user_id, note_id)
        return Note.from_dict(raw) if raw is not None else None

    def update_note(self, user_id: str, note_id: uuid.UUID, title: str, description: str) -> Note | None:
        with self._lock:
            raw = self._read_owned(user_id, note_id)
            if raw is None:
                return None

            raw["title"] = title
            raw["description"] = description
            raw["updated_at"] = _utc_now_iso()

            _atomic_write_json(_note_path(self.base_dir, user_id, note_id), raw)
            return Note.from_dict(raw)

    def delete_note(self, user_id: str, note_id: uuid.UUID) -> Note | None:
        with self._lock:
            raw = self._read_owned(user_id, note_id)
            if raw is None:
                return None
            _note_path(self.base_dir, user_id, note_id).unlink()
            return Note.from_dict(raw)
