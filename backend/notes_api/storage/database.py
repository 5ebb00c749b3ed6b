from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from notes_api.storage.notes_store import NotesStore
from notes_api.storage.users_store import UsersStore

logger = logging.getLogger(__name__)


class Database:
    """Handle over the data directory that owns both document stores.

    ``open()`` must be called once before the stores are used and ``close()``
    when the application shuts down.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self._users: Optional[UsersStore] = None
        self._notes: Optional[NotesStore] = None

    @property
    def is_open(self) -> bool:
        return self._users is not None

    @property
    def users(self) -> UsersStore:
        if self._users is None:
            raise RuntimeError("Database is not open")
        return self._users

    @property
    def notes(self) -> NotesStore:
        if self._notes is None:
            raise RuntimeError("Database is not open")
        return self._notes

    def open(self) -> None:
        if self.is_open:
            return
        users_dir = self.data_dir / "users"
        users_dir.mkdir(parents=True, exist_ok=True)
        if not os.access(users_dir, os.W_OK):
            raise PermissionError(f"Data directory is not writable: {users_dir}")

        self._users = UsersStore(self.data_dir)
        self._notes = NotesStore(self.data_dir)
        logger.info("Document store opened at %s", self.data_dir)

    def close(self) -> None:
        if not self.is_open:
            return
        self._users = None
        self._notes = None
        logger.info("Document store closed")
