from __future__ import annotations

import logging
import uuid

from starlette.concurrency import run_in_threadpool

from notes_api.errors import InternalError, NotFound
from notes_api.storage.notes_store import Note, NotesStore

logger = logging.getLogger(__name__)

NOT_OWNED = "Note not found or does not belong to the user"


class NotesService:
    """CRUD over the caller's own notes.

    A note owned by another user is reported exactly like a missing one (404).
    """

    def __init__(self, notes: NotesStore):
        self.notes = notes

    async def list_notes(self, user_id: str) -> list[Note]:
        try:
            return await run_in_threadpool(self.notes.list_notes, user_id)
        except (OSError, ValueError) as exc:
            logger.exception("Error listing notes")
            raise InternalError("Error fetching the data") from exc

    async def get_note(self, user_id: str, note_id: uuid.UUID) -> Note:
        try:
            note = await run_in_threadpool(self.notes.get_note, user_id, note_id)
        except (OSError, ValueError, KeyError) as exc:
            logger.exception("Error fetching note %s", note_id)
            raise InternalError("Error fetching the data") from exc
        if note is None:
            raise NotFound("Note not found")
        return note

    async def create_note(self, user_id: str, title: str, description: str) -> Note:
        try:
            note = await run_in_threadpool(self.notes.create_note, user_id, title, description)
        except (OSError, ValueError) as exc:
            logger.exception("Error creating note")
            raise InternalError("Error posting the data") from exc
        logger.info("Note %s created by %s", note.id, user_id)
        return note

    async def update_note(self, user_id: str, note_id: uuid.UUID, title: str, description: str) -> Note:
        try:
            note = await run_in_threadpool(self.notes.update_note, user_id, note_id, title, description)
        except (OSError, ValueError, KeyError) as exc:
            logger.exception("Error updating note %s", note_id)
            raise InternalError("Unable to update the Notes") from exc
        if note is None:
            raise NotFound(NOT_OWNED)
        return note

    async def delete_note(self, user_id: str, note_id: uuid.UUID) -> Note:
        try:
            note = await run_in_threadpool(self.notes.delete_note, user_id, note_id)
        except (OSError, ValueError, KeyError) as exc:
            logger.exception("Error deleting note %s", note_id)
            raise InternalError("Error deleting the Note") from exc
        if note is None:
            raise NotFound(NOT_OWNED)
        logger.info("Note %s deleted by %s", note_id, user_id)
        return note
