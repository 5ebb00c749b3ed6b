from uuid import UUID

from fastapi import APIRouter, Depends, status

from notes_api.api.deps import get_current_user_id, get_notes_service
from notes_api.models.notes import NoteCreate, NoteOut, NoteUpdate
from notes_api.services.notes_service import NotesService

router = APIRouter(prefix="/api/v1/notes", tags=["notes"])


@router.get("", response_model=list[NoteOut])
async def list_notes(
    user_id: str = Depends(get_current_user_id),
    notes: NotesService = Depends(get_notes_service),
) -> list[NoteOut]:
    return [NoteOut(**n.to_dict()) for n in await notes.list_notes(user_id)]


@router.get("/{note_id}", response_model=NoteOut)
async def get_note(
    note_id: UUID,
    user_id: str = Depends(get_current_user_id),
    notes: NotesService = Depends(get_notes_service),
) -> NoteOut:
    note = await notes.get_note(user_id, note_id)
    return NoteOut(**note.to_dict())


@router.post("", response_model=NoteOut, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    user_id: str = Depends(get_current_user_id),
    notes: NotesService = Depends(get_notes_service),
) -> NoteOut:
    note = await notes.create_note(user_id, payload.title, payload.description)
    return NoteOut(**note.to_dict())


@router.put("/{note_id}", response_model=NoteOut)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    user_id: str = Depends(get_current_user_id),
    notes: NotesService = Depends(get_notes_service),
) -> NoteOut:
    note = await notes.update_note(user_id, note_id, payload.title, payload.description)
    return NoteOut(**note.to_dict())


@router.delete("/{note_id}", response_model=NoteOut)
async def delete_note(
    note_id: UUID,
    user_id: str = Depends(get_current_user_id),
    notes: NotesService = Depends(get_notes_service),
) -> NoteOut:
    note = await notes.delete_note(user_id, note_id)
    return NoteOut(**note.to_dict())
