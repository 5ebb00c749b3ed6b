from pydantic import Field

from notes_api.models.base import CamelModel


class NoteCreate(CamelModel):
    title: str = Field(min_length=5, max_length=100)
    description: str = Field(min_length=5, max_length=500)


class NoteUpdate(NoteCreate):
    pass


class NoteOut(CamelModel):
    id: str
    owner_id: str
    title: str
    description: str
    created_at: str
    updated_at: str
