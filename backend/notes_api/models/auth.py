from typing import Optional

from pydantic import Field, field_validator

from notes_api.models.base import CamelModel

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"


class RegisterRequest(CamelModel):
    # fields are optional here so a missing one is reported as "All fields are required"
    username: Optional[str] = Field(default=None, min_length=3, max_length=30)
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=254, pattern=EMAIL_PATTERN)
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v


class LoginRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v


class UserOut(CamelModel):
    id: str
    username: str
    full_name: str
    email: str
    created_at: str
    updated_at: str


class MessageResponse(CamelModel):
    message: str
