"""
Wire models for the Highway Notes backend API.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class User(BaseModel):
    name: str = ""
    email: str
    date_of_birth: Optional[str] = Field(default=None, alias="dateOfBirth")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AuthResult(BaseModel):
    token: str = Field(min_length=1)
    user: User


class Note(BaseModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    content: str
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "created_at"),
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("updatedAt", "updated_at"),
    )

    model_config = ConfigDict(extra="ignore")


class NotesPage(BaseModel):
    notes: List[Note] = Field(default_factory=list)


class NoteCreated(BaseModel):
    note: Note
