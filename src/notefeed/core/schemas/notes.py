"""
Note management schemas.

These schemas define the API contracts for note CRUD operations and the
serialized note shared by the personal list and both feeds.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.note import AccessType, Note
from .common import (
    RequestModel,
    UtcDatetime,
    check_choice,
    check_integer,
    check_integer_list,
    check_text,
)

TITLE_MAX_LENGTH = 255
ACCESS_TYPE_MESSAGE = "Access type must be one of: public, subscribers, private"
TAG_IDS_MESSAGE = "Tag IDs must be an array"
TAG_ID_ITEM_MESSAGE = "Each tag ID must be an integer"


class NoteCreate(RequestModel):
    """Note creation request schema."""

    domain_id: Optional[int] = Field(default=None, description="Owning domain")
    title: Optional[str] = Field(default=None, description="Note title")
    content: Optional[str] = Field(default=None, description="Note body")
    access_type: Optional[str] = Field(
        default=AccessType.PUBLIC.value, description="public, subscribers or private"
    )
    tag_ids: Optional[List[int]] = Field(
        default=None, description="Tags of the author to attach; others are ignored"
    )

    @field_validator("domain_id", mode="before")
    @classmethod
    def validate_domain_id(cls, v: Any):
        return check_integer(v, "Domain ID", required=True)

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any):
        return check_text(v, "Title", required=True, min_length=1, max_length=TITLE_MAX_LENGTH)

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v: Any):
        return check_text(v, "Content", required=True)

    @field_validator("access_type", mode="before")
    @classmethod
    def validate_access_type(cls, v: Any):
        return check_choice(v, AccessType.values(), ACCESS_TYPE_MESSAGE)

    @field_validator("tag_ids", mode="before")
    @classmethod
    def validate_tag_ids(cls, v: Any):
        return check_integer_list(v, TAG_IDS_MESSAGE, TAG_ID_ITEM_MESSAGE)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "domain_id": 1,
                "title": "Meeting notes",
                "content": "Agenda: review Q3, plan Q4",
                "access_type": "subscribers",
                "tag_ids": [1, 2],
            }
        }
    )


class NoteUpdate(RequestModel):
    """Note update request schema.

    Omitted or null fields are left unchanged; ``tag_ids`` replaces the tag
    set when present, and ``[]`` clears it.
    """

    domain_id: Optional[int] = None
    title: Optional[str] = None
    content: Optional[str] = None
    access_type: Optional[str] = None
    tag_ids: Optional[List[int]] = None

    @field_validator("domain_id", mode="before")
    @classmethod
    def validate_domain_id(cls, v: Any):
        return check_integer(v, "Domain ID")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any):
        return check_text(v, "Title", min_length=1, max_length=TITLE_MAX_LENGTH)

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v: Any):
        # may be omitted, but not emptied
        return check_text(v, "Content", required=(v == ""))

    @field_validator("access_type", mode="before")
    @classmethod
    def validate_access_type(cls, v: Any):
        return check_choice(v, AccessType.values(), ACCESS_TYPE_MESSAGE)

    @field_validator("tag_ids", mode="before")
    @classmethod
    def validate_tag_ids(cls, v: Any):
        return check_integer_list(v, TAG_IDS_MESSAGE, TAG_ID_ITEM_MESSAGE)


class NoteTag(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class NoteAuthor(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class NoteResponse(BaseModel):
    """Serialized note, identical across the personal list and the feeds."""

    id: int
    domain_id: int
    domain_name: str
    title: str
    content: str
    access_type: str
    tags: List[NoteTag]
    created_at: UtcDatetime
    updated_at: UtcDatetime
    author: NoteAuthor

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        """Build from a note loaded with its domain, tags and author."""
        return cls(
            id=note.id,
            domain_id=note.domain_id,
            domain_name=note.domain.name,
            title=note.title,
            content=note.content,
            access_type=note.access_type,
            tags=[NoteTag.model_validate(tag) for tag in note.tags],
            created_at=note.created_at,
            updated_at=note.updated_at,
            author=NoteAuthor.model_validate(note.author),
        )
