"""Essay and essay feedback schemas."""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from backend.app.core.time import as_utc


class EssayCreate(BaseModel):
    title: str = Field(min_length=1)
    prompt: str = ""
    word_limit: int = Field(default=650, gt=0)
    college_id: Optional[int] = None


class EssayUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    prompt: Optional[str] = None
    word_limit: Optional[int] = Field(default=None, gt=0)
    content: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("title", "prompt", "word_limit", "content", "completed")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class EssayRead(BaseModel):
    id: int
    user_id: int
    college_id: Optional[int] = None
    title: str
    prompt: str
    word_limit: int
    content: str
    word_count: int
    completed: bool
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("completed_at", "created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone(cls, v):
        return as_utc(v) if isinstance(v, datetime) else v

    model_config = ConfigDict(from_attributes=True)


class FeedbackCreate(BaseModel):
    selection: str = Field(min_length=1)
    note: str = Field(min_length=1)
    selection_start: int = Field(ge=0, validation_alias=AliasChoices("selection_start", "selectionStart"))
    selection_end: int = Field(ge=0, validation_alias=AliasChoices("selection_end", "selectionEnd"))

    @model_validator(mode="after")
    def check_span(self):
        if self.selection_end < self.selection_start:
            raise ValueError("selection_end must not be before selection_start")
        return self


class FeedbackRead(BaseModel):
    id: int
    essay_id: int
    author_id: Optional[int] = None
    selection: str
    note: str
    selection_start: int
    selection_end: int
    created_at: datetime

    @field_validator("created_at", mode="before")
    @classmethod
    def ensure_timezone(cls, v):
        return as_utc(v) if isinstance(v, datetime) else v

    model_config = ConfigDict(from_attributes=True)
