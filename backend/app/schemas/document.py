"""Application document schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DocumentCategory = Literal["resume", "transcript", "test_score", "portfolio", "counselor_form", "other"]
DocumentStatus = Literal["draft", "in_review", "ready", "submitted"]


class DocumentCreate(BaseModel):
    title: str = Field(min_length=1)
    category: DocumentCategory = "other"
    status: DocumentStatus = "draft"
    description: Optional[str] = None
    file_url: Optional[str] = None
    college_id: Optional[int] = None


class DocumentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    category: Optional[DocumentCategory] = None
    status: Optional[DocumentStatus] = None
    description: Optional[str] = None
    file_url: Optional[str] = None
    college_id: Optional[int] = None

    @field_validator("title", "category", "status")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class DocumentRead(BaseModel):
    id: int
    user_id: int
    college_id: Optional[int] = None
    title: str
    category: str
    status: str
    description: Optional[str] = None
    file_url: Optional[str] = None
    last_touched_by_id: Optional[int] = None
    last_touched_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
