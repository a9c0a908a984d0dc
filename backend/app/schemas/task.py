"""Task schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.core.time import as_utc

TaskLabel = Literal["Essay", "Rec", "Testing", "Transcript", "Fees", "Supplement", "Other"]
TaskPriority = Literal["low", "medium", "high"]


class TaskCreate(BaseModel):
    title: str = Field(min_length=1)
    notes: Optional[str] = None
    label: TaskLabel = "Other"
    priority: TaskPriority = "medium"
    due_date: Optional[datetime] = None
    college_id: Optional[int] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None
    label: Optional[TaskLabel] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    completed: Optional[bool] = None

    @field_validator("title", "label", "priority", "completed")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class TaskRead(BaseModel):
    id: int
    user_id: int
    college_id: Optional[int] = None
    title: str
    notes: Optional[str] = None
    label: str
    priority: str
    due_date: Optional[datetime] = None
    completed: bool
    completed_at: Optional[datetime] = None
    created_at: datetime

    @field_validator("due_date", "completed_at", "created_at", mode="before")
    @classmethod
    def ensure_timezone(cls, v):
        return as_utc(v) if isinstance(v, datetime) else v

    model_config = ConfigDict(from_attributes=True)
