"""College schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.core.time import as_utc

DecisionPlan = Literal["ED", "EA", "RD", "ED2", "EA2", "Rolling"]
ApplicationPhase = Literal["researching", "drafting", "ready", "submitted", "decision"]
DecisionStatus = Literal["pending", "accepted", "waitlisted", "rejected", "deferred"]


class CollegeCreate(BaseModel):
    name: str = Field(min_length=1)
    plan: DecisionPlan = "RD"
    deadline: datetime
    intake: str = "Fall"
    region: str = "US"
    portal_url: Optional[str] = None
    notes: Optional[str] = None


class CollegeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    plan: Optional[DecisionPlan] = None
    deadline: Optional[datetime] = None
    intake: Optional[str] = None
    region: Optional[str] = None
    portal_url: Optional[str] = None
    notes: Optional[str] = None
    phase: Optional[ApplicationPhase] = None
    decision: Optional[DecisionStatus] = None

    @field_validator("name", "plan", "deadline", "intake", "region", "phase", "decision")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class CollegeRead(BaseModel):
    id: int
    user_id: int
    name: str
    plan: str
    deadline: datetime
    intake: str
    region: str
    portal_url: Optional[str] = None
    notes: Optional[str] = None
    phase: str
    decision: str
    created_at: datetime
    updated_at: datetime

    @field_validator("deadline", "created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone(cls, v):
        return as_utc(v) if isinstance(v, datetime) else v

    model_config = ConfigDict(from_attributes=True)
