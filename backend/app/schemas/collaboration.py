"""Collaborator link schemas."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from backend.app.core.time import as_utc
from backend.app.schemas.user import UserSummary


class LinkCreate(BaseModel):
    collaborator_email: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("collaborator_email", "collaboratorEmail")
    )
    relationship: Literal["counselor", "parent"] = "counselor"
    permissions: Optional[dict[str, Any]] = None
    note: Optional[str] = None


class LinkUpdate(BaseModel):
    # Kept as a plain dict so unknown capability names reach the service and are rejected there.
    permissions: Optional[dict[str, Any]] = None
    note: Optional[str] = None


class LinkRead(BaseModel):
    id: int
    student_id: int
    collaborator_id: int
    relationship: str = Field(validation_alias=AliasChoices("relationship_type", "relationship"))
    status: Literal["pending", "active", "revoked"]
    permissions: dict[str, bool]
    note: Optional[str] = None
    accepted_at: Optional[datetime] = None
    last_seen_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    student: Optional[UserSummary] = None
    collaborator: Optional[UserSummary] = None
    invite_token: Optional[str] = None

    @field_validator("accepted_at", "last_seen_at", "created_at", "updated_at", mode="before")
    @classmethod
    def ensure_timezone(cls, v):
        return as_utc(v) if isinstance(v, datetime) else v

    model_config = ConfigDict(from_attributes=True)


class ContextUpdate(BaseModel):
    student_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("student_id", "studentId"))


class PermissionDescriptor(BaseModel):
    key: str
    label: str
    counselor_default: bool
    parent_default: bool
