"""User schemas used for registration, onboarding and responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

RoleName = Literal["student", "counselor", "parent"]


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    name: Optional[str] = None
    role: RoleName = "student"
    intake_year: Optional[int] = None
    invite_token: Optional[str] = Field(default=None, validation_alias=AliasChoices("invite_token", "inviteToken"))


class UserRead(BaseModel):
    id: int
    email: EmailStr
    name: Optional[str] = None
    role: RoleName
    intake_year: Optional[int] = None
    active_student_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    role: RoleName

    model_config = ConfigDict(from_attributes=True)


class OnboardingUpdate(BaseModel):
    role: Optional[RoleName] = None
    name: Optional[str] = None
    intake_year: Optional[int] = None
    timezone: Optional[str] = None
    organization: Optional[str] = None


class OnboardingRead(UserRead):
    timezone: Optional[str] = None
    organization: Optional[str] = None
    onboarded_at: Optional[datetime] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class SessionToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: RoleName
    needs_onboarding: bool
