"""Planning workspace schemas.

The workspace is stored as one JSON document per student. ``WorkspaceData`` is
its canonical shape; ``WorkspacePatch`` replaces lists wholesale and merges the
testing and financial-aid sections field by field.
"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from backend.app.core.time import as_utc

ChecklistCategory = Literal["application", "testing", "financial", "custom"]
ScholarshipStatus = Literal["researching", "drafting", "submitted", "won", "lost"]
RecommenderStatus = Literal["not_started", "requested", "submitted"]


class ChecklistItem(BaseModel):
    key: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = ""
    category: ChecklistCategory = "custom"
    completed: bool = False
    due_label: Optional[str] = None
    is_custom: bool = False


class TestingPlan(BaseModel):
    registered: bool = False
    goal_score: str = ""
    next_test_date: Optional[date] = None
    notes: str = ""


class FinancialAidPlan(BaseModel):
    fafsa_submitted: bool = False
    css_profile_submitted: bool = False
    priority_deadline: Optional[date] = None
    notes: str = ""


class ScholarshipEntry(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1)
    amount: str = ""
    deadline: Optional[date] = None
    status: ScholarshipStatus = "researching"
    notes: str = ""


class RecommenderEntry(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    role: str = ""
    status: RecommenderStatus = "not_started"


class HelpfulLink(BaseModel):
    id: Optional[str] = None
    title: str = Field(min_length=1)
    url: str = Field(min_length=1)


class WorkspaceData(BaseModel):
    checklist: list[ChecklistItem] = Field(default_factory=list)
    testing_plan: TestingPlan = Field(default_factory=TestingPlan)
    financial_aid: FinancialAidPlan = Field(default_factory=FinancialAidPlan)
    scholarships: list[ScholarshipEntry] = Field(default_factory=list)
    recommenders: list[RecommenderEntry] = Field(default_factory=list)
    helpful_links: list[HelpfulLink] = Field(default_factory=list)
    general_notes: str = ""


class TestingPlanUpdate(BaseModel):
    registered: Optional[bool] = None
    goal_score: Optional[str] = None
    next_test_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("registered", "goal_score", "notes")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class FinancialAidUpdate(BaseModel):
    fafsa_submitted: Optional[bool] = None
    css_profile_submitted: Optional[bool] = None
    priority_deadline: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("fafsa_submitted", "css_profile_submitted", "notes")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v


class WorkspacePatch(BaseModel):
    checklist: Optional[list[ChecklistItem]] = None
    testing_plan: Optional[TestingPlanUpdate] = None
    financial_aid: Optional[FinancialAidUpdate] = None
    scholarships: Optional[list[ScholarshipEntry]] = None
    recommenders: Optional[list[RecommenderEntry]] = None
    helpful_links: Optional[list[HelpfulLink]] = None
    general_notes: Optional[str] = None


class WorkspaceRead(WorkspaceData):
    student_id: int
    updated_by_id: Optional[int] = None
    updated_at: Optional[datetime] = None

    @field_validator("updated_at", mode="before")
    @classmethod
    def ensure_timezone(cls, v):
        return as_utc(v) if isinstance(v, datetime) else v

    model_config = ConfigDict(from_attributes=True)
