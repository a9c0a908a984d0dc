"""Load and merge a student's planning workspace."""

import logging
import uuid
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from backend.app.models.workspace import Workspace
from backend.app.schemas.workspace import ChecklistItem, WorkspaceData, WorkspacePatch, WorkspaceRead

logger = logging.getLogger(__name__)

DEFAULT_CHECKLIST = (
    ChecklistItem(
        key="common-app-profile",
        title="Complete Common App profile",
        description="Fill in personal info, activities, and coursework.",
        category="application",
        due_label="August",
    ),
    ChecklistItem(
        key="essay-draft",
        title="Lock main personal statement draft",
        description="Finalize a solid draft before supplement season ramps up.",
        category="application",
        due_label="September",
    ),
    ChecklistItem(
        key="fafsa",
        title="Submit FAFSA",
        description="Gather tax documents and submit as soon as it opens.",
        category="financial",
        due_label="October",
    ),
    ChecklistItem(
        key="css-profile",
        title="Submit CSS Profile (if required)",
        description="Private colleges often require this in addition to FAFSA.",
        category="financial",
        due_label="October",
    ),
    ChecklistItem(
        key="testing-plan",
        title="Book final SAT/ACT test date",
        description="Give yourself enough runway for score release.",
        category="testing",
        due_label="2+ months before deadlines",
    ),
    ChecklistItem(
        key="recommenders",
        title="Confirm recommenders & send brag sheet",
        description="Provide context, deadlines, and submission instructions.",
        category="application",
        due_label="September",
    ),
)


def build_default_workspace() -> WorkspaceData:
    return WorkspaceData(checklist=[item.model_copy() for item in DEFAULT_CHECKLIST])


def _with_ids(entries: list, prefix: str) -> list:
    for entry in entries:
        if not entry.id:
            entry.id = f"{prefix}-{uuid.uuid4().hex[:12]}"
    return entries


def ensure_workspace(data: Optional[Mapping[str, Any]]) -> WorkspaceData:
    """Fill the gaps in a stored workspace document."""
    if not data:
        return build_default_workspace()
    workspace = WorkspaceData.model_validate(data)
    if not workspace.checklist:
        workspace.checklist = build_default_workspace().checklist
    _with_ids(workspace.scholarships, "sch")
    _with_ids(workspace.recommenders, "rec")
    _with_ids(workspace.helpful_links, "link")
    return workspace


def merge_workspace(current: Optional[Mapping[str, Any]], patch: WorkspacePatch) -> WorkspaceData:
    workspace = ensure_workspace(current)
    changes = patch.model_dump(exclude_unset=True)

    if patch.checklist is not None:
        workspace.checklist = patch.checklist
    if patch.testing_plan is not None:
        workspace.testing_plan = workspace.testing_plan.model_copy(update=changes["testing_plan"])
    if patch.financial_aid is not None:
        workspace.financial_aid = workspace.financial_aid.model_copy(update=changes["financial_aid"])
    if patch.general_notes is not None:
        workspace.general_notes = patch.general_notes
    if patch.scholarships is not None:
        workspace.scholarships = _with_ids(patch.scholarships, "sch")
    if patch.recommenders is not None:
        workspace.recommenders = _with_ids(patch.recommenders, "rec")
    if patch.helpful_links is not None:
        workspace.helpful_links = _with_ids(patch.helpful_links, "link")
    return workspace


def _to_read(student_id: int, data: WorkspaceData, row: Optional[Workspace]) -> WorkspaceRead:
    return WorkspaceRead(
        student_id=student_id,
        updated_by_id=row.updated_by_id if row else None,
        updated_at=row.updated_at if row else None,
        **data.model_dump(),
    )


def get_workspace(db: Session, *, student_id: int) -> WorkspaceRead:
    """Return the student's workspace; a student without one sees the defaults."""
    row = db.query(Workspace).filter(Workspace.user_id == student_id).first()
    return _to_read(student_id, ensure_workspace(row.data if row else None), row)


def update_workspace(db: Session, *, student_id: int, patch: WorkspacePatch, updated_by: int) -> WorkspaceRead:
    row = db.query(Workspace).filter(Workspace.user_id == student_id).first()
    merged = merge_workspace(row.data if row else None, patch)
    if row is None:
        row = Workspace(user_id=student_id)
        db.add(row)
    row.data = merged.model_dump(mode="json")
    row.updated_by_id = updated_by
    db.commit()
    db.refresh(row)
    logger.info("User %s updated workspace of student %s", updated_by, student_id)
    return _to_read(student_id, merged, row)
