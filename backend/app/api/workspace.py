"""Planning workspace endpoints, scoped to the resolved student."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.core.permissions import Permission
from backend.app.db.session import get_db
from backend.app.dependencies.collaboration import require_student_context
from backend.app.schemas.workspace import WorkspacePatch, WorkspaceRead
from backend.app.services import workspace_service
from backend.app.services.student_context_service import StudentContext

router = APIRouter(prefix="/workspace", tags=["workspace"])


@router.get("/", response_model=WorkspaceRead)
async def read_workspace(
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_TASKS)),
):
    return workspace_service.get_workspace(db, student_id=context.target_user_id)


@router.patch("/", response_model=WorkspaceRead)
async def update_workspace(
    patch: WorkspacePatch,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    return workspace_service.update_workspace(
        db, student_id=context.target_user_id, patch=patch, updated_by=context.viewer.id
    )
