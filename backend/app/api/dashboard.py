"""Dashboard overview endpoint."""


from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.core.permissions import Permission
from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.collaboration import require_student_context
from backend.app.schemas.dashboard import DashboardOverview
from backend.app.services.dashboard_service import get_dashboard_overview
from backend.app.services.student_context_service import StudentContext

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/overview", response_model=DashboardOverview)
async def dashboard_overview(
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_TASKS)),
):
    return get_dashboard_overview(db, context=context, now=utc_now())
