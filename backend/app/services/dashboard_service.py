"""Dashboard overview for the resolved student."""

from datetime import datetime

from sqlalchemy.orm import Session

from backend.app.core.time import as_utc
from backend.app.models.college import College
from backend.app.models.document import ApplicationDocument
from backend.app.models.essay import Essay
from backend.app.models.task import Task
from backend.app.schemas.dashboard import DashboardOverview, UpcomingDeadline
from backend.app.services.student_context_service import StudentContext


def get_dashboard_overview(db: Session, *, context: StudentContext, now: datetime, limit: int = 5) -> DashboardOverview:
    student_id = context.target_user_id

    tasks = db.query(Task).filter(Task.user_id == student_id).all()
    open_tasks = [t for t in tasks if not t.completed]
    overdue = [t for t in open_tasks if t.due_date is not None and as_utc(t.due_date) < now]

    essays = db.query(Essay).filter(Essay.user_id == student_id).all()
    total_documents = db.query(ApplicationDocument).filter(ApplicationDocument.user_id == student_id).count()

    colleges = db.query(College).filter(College.user_id == student_id).order_by(College.deadline.asc()).all()
    upcoming = [
        UpcomingDeadline(college_id=c.id, name=c.name, plan=c.plan, deadline=as_utc(c.deadline))
        for c in colleges
        if as_utc(c.deadline) >= now
    ][:limit]

    return DashboardOverview(
        student_id=student_id,
        viewer_id=context.viewer.id,
        viewer_role=context.viewer.role,
        total_colleges=len(colleges),
        open_tasks=len(open_tasks),
        completed_tasks=len(tasks) - len(open_tasks),
        overdue_tasks=len(overdue),
        total_essays=len(essays),
        completed_essays=sum(1 for e in essays if e.completed),
        total_documents=total_documents,
        next_deadline=upcoming[0] if upcoming else None,
        upcoming_deadlines=upcoming,
    )
