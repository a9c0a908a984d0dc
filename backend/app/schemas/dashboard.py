from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UpcomingDeadline(BaseModel):
    college_id: int
    name: str
    plan: str
    deadline: datetime


class DashboardOverview(BaseModel):
    student_id: int
    viewer_id: int
    viewer_role: str
    total_colleges: int
    open_tasks: int
    completed_tasks: int
    overdue_tasks: int
    total_essays: int
    completed_essays: int
    total_documents: int
    next_deadline: Optional[UpcomingDeadline] = None
    upcoming_deadlines: list[UpcomingDeadline]
