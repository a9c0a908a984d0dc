"""Task endpoints, scoped to the resolved student."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.errors import NotFoundError
from backend.app.core.permissions import Permission
from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.collaboration import require_student_context
from backend.app.models.college import College
from backend.app.models.task import Task
from backend.app.schemas.task import TaskCreate, TaskRead, TaskUpdate
from backend.app.services.student_context_service import StudentContext

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _get_owned_task(db: Session, task_id: int, user_id: int) -> Task:
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == user_id).first()
    if not task:
        raise NotFoundError("Task")
    return task


def _ensure_owned_college(db: Session, college_id: Optional[int], user_id: int) -> None:
    if college_id is None:
        return
    exists = db.query(College.id).filter(College.id == college_id, College.user_id == user_id).first()
    if not exists:
        raise NotFoundError("College")


@router.get("/", response_model=list[TaskRead])
async def list_tasks(
    college_id: Optional[int] = Query(default=None, alias="collegeId"),
    label: Optional[str] = None,
    task_status: Optional[Literal["completed", "pending"]] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_TASKS)),
):
    query = db.query(Task).filter(Task.user_id == context.target_user_id)
    if college_id is not None:
        query = query.filter(Task.college_id == college_id)
    if label:
        query = query.filter(Task.label == label)
    if task_status == "completed":
        query = query.filter(Task.completed.is_(True))
    elif task_status == "pending":
        query = query.filter(Task.completed.is_(False))
    return query.order_by(Task.due_date.is_(None), Task.due_date.asc(), Task.created_at.asc()).all()


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_in: TaskCreate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    _ensure_owned_college(db, task_in.college_id, context.target_user_id)
    task = Task(user_id=context.target_user_id, **task_in.model_dump())
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@router.patch("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: int,
    task_in: TaskUpdate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    task = _get_owned_task(db, task_id, context.target_user_id)
    update_data = task_in.model_dump(exclude_unset=True)
    completed = update_data.pop("completed", None)
    for field, value in update_data.items():
        setattr(task, field, value)
    if completed is not None and completed != task.completed:
        task.completed = completed
        task.completed_at = utc_now() if completed else None
    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    task = _get_owned_task(db, task_id, context.target_user_id)
    db.delete(task)
    db.commit()
    return {"status": "deleted", "id": task_id}
