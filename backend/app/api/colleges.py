"""College list endpoints, scoped to the resolved student."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.app.core.errors import NotFoundError
from backend.app.core.permissions import Permission
from backend.app.db.session import get_db
from backend.app.dependencies.collaboration import require_student_context
from backend.app.models.college import College
from backend.app.schemas.college import CollegeCreate, CollegeRead, CollegeUpdate
from backend.app.services.college_service import create_college
from backend.app.services.student_context_service import StudentContext

router = APIRouter(prefix="/colleges", tags=["colleges"])


def _get_owned_college(db: Session, college_id: int, user_id: int) -> College:
    college = db.query(College).filter(College.id == college_id, College.user_id == user_id).first()
    if not college:
        raise NotFoundError("College")
    return college


@router.get("/", response_model=list[CollegeRead])
async def list_colleges(
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_TASKS)),
):
    return (
        db.query(College)
        .filter(College.user_id == context.target_user_id)
        .order_by(College.deadline.asc(), College.id.asc())
        .all()
    )


@router.post("/", response_model=CollegeRead, status_code=status.HTTP_201_CREATED)
async def add_college(
    college_in: CollegeCreate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    return create_college(db, owner_id=context.target_user_id, college_in=college_in)


@router.get("/{college_id}", response_model=CollegeRead)
async def get_college(
    college_id: int,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_TASKS)),
):
    return _get_owned_college(db, college_id, context.target_user_id)


@router.patch("/{college_id}", response_model=CollegeRead)
async def update_college(
    college_id: int,
    college_in: CollegeUpdate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    college = _get_owned_college(db, college_id, context.target_user_id)
    for field, value in college_in.model_dump(exclude_unset=True).items():
        setattr(college, field, value)
    db.commit()
    db.refresh(college)
    return college


@router.delete("/{college_id}")
async def delete_college(
    college_id: int,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    college = _get_owned_college(db, college_id, context.target_user_id)
    db.delete(college)
    db.commit()
    return {"status": "deleted", "id": college_id}
