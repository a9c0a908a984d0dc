"""Essay endpoints, scoped to the resolved student."""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.errors import InvalidRequestError, NotFoundError
from backend.app.core.permissions import Permission
from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.collaboration import require_student_context
from backend.app.models.college import College
from backend.app.models.essay import Essay
from backend.app.models.essay_feedback import EssayFeedback
from backend.app.schemas.essay import EssayCreate, EssayRead, EssayUpdate, FeedbackCreate, FeedbackRead
from backend.app.services.student_context_service import StudentContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/essays", tags=["essays"])

_WORD_RE = re.compile(r"\S+")


def count_words(text: str) -> int:
    return len(_WORD_RE.findall(text or ""))


def _get_owned_essay(db: Session, essay_id: int, user_id: int) -> Essay:
    essay = db.query(Essay).filter(Essay.id == essay_id, Essay.user_id == user_id).first()
    if not essay:
        raise NotFoundError("Essay")
    return essay


@router.get("/", response_model=list[EssayRead])
async def list_essays(
    college_id: Optional[int] = Query(default=None, alias="collegeId"),
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_ESSAYS)),
):
    query = db.query(Essay).filter(Essay.user_id == context.target_user_id)
    if college_id is not None:
        query = query.filter(Essay.college_id == college_id)
    return query.order_by(Essay.created_at.desc(), Essay.id.desc()).all()


@router.post("/", response_model=EssayRead, status_code=status.HTTP_201_CREATED)
async def create_essay(
    essay_in: EssayCreate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_ESSAYS)),
):
    if essay_in.college_id is not None:
        college = (
            db.query(College)
            .filter(College.id == essay_in.college_id, College.user_id == context.target_user_id)
            .first()
        )
        if not college:
            raise NotFoundError("College")
    essay = Essay(user_id=context.target_user_id, content="", word_count=0, **essay_in.model_dump())
    db.add(essay)
    db.commit()
    db.refresh(essay)
    return essay


@router.get("/{essay_id}", response_model=EssayRead)
async def get_essay(
    essay_id: int,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_ESSAYS)),
):
    return _get_owned_essay(db, essay_id, context.target_user_id)


@router.patch("/{essay_id}", response_model=EssayRead)
async def update_essay(
    essay_id: int,
    essay_in: EssayUpdate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_ESSAYS)),
):
    essay = _get_owned_essay(db, essay_id, context.target_user_id)
    update_data = essay_in.model_dump(exclude_unset=True)
    completed = update_data.pop("completed", None)
    for field, value in update_data.items():
        setattr(essay, field, value)
    if "content" in update_data:
        essay.word_count = count_words(essay.content)
    if completed is not None and completed != essay.completed:
        essay.completed = completed
        essay.completed_at = utc_now() if completed else None
    db.commit()
    db.refresh(essay)
    return essay


@router.delete("/{essay_id}")
async def delete_essay(
    essay_id: int,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_ESSAYS)),
):
    essay = _get_owned_essay(db, essay_id, context.target_user_id)
    db.delete(essay)
    db.commit()
    return {"status": "deleted", "id": essay_id}


@router.get("/{essay_id}/feedback", response_model=list[FeedbackRead])
async def list_feedback(
    essay_id: int,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_ESSAYS)),
):
    return _get_owned_essay(db, essay_id, context.target_user_id).feedback


@router.post("/{essay_id}/feedback", response_model=FeedbackRead, status_code=status.HTTP_201_CREATED)
async def add_feedback(
    essay_id: int,
    feedback_in: FeedbackCreate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_ESSAYS)),
):
    essay = _get_owned_essay(db, essay_id, context.target_user_id)
    if feedback_in.selection_end > len(essay.content or ""):
        raise InvalidRequestError("Selection is outside the essay content")
    feedback = EssayFeedback(essay_id=essay.id, author_id=context.viewer.id, **feedback_in.model_dump())
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    logger.info("User %s left feedback %s on essay %s", context.viewer.id, feedback.id, essay.id)
    return feedback
