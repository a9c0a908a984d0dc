"""Document vault endpoints, scoped to the resolved student."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.errors import NotFoundError
from backend.app.core.permissions import Permission
from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.collaboration import require_student_context
from backend.app.models.college import College
from backend.app.models.document import ApplicationDocument
from backend.app.schemas.document import DocumentCreate, DocumentRead, DocumentUpdate
from backend.app.services.student_context_service import StudentContext

router = APIRouter(prefix="/documents", tags=["documents"])


def _get_owned_document(db: Session, document_id: int, user_id: int) -> ApplicationDocument:
    document = (
        db.query(ApplicationDocument)
        .filter(ApplicationDocument.id == document_id, ApplicationDocument.user_id == user_id)
        .first()
    )
    if not document:
        raise NotFoundError("Document")
    return document


def _ensure_owned_college(db: Session, college_id: Optional[int], user_id: int) -> None:
    if college_id is None:
        return
    if not db.query(College.id).filter(College.id == college_id, College.user_id == user_id).first():
        raise NotFoundError("College")


@router.get("/", response_model=list[DocumentRead])
async def list_documents(
    category: Optional[str] = None,
    document_status: Optional[str] = Query(default=None, alias="status"),
    college_id: Optional[int] = Query(default=None, alias="collegeId"),
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.VIEW_TASKS)),
):
    query = db.query(ApplicationDocument).filter(ApplicationDocument.user_id == context.target_user_id)
    if category:
        query = query.filter(ApplicationDocument.category == category)
    if document_status:
        query = query.filter(ApplicationDocument.status == document_status)
    if college_id is not None:
        query = query.filter(ApplicationDocument.college_id == college_id)
    return query.order_by(ApplicationDocument.updated_at.desc(), ApplicationDocument.id.desc()).all()


@router.post("/", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_in: DocumentCreate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    _ensure_owned_college(db, document_in.college_id, context.target_user_id)
    document = ApplicationDocument(
        user_id=context.target_user_id,
        last_touched_by_id=context.viewer.id,
        last_touched_at=utc_now(),
        **document_in.model_dump(),
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    return document


@router.patch("/{document_id}", response_model=DocumentRead)
async def update_document(
    document_id: int,
    document_in: DocumentUpdate,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    document = _get_owned_document(db, document_id, context.target_user_id)
    update_data = document_in.model_dump(exclude_unset=True)
    if "college_id" in update_data:
        _ensure_owned_college(db, update_data["college_id"], context.target_user_id)
    for field, value in update_data.items():
        setattr(document, field, value)
    document.last_touched_by_id = context.viewer.id
    document.last_touched_at = utc_now()
    db.commit()
    db.refresh(document)
    return document


@router.delete("/{document_id}")
async def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    context: StudentContext = Depends(require_student_context(Permission.MANAGE_TASKS)),
):
    document = _get_owned_document(db, document_id, context.target_user_id)
    db.delete(document)
    db.commit()
    return {"status": "deleted", "id": document_id}
