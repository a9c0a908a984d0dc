"""Collaboration endpoints: students manage links, collaborators pick a student."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.app.core.permissions import PERMISSION_LABELS, Permission, default_permissions
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_student_user, get_current_user
from backend.app.models.user import User
from backend.app.schemas.collaboration import ContextUpdate, LinkCreate, LinkRead, LinkUpdate, PermissionDescriptor
from backend.app.schemas.user import UserRead
from backend.app.services import collaboration_service

router = APIRouter(prefix="/collaboration", tags=["collaboration"])


@router.get("/permissions", response_model=list[PermissionDescriptor])
async def list_permissions():
    counselor = default_permissions("counselor")
    parent = default_permissions("parent")
    return [
        PermissionDescriptor(
            key=perm.value,
            label=PERMISSION_LABELS[perm],
            counselor_default=counselor[perm.value],
            parent_default=parent[perm.value],
        )
        for perm in Permission
    ]


@router.get("/links", response_model=list[LinkRead])
async def list_links(
    include_revoked: bool = Query(default=False, alias="includeRevoked"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return collaboration_service.list_links(db, user=current_user, include_revoked=include_revoked)


@router.post("/links", response_model=LinkRead, status_code=status.HTTP_201_CREATED)
async def create_link(
    payload: LinkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_student_user),
):
    return collaboration_service.create_link(
        db,
        student=current_user,
        collaborator_email=payload.collaborator_email,
        relationship=payload.relationship,
        permissions=payload.permissions,
        note=payload.note,
    )


@router.patch("/links/{link_id}", response_model=LinkRead)
async def update_link(
    link_id: int,
    payload: LinkUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return collaboration_service.update_permissions(
        db,
        link_id=link_id,
        requested_by=current_user.id,
        patch=payload.permissions,
        note=payload.note,
    )


@router.post("/links/{link_id}/accept", response_model=LinkRead)
async def accept_link(
    link_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return collaboration_service.accept_link(db, link_id=link_id, collaborator=current_user)


@router.delete("/links/{link_id}")
async def revoke_link(
    link_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    link = collaboration_service.revoke_link(db, link_id=link_id, requested_by=current_user.id)
    return {"status": link.status, "id": link.id}


@router.get("/students", response_model=list[LinkRead])
async def list_students(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return collaboration_service.list_active_students(db, user=current_user)


@router.patch("/context", response_model=UserRead)
async def update_context(
    payload: ContextUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return collaboration_service.set_active_student(db, user=current_user, student_id=payload.student_id)
