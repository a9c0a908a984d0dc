"""Onboarding: pick a role and fill in profile basics."""


from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.time import utc_now
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.schemas.user import OnboardingRead, OnboardingUpdate

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.post("/", response_model=OnboardingRead)
async def complete_onboarding(
    payload: OnboardingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if payload.role is not None and payload.role != current_user.role:
        if current_user.onboarded_at is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Role cannot be changed after onboarding",
            )
        current_user.role = payload.role
        if payload.role != "student":
            current_user.active_student_id = None

    update_fields = {
        "name": payload.name,
        "intake_year": payload.intake_year,
        "timezone": payload.timezone.strip() if payload.timezone else None,
    }
    if current_user.role == "counselor":
        update_fields["organization"] = payload.organization
    for field, value in update_fields.items():
        if value is not None:
            setattr(current_user, field, value)

    if current_user.onboarded_at is None:
        current_user.onboarded_at = utc_now()
    db.commit()
    db.refresh(current_user)
    return current_user
