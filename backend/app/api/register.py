"""Handles user registration for ApplyDesk."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.core.time import utc_now
from backend.app.db.base import Base
from backend.app.db.session import engine, get_db
from backend.app.models.user import User
from backend.app.schemas.user import UserCreate, UserRead
from backend.app.services.collaboration_service import claim_invited_account

Base.metadata.create_all(bind=engine)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: Session = Depends(get_db)):
    email = user_in.email.strip().lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing and existing.hashed_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    if existing:
        # Placeholder created by an invite; the invited role sticks.
        return claim_invited_account(
            db,
            user=existing,
            invite_token=user_in.invite_token,
            password=user_in.password,
            name=user_in.name,
        )

    user = User(
        email=email,
        hashed_password=get_password_hash(user_in.password),
        name=user_in.name,
        role=user_in.role,
        intake_year=user_in.intake_year or utc_now().year + 1,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
