"""Session endpoints: exchange credentials for a bearer token, read the caller."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.app.core.errors import InvalidRequestError
from backend.app.core.security import create_access_token, verify_password
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.schemas.user import LoginRequest, SessionToken, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionToken)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    email = credentials.email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    # Invited collaborators have no password until they register.
    if user is None or not user.hashed_password:
        raise InvalidRequestError("Invalid credentials")
    if not user.is_active:
        raise InvalidRequestError("User is inactive")
    if not verify_password(credentials.password, user.hashed_password):
        logger.info("Failed login for user %s", user.id)
        raise InvalidRequestError("Invalid credentials")

    return SessionToken(
        access_token=create_access_token(user_id=user.id),
        role=user.role,
        needs_onboarding=user.onboarded_at is None,
    )


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user
