"""Authentication dependencies for retrieving the current user."""

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from backend.app.core.errors import AuthorizationError
from backend.app.core.permissions import Role
from backend.app.core.security import decode_access_token
from backend.app.db.session import get_db
from backend.app.models.user import User


def _unauthenticated() -> AuthorizationError:
    return AuthorizationError("Not authenticated", 401)


def _user_id_from_header(authorization: str | None) -> int:
    # Expect Authorization: Bearer <token>
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthenticated()
    try:
        payload = decode_access_token(authorization.split(" ", 1)[1])
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthenticated()


def get_current_user(db: Session = Depends(get_db), authorization: str | None = Header(default=None)) -> User:
    user = db.query(User).filter(User.id == _user_id_from_header(authorization)).first()
    if not user or not user.is_active:
        raise _unauthenticated()
    return user


def get_current_student_user(current_user: User = Depends(get_current_user)) -> User:
    """Dependency for endpoints only a student (data owner) may call."""
    if current_user.role != Role.STUDENT.value:
        raise AuthorizationError("Only students can manage collaborators")
    return current_user
