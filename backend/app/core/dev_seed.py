import logging
import os

from sqlalchemy.orm import Session

from backend.app.core.permissions import default_permissions
from backend.app.core.security import get_password_hash
from backend.app.core.time import utc_now
from backend.app.models.collaborator_link import CollaboratorLink
from backend.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_STUDENT = "student@test.com"
DEFAULT_DEV_COUNSELOR = "counselor@test.com"


def _ensure_user(db: Session, email: str, role: str, name: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user
    user = User(
        email=email,
        name=name,
        role=role,
        hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD),
        intake_year=utc_now().year + 1,
        onboarded_at=utc_now(),
        is_active=True,
    )
    db.add(user)
    db.flush()
    return user


def ensure_default_dev_users(db: Session) -> None:
    """
    Create a demo student and a counselor with an active link for local development.
    Skips execution when running under pytest to avoid altering test expectations.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return

    student = _ensure_user(db, DEFAULT_DEV_STUDENT, "student", "Demo Student")
    counselor = _ensure_user(db, DEFAULT_DEV_COUNSELOR, "counselor", "Demo Counselor")

    link = (
        db.query(CollaboratorLink)
        .filter(
            CollaboratorLink.student_id == student.id,
            CollaboratorLink.collaborator_id == counselor.id,
            CollaboratorLink.status != "revoked",
        )
        .first()
    )
    if link is None:
        db.add(
            CollaboratorLink(
                student_id=student.id,
                collaborator_id=counselor.id,
                relationship_type="counselor",
                status="active",
                permissions=default_permissions("counselor"),
                created_by_id=student.id,
                accepted_at=utc_now(),
            )
        )
        logger.info("Seeded demo counselor link for %s", DEFAULT_DEV_STUDENT)

    db.commit()
