"""Dependency factory that resolves the target student for a route."""

from typing import Callable, Optional

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from backend.app.core.permissions import Permission
from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.services.student_context_service import StudentContext, resolve_student_context


def require_student_context(permission: Permission) -> Callable[..., StudentContext]:
    """Build a dependency that authorizes ``permission`` for the requested student.

    The student comes from the ``studentId`` query parameter, falling back to the
    collaborator's active student. Denials raise ``AuthorizationError``, which the
    app-level handler turns into the matching HTTP response.
    """

    def dependency(
        student_id: Optional[int] = Query(default=None, alias="studentId"),
        db: Session = Depends(get_db),
        current_user: User = Depends(get_current_user),
    ) -> StudentContext:
        return resolve_student_context(
            db,
            actor_user_id=current_user.id,
            student_id=student_id,
            required_permission=permission,
        )

    dependency.__name__ = f"require_{permission.value}"
    return dependency
