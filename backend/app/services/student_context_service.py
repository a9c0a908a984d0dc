"""Resolve which student's data an actor may touch for a given operation.

Every data-bearing request passes through :func:`resolve_student_context`
before it queries anything. Students always act on themselves; counselors and
parents act on a student only through an active collaborator link that grants
the specific capability the operation needs. Nothing is cached: a revoked link
or a narrowed permission is seen by the very next request.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from backend.app.core.errors import AuthorizationError
from backend.app.core.permissions import COLLABORATOR_ROLES, Permission, Role, has_permission, permission_label
from backend.app.models.collaborator_link import CollaboratorLink
from backend.app.models.user import User

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class Viewer:
    id: int
    role: str


@dataclass(frozen=True)
class StudentContext:
    target_user_id: int
    viewer: Viewer
    link: Optional[CollaboratorLink] = None

    @property
    def is_self(self) -> bool:
        return self.viewer.id == self.target_user_id


def get_live_link(db: Session, *, student_id: int, collaborator_id: int) -> CollaboratorLink | None:
    """Return the non-revoked link between the pair, if any."""
    return (
        db.query(CollaboratorLink)
        .filter(
            CollaboratorLink.student_id == student_id,
            CollaboratorLink.collaborator_id == collaborator_id,
            CollaboratorLink.status != "revoked",
        )
        .order_by(CollaboratorLink.created_at.desc(), CollaboratorLink.id.desc())
        .first()
    )


def _deny(actor_id: int, message: str, status_code: int = 403) -> AuthorizationError:
    logger.info("Denied student context for user %s: %s", actor_id, message)
    return AuthorizationError(message, status_code)


def resolve_student_context(
    db: Session,
    *,
    actor_user_id: int,
    required_permission: Permission | str,
    student_id: Optional[int] = None,
    active_student_id=_UNSET,
) -> StudentContext:
    """Resolve the target student for ``actor_user_id`` or raise ``AuthorizationError``.

    ``student_id`` is the explicitly requested student (e.g. the ``studentId``
    query parameter). When omitted, counselors and parents fall back to
    ``active_student_id``, which defaults to the value stored on the actor.
    """
    permission = Permission(required_permission)

    actor = db.query(User).filter(User.id == actor_user_id).first()
    if actor is None:
        raise _deny(actor_user_id, "User not found", 401)

    viewer = Viewer(id=actor.id, role=actor.role)

    if actor.role == Role.STUDENT.value:
        if student_id is not None and student_id != actor.id:
            raise _deny(actor.id, "Not allowed to act on behalf of another student")
        return StudentContext(target_user_id=actor.id, viewer=viewer)

    if actor.role not in COLLABORATOR_ROLES:
        raise _deny(actor.id, f"Unsupported role: {actor.role}")

    if active_student_id is _UNSET:
        active_student_id = actor.active_student_id
    resolved_student_id = student_id if student_id is not None else active_student_id
    if resolved_student_id is None:
        raise _deny(actor.id, "Select a student to continue")

    link = get_live_link(db, student_id=resolved_student_id, collaborator_id=actor.id)
    if link is None:
        student = db.query(User).filter(User.id == resolved_student_id).first()
        if student is None or student.role != Role.STUDENT.value:
            raise _deny(actor.id, "Student not found", 404)
        raise _deny(actor.id, "Collaboration link not found")

    if link.status != "active":
        raise _deny(actor.id, "Collaboration invite has not been accepted yet")

    if not has_permission(link.permissions, permission):
        raise _deny(
            actor.id,
            f"Missing required permission: {permission.value} ({permission_label(permission)})",
        )

    return StudentContext(target_user_id=resolved_student_id, viewer=viewer, link=link)
