"""Collaborator link lifecycle: invite, claim, accept, re-scope, revoke.

Links move pending -> active -> revoked, and revoked is final. Students own
their links and are the only ones who may change permissions or revoke.
Collaborators act on a link only to accept a pending invite, or to claim a
placeholder account with the invite token issued alongside the link.
"""

import logging
import secrets
from datetime import timedelta
from typing import Any, Mapping, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from backend.app.core.errors import AuthorizationError, ConflictError, InvalidRequestError, NotFoundError
from backend.app.core.permissions import (
    COLLABORATOR_ROLES,
    Relationship,
    Role,
    default_permissions,
    sanitize_permissions,
)
from backend.app.core.security import get_password_hash, verify_password
from backend.app.core.settings import get_settings
from backend.app.core.time import as_utc, utc_now
from backend.app.models.audit_log import AuditLog
from backend.app.models.collaborator_link import CollaboratorLink
from backend.app.models.user import User
from backend.app.services.student_context_service import get_live_link

logger = logging.getLogger(__name__)

INVITE_TOKEN_TTL = timedelta(days=14)


def normalize_email(raw_email: Optional[str]) -> str:
    if raw_email is None or not raw_email.strip():
        raise InvalidRequestError("Collaborator email is required")
    try:
        result = validate_email(raw_email.strip(), check_deliverability=False)
    except EmailNotValidError as exc:
        raise InvalidRequestError(f"Invalid collaborator email: {exc}") from exc
    return result.normalized.lower()


def _record(db: Session, link: CollaboratorLink, acting_user_id: int, action: str) -> None:
    db.add(
        AuditLog(
            student_id=link.student_id,
            acting_user_id=acting_user_id,
            link_id=link.id,
            action=action,
        )
    )


def _get_link(db: Session, link_id: int) -> CollaboratorLink:
    link = (
        db.query(CollaboratorLink)
        .options(joinedload(CollaboratorLink.student), joinedload(CollaboratorLink.collaborator))
        .filter(CollaboratorLink.id == link_id)
        .first()
    )
    if link is None:
        raise NotFoundError("Collaboration link")
    return link


def _get_owned_link(db: Session, link_id: int, requested_by: int) -> CollaboratorLink:
    link = _get_link(db, link_id)
    if link.student_id != requested_by:
        raise AuthorizationError("Only the student who owns this link can manage it")
    return link


def _find_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_or_create_collaborator(db: Session, *, email: str, relationship: Relationship) -> User:
    """Find the invited user by email, creating a password-less account if needed."""
    user = _find_user_by_email(db, email)
    if user is None:
        user = User(
            email=email,
            role=relationship.value,
            intake_year=utc_now().year + 1,
            is_active=True,
        )
        db.add(user)
        try:
            db.flush()
        except IntegrityError:
            # A concurrent invite created the account first.
            db.rollback()
            user = _find_user_by_email(db, email)
            if user is None:
                raise
        else:
            logger.info("Created placeholder %s account %s for invite", relationship.value, user.id)
            return user

    if user.role != relationship.value:
        raise InvalidRequestError(f"Target user must be a {relationship.value}")
    return user


def create_link(
    db: Session,
    *,
    student: User,
    collaborator_email: Optional[str],
    relationship: Relationship | str = Relationship.COUNSELOR,
    permissions: Optional[Mapping[str, Any]] = None,
    note: Optional[str] = None,
    require_acceptance: Optional[bool] = None,
) -> CollaboratorLink:
    if student.role != Role.STUDENT.value:
        raise AuthorizationError("Only students can invite collaborators")

    try:
        relationship = Relationship(relationship)
    except ValueError as exc:
        raise InvalidRequestError(f"Invalid relationship: {relationship}") from exc

    email = normalize_email(collaborator_email)
    overrides = sanitize_permissions(permissions)
    if email == (student.email or "").lower():
        raise InvalidRequestError("Cannot invite yourself")

    collaborator = get_or_create_collaborator(db, email=email, relationship=relationship)

    existing = get_live_link(db, student_id=student.id, collaborator_id=collaborator.id)
    if existing is not None:
        raise ConflictError(f"{collaborator.email} already has a {existing.status} link to this student")

    if require_acceptance is None:
        require_acceptance = get_settings().require_invite_acceptance

    granted = default_permissions(relationship)
    granted.update(overrides)

    link = CollaboratorLink(
        student_id=student.id,
        collaborator_id=collaborator.id,
        relationship_type=relationship.value,
        status="pending" if require_acceptance else "active",
        permissions=granted,
        note=note,
        created_by_id=student.id,
        accepted_at=None if require_acceptance else utc_now(),
    )
    invite_token = None
    if not collaborator.hashed_password:
        invite_token = secrets.token_urlsafe(32)
        link.invite_token_hash = get_password_hash(invite_token)
        link.invite_expires_at = utc_now() + INVITE_TOKEN_TTL
    db.add(link)
    db.flush()
    _record(db, link, student.id, "link_created")
    db.commit()
    db.refresh(link)
    link.invite_token = invite_token
    logger.info(
        "Student %s linked %s %s (link %s, %s)",
        student.id,
        relationship.value,
        collaborator.id,
        link.id,
        link.status,
    )
    return link


def accept_link(db: Session, *, link_id: int, collaborator: User) -> CollaboratorLink:
    link = _get_link(db, link_id)
    if link.collaborator_id != collaborator.id:
        raise AuthorizationError("Only the invited collaborator can accept this link")
    if link.status == "revoked":
        raise InvalidRequestError("Collaboration link has been revoked")
    if link.status == "active":
        return link

    link.status = "active"
    link.accepted_at = utc_now()
    _record(db, link, collaborator.id, "link_accepted")
    db.commit()
    db.refresh(link)
    logger.info("Collaborator %s accepted link %s", collaborator.id, link.id)
    return link


def claim_invited_account(
    db: Session,
    *,
    user: User,
    invite_token: Optional[str],
    password: str,
    name: Optional[str] = None,
) -> User:
    """Set the password on an invited placeholder account.

    The caller must present the token issued with one of the placeholder's
    live links; knowing the email alone is not enough.
    """
    if user.hashed_password:
        raise ConflictError("Account already claimed")
    if not invite_token:
        raise AuthorizationError("An invite token is required to claim this account")

    now = utc_now()
    links = (
        db.query(CollaboratorLink)
        .filter(
            CollaboratorLink.collaborator_id == user.id,
            CollaboratorLink.status != "revoked",
            CollaboratorLink.invite_token_hash.isnot(None),
        )
        .all()
    )
    matched = next(
        (
            link
            for link in links
            if link.invite_expires_at is not None
            and as_utc(link.invite_expires_at) > now
            and verify_password(invite_token, link.invite_token_hash)
        ),
        None,
    )
    if matched is None:
        logger.info("Rejected account claim for placeholder %s", user.id)
        raise AuthorizationError("Invalid or expired invite token")

    user.hashed_password = get_password_hash(password)
    if name:
        user.name = name
    for link in links:
        link.invite_token_hash = None
        link.invite_expires_at = None
    _record(db, matched, user.id, "account_claimed")
    db.commit()
    db.refresh(user)
    logger.info("Invited %s %s claimed their account via link %s", user.role, user.id, matched.id)
    return user


def update_permissions(
    db: Session,
    *,
    link_id: int,
    requested_by: int,
    patch: Optional[Mapping[str, Any]] = None,
    note: Optional[str] = None,
) -> CollaboratorLink:
    link = _get_owned_link(db, link_id, requested_by)
    if link.status == "revoked":
        raise InvalidRequestError("Collaboration link has been revoked")

    changes = sanitize_permissions(patch)
    if changes:
        # Reassign so the JSON column is flagged dirty.
        link.permissions = {**(link.permissions or {}), **changes}
        _record(db, link, requested_by, "permissions_updated")
    if note is not None:
        link.note = note

    db.commit()
    db.refresh(link)
    if changes:
        logger.info("Student %s updated permissions on link %s: %s", requested_by, link.id, changes)
    return link


def revoke_link(db: Session, *, link_id: int, requested_by: int) -> CollaboratorLink:
    link = _get_owned_link(db, link_id, requested_by)
    if link.status == "revoked":
        return link

    link.status = "revoked"
    _record(db, link, requested_by, "link_revoked")
    collaborator = link.collaborator
    if collaborator is not None and collaborator.active_student_id == link.student_id:
        collaborator.active_student_id = None
    db.commit()
    db.refresh(link)
    logger.info("Student %s revoked link %s", requested_by, link.id)
    return link


def list_links(db: Session, *, user: User, include_revoked: bool = False) -> list[CollaboratorLink]:
    query = db.query(CollaboratorLink).options(
        joinedload(CollaboratorLink.student), joinedload(CollaboratorLink.collaborator)
    )
    if user.role in COLLABORATOR_ROLES:
        query = query.filter(CollaboratorLink.collaborator_id == user.id)
    else:
        query = query.filter(CollaboratorLink.student_id == user.id)
    if not include_revoked:
        query = query.filter(CollaboratorLink.status != "revoked")
    return query.order_by(CollaboratorLink.created_at.desc(), CollaboratorLink.id.desc()).all()


def list_active_students(db: Session, *, user: User) -> list[CollaboratorLink]:
    return [link for link in list_links(db, user=user) if link.status == "active"]


def set_active_student(db: Session, *, user: User, student_id: Optional[int]) -> User:
    """Persist the student a counselor/parent is currently working on."""
    if user.role not in COLLABORATOR_ROLES:
        raise AuthorizationError("Only collaborators can change context")

    if student_id is None:
        user.active_student_id = None
        db.commit()
        return user

    link = get_live_link(db, student_id=student_id, collaborator_id=user.id)
    if link is None or link.status != "active":
        raise NotFoundError("Collaboration link")

    user.active_student_id = link.student_id
    link.last_seen_at = utc_now()
    db.commit()
    db.refresh(user)
    return user
