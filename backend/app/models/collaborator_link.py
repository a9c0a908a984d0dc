"""Student-collaborator link granting a counselor or parent scoped access."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base

LINK_STATUSES = ("pending", "active", "revoked")


class CollaboratorLink(Base):
    __tablename__ = "collaborator_links"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    collaborator_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    relationship_type = Column("relationship", String(20), nullable=False)
    status = Column(String(20), nullable=False, default="active", index=True)
    permissions = Column(JSON, nullable=False, default=dict)
    note = Column(Text, nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    accepted_at = Column(DateTime(timezone=True), nullable=True)
    last_seen_at = Column(DateTime(timezone=True), nullable=True)
    # bcrypt hash of the one-time token an invited placeholder account is claimed with
    invite_token_hash = Column(String(255), nullable=True)
    invite_expires_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    # Revoked rows stay as history, so uniqueness of the live pair is enforced by the service.
    __table_args__ = (Index("ix_collaborator_links_pair", "student_id", "collaborator_id"),)

    student = relationship("User", back_populates="student_links", foreign_keys=[student_id])
    collaborator = relationship("User", back_populates="collaborator_links", foreign_keys=[collaborator_id])
    created_by = relationship("User", foreign_keys=[created_by_id])

    # Plaintext invite token; only set on the instance returned when the link is created.
    invite_token = None
