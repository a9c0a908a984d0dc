"""Audit log of collaborator link lifecycle actions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    acting_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    link_id = Column(Integer, ForeignKey("collaborator_links.id", ondelete="CASCADE"), nullable=True, index=True)
    action = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
