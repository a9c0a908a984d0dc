"""Supporting documents (resume, transcripts, test scores, ...)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base

DOCUMENT_CATEGORIES = ("resume", "transcript", "test_score", "portfolio", "counselor_form", "other")
DOCUMENT_STATUSES = ("draft", "in_review", "ready", "submitted")


class ApplicationDocument(Base):
    __tablename__ = "application_documents"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    college_id = Column(Integer, ForeignKey("colleges.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(255), nullable=False)
    category = Column(String(30), nullable=False, default="other")
    status = Column(String(20), nullable=False, default="draft")
    description = Column(Text, nullable=True)
    file_url = Column(String(1024), nullable=True)
    last_touched_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    last_touched_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    owner = relationship("User", back_populates="documents", foreign_keys=[user_id])
    last_touched_by = relationship("User", foreign_keys=[last_touched_by_id])
