"""College applications on a student's list."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class College(Base):
    __tablename__ = "colleges"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    plan = Column(String(20), nullable=False, default="RD")
    deadline = Column(DateTime(timezone=True), nullable=False)
    intake = Column(String(20), nullable=False, default="Fall")
    region = Column(String(20), nullable=False, default="US")
    portal_url = Column(String(512), nullable=True)
    notes = Column(Text, nullable=True)
    phase = Column(String(20), nullable=False, default="researching")
    decision = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    owner = relationship("User", back_populates="colleges")
    tasks = relationship("Task", back_populates="college", cascade="all, delete-orphan")
    essays = relationship("Essay", back_populates="college")
