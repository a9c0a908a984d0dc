"""User accounts: students own application data, counselors and parents collaborate on it."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    hashed_password = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default="student", index=True)
    intake_year = Column(Integer, nullable=True)
    timezone = Column(String(64), nullable=True)
    organization = Column(String(255), nullable=True)
    # Last student a counselor/parent switched to; unused for students.
    active_student_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    onboarded_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    active_student = relationship("User", remote_side=[id], foreign_keys=[active_student_id])
    student_links = relationship(
        "CollaboratorLink",
        back_populates="student",
        cascade="all, delete-orphan",
        foreign_keys="CollaboratorLink.student_id",
    )
    collaborator_links = relationship(
        "CollaboratorLink",
        back_populates="collaborator",
        cascade="all, delete-orphan",
        foreign_keys="CollaboratorLink.collaborator_id",
    )
    colleges = relationship("College", back_populates="owner", cascade="all, delete-orphan")
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")
    essays = relationship("Essay", back_populates="owner", cascade="all, delete-orphan")
    documents = relationship(
        "ApplicationDocument",
        back_populates="owner",
        cascade="all, delete-orphan",
        foreign_keys="ApplicationDocument.user_id",
    )
