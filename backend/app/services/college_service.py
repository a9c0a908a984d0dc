"""College creation with the starter task checklist every application gets."""

from datetime import timedelta

from sqlalchemy.orm import Session

from backend.app.models.college import College
from backend.app.models.task import Task
from backend.app.schemas.college import CollegeCreate

# (title template, label, priority, days before deadline)
STARTER_TASKS = (
    ("Complete main essay for {name}", "Essay", "high", 7),
    ("Request teacher recommendations for {name}", "Rec", "high", 14),
    ("Submit application fee for {name}", "Fees", "medium", 0),
)


def create_college(db: Session, *, owner_id: int, college_in: CollegeCreate) -> College:
    college = College(user_id=owner_id, **college_in.model_dump())
    db.add(college)
    db.flush()

    for title, label, priority, days_before in STARTER_TASKS:
        db.add(
            Task(
                user_id=owner_id,
                college_id=college.id,
                title=title.format(name=college.name),
                label=label,
                priority=priority,
                due_date=college.deadline - timedelta(days=days_before),
            )
        )

    db.commit()
    db.refresh(college)
    return college
