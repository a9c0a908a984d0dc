from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str, invite_token: str | None = None) -> str:
    client.post("/auth/register", json={"email": email, "password": password, "invite_token": invite_token})
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_dashboard_overview_for_student_and_parent():
    client = TestClient(app)
    student_token = register_and_login(client, "student@example.com", "secret")
    student_id = client.get("/auth/me", headers=auth(student_token)).json()["id"]

    soon = datetime.now(timezone.utc) + timedelta(days=30)
    later = datetime.now(timezone.utc) + timedelta(days=90)
    client.post("/colleges/", json={"name": "Yale", "deadline": later.isoformat()}, headers=auth(student_token))
    client.post("/colleges/", json={"name": "Brown", "deadline": soon.isoformat()}, headers=auth(student_token))
    client.post(
        "/tasks/",
        json={"title": "Overdue", "due_date": (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()},
        headers=auth(student_token),
    )
    client.post("/essays/", json={"title": "Personal statement"}, headers=auth(student_token))

    overview = client.get("/dashboard/overview", headers=auth(student_token))
    assert overview.status_code == 200
    data = overview.json()
    assert data["student_id"] == student_id
    assert data["viewer_role"] == "student"
    assert data["total_colleges"] == 2
    assert data["open_tasks"] == 7
    assert data["overdue_tasks"] == 1
    assert data["total_essays"] == 1
    assert data["next_deadline"]["name"] == "Brown"
    assert [d["name"] for d in data["upcoming_deadlines"]] == ["Brown", "Yale"]

    link = client.post(
        "/collaboration/links",
        json={"collaboratorEmail": "parent@example.com", "relationship": "parent"},
        headers=auth(student_token),
    ).json()
    parent_token = register_and_login(client, "parent@example.com", "secret", invite_token=link["invite_token"])
    parent_view = client.get(f"/dashboard/overview?studentId={student_id}", headers=auth(parent_token))
    assert parent_view.status_code == 200
    assert parent_view.json()["viewer_role"] == "parent"
    assert parent_view.json()["total_colleges"] == 2
