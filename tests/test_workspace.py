import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.workspace import Workspace
from backend.app.schemas.workspace import WorkspacePatch
from backend.app.services.workspace_service import merge_workspace


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


def test_new_student_sees_default_checklist_without_a_stored_row():
    client = TestClient(app)
    token = register_and_login(client, "student@example.com", "secret")

    resp = client.get("/workspace/", headers=auth(token))
    assert resp.status_code == 200
    data = resp.json()
    assert [item["key"] for item in data["checklist"]][:3] == ["common-app-profile", "essay-draft", "fafsa"]
    assert data["scholarships"] == []
    assert data["testing_plan"]["registered"] is False
    assert data["updated_at"] is None

    with SessionLocal() as db:
        assert db.query(Workspace).count() == 0


def test_student_tracks_scholarships_and_recommenders():
    client = TestClient(app)
    token = register_and_login(client, "student@example.com", "secret")

    resp = client.patch(
        "/workspace/",
        json={
            "scholarships": [{"name": "Coca-Cola Scholars", "amount": "$20,000", "deadline": "2026-10-31"}],
            "recommenders": [{"name": "Ms. Rivera", "email": "rivera@school.edu", "role": "Chemistry"}],
            "testing_plan": {"registered": True, "goal_score": "1500"},
        },
        headers=auth(token),
    )
    assert resp.status_code == 200
    data = resp.json()
    scholarship = data["scholarships"][0]
    assert scholarship["id"].startswith("sch-")
    assert scholarship["status"] == "researching"
    assert data["recommenders"][0]["id"].startswith("rec-")
    assert data["testing_plan"] == {"registered": True, "goal_score": "1500", "next_test_date": None, "notes": ""}

    # Partial nested updates keep the other fields.
    again = client.patch("/workspace/", json={"testing_plan": {"notes": "Retake in October"}}, headers=auth(token))
    assert again.json()["testing_plan"]["goal_score"] == "1500"
    assert again.json()["scholarships"][0]["id"] == scholarship["id"]

    stored = client.get("/workspace/", headers=auth(token)).json()
    assert stored["testing_plan"]["notes"] == "Retake in October"
    assert stored["updated_by_id"] is not None


def test_parent_reads_workspace_but_cannot_edit():
    client = TestClient(app)
    student_token = register_and_login(client, "student@example.com", "secret")
    student_id = client.get("/auth/me", headers=auth(student_token)).json()["id"]
    client.patch("/workspace/", json={"general_notes": "Focus on STEM programs"}, headers=auth(student_token))
    link = client.post(
        "/collaboration/links",
        json={"collaboratorEmail": "parent@example.com", "relationship": "parent"},
        headers=auth(student_token),
    ).json()
    parent_token = register_and_login(client, "parent@example.com", "secret", invite_token=link["invite_token"])

    read = client.get(f"/workspace/?studentId={student_id}", headers=auth(parent_token))
    assert read.status_code == 200
    assert read.json()["general_notes"] == "Focus on STEM programs"
    assert read.json()["student_id"] == student_id

    write = client.patch(
        f"/workspace/?studentId={student_id}", json={"general_notes": "Parent edit"}, headers=auth(parent_token)
    )
    assert write.status_code == 403
    assert "manageTasks" in write.json()["detail"]


def test_counselor_edits_are_attributed():
    client = TestClient(app)
    student_token = register_and_login(client, "student@example.com", "secret")
    student_id = client.get("/auth/me", headers=auth(student_token)).json()["id"]
    link = client.post(
        "/collaboration/links", json={"collaboratorEmail": "coach@example.com"}, headers=auth(student_token)
    ).json()
    coach_token = register_and_login(client, "coach@example.com", "secret", invite_token=link["invite_token"])
    coach_id = client.get("/auth/me", headers=auth(coach_token)).json()["id"]

    resp = client.patch(
        f"/workspace/?studentId={student_id}",
        json={"financial_aid": {"fafsa_submitted": True}},
        headers=auth(coach_token),
    )
    assert resp.status_code == 200
    assert resp.json()["updated_by_id"] == coach_id

    own = client.get("/workspace/", headers=auth(student_token)).json()
    assert own["financial_aid"]["fafsa_submitted"] is True


def test_invalid_workspace_payloads_are_400():
    client = TestClient(app)
    token = register_and_login(client, "student@example.com", "secret")
    bad_status = client.patch(
        "/workspace/", json={"scholarships": [{"name": "X", "status": "pending"}]}, headers=auth(token)
    )
    assert bad_status.status_code == 400
    null_flag = client.patch("/workspace/", json={"testing_plan": {"registered": None}}, headers=auth(token))
    assert null_flag.status_code == 400
    nameless = client.patch("/workspace/", json={"recommenders": [{"email": "r@school.edu"}]}, headers=auth(token))
    assert nameless.status_code == 400


def test_merge_replaces_lists_and_restores_empty_checklist():
    current = {"checklist": [], "scholarships": [{"id": "sch-1", "name": "Old"}]}
    merged = merge_workspace(current, WorkspacePatch(scholarships=[]))
    assert merged.scholarships == []
    assert len(merged.checklist) == 6
