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


def test_essay_word_count_tracks_content():
    client = TestClient(app)
    token = register_and_login(client, "student@example.com", "secret")
    essay = client.post("/essays/", json={"title": "Common App", "prompt": "Tell us a story"}, headers=auth(token))
    assert essay.status_code == 201
    assert essay.json()["word_limit"] == 650
    assert essay.json()["word_count"] == 0

    updated = client.patch(
        f"/essays/{essay.json()['id']}",
        json={"content": "I built a robot\nthat plays chess."},
        headers=auth(token),
    )
    assert updated.status_code == 200
    assert updated.json()["word_count"] == 7


def test_parent_can_read_but_not_edit_essays():
    client = TestClient(app)
    student_token = register_and_login(client, "student@example.com", "secret")
    student_id = client.get("/auth/me", headers=auth(student_token)).json()["id"]
    essay_id = client.post("/essays/", json={"title": "Why us"}, headers=auth(student_token)).json()["id"]
    link = client.post(
        "/collaboration/links",
        json={"collaboratorEmail": "parent@example.com", "relationship": "parent"},
        headers=auth(student_token),
    ).json()
    parent_token = register_and_login(client, "parent@example.com", "secret", invite_token=link["invite_token"])

    read = client.get(f"/essays/{essay_id}?studentId={student_id}", headers=auth(parent_token))
    assert read.status_code == 200
    assert read.json()["title"] == "Why us"

    edit = client.patch(
        f"/essays/{essay_id}?studentId={student_id}", json={"content": "Rewritten"}, headers=auth(parent_token)
    )
    assert edit.status_code == 403
    assert "manageEssays" in edit.json()["detail"]


def test_essay_permission_is_independent_of_task_permission():
    client = TestClient(app)
    student_token = register_and_login(client, "student@example.com", "secret")
    student_id = client.get("/auth/me", headers=auth(student_token)).json()["id"]
    link = client.post(
        "/collaboration/links",
        json={"collaboratorEmail": "coach@example.com", "permissions": {"viewEssays": False}},
        headers=auth(student_token),
    ).json()
    coach_token = register_and_login(client, "coach@example.com", "secret", invite_token=link["invite_token"])

    assert client.get(f"/tasks/?studentId={student_id}", headers=auth(coach_token)).status_code == 200
    assert client.get(f"/essays/?studentId={student_id}", headers=auth(coach_token)).status_code == 403


def test_missing_essay_is_404():
    client = TestClient(app)
    token = register_and_login(client, "student@example.com", "secret")
    assert client.get("/essays/404", headers=auth(token)).status_code == 404
    assert client.delete("/essays/404", headers=auth(token)).status_code == 404


def test_null_fields_in_essay_update_are_400():
    client = TestClient(app)
    token = register_and_login(client, "student@example.com", "secret")
    essay_id = client.post("/essays/", json={"title": "Why us"}, headers=auth(token)).json()["id"]

    for field in ("title", "content", "word_limit", "completed"):
        resp = client.patch(f"/essays/{essay_id}", json={field: None}, headers=auth(token))
        assert resp.status_code == 400, field
    assert client.get(f"/essays/{essay_id}", headers=auth(token)).json()["title"] == "Why us"


def test_essay_timestamps_are_utc():
    client = TestClient(app)
    token = register_and_login(client, "student@example.com", "secret")
    essay = client.post("/essays/", json={"title": "Why us"}, headers=auth(token)).json()
    assert essay["created_at"].endswith(("+00:00", "Z"))


def _student_with_counselor(client: TestClient):
    student_token = register_and_login(client, "student@example.com", "secret")
    student_id = client.get("/auth/me", headers=auth(student_token)).json()["id"]
    essay_id = client.post("/essays/", json={"title": "Common App"}, headers=auth(student_token)).json()["id"]
    client.patch(f"/essays/{essay_id}", json={"content": "I built a robot that plays chess."}, headers=auth(student_token))
    link = client.post(
        "/collaboration/links", json={"collaboratorEmail": "coach@example.com"}, headers=auth(student_token)
    ).json()
    coach_token = register_and_login(client, "coach@example.com", "secret", invite_token=link["invite_token"])
    return student_token, student_id, essay_id, coach_token


def test_counselor_leaves_feedback_on_a_selection():
    client = TestClient(app)
    student_token, student_id, essay_id, coach_token = _student_with_counselor(client)
    coach_id = client.get("/auth/me", headers=auth(coach_token)).json()["id"]

    resp = client.post(
        f"/essays/{essay_id}/feedback?studentId={student_id}",
        json={"selection": "a robot", "note": "Name the robot.", "selectionStart": 8, "selectionEnd": 15},
        headers=auth(coach_token),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["author_id"] == coach_id
    assert body["essay_id"] == essay_id
    assert (body["selection_start"], body["selection_end"]) == (8, 15)

    listed = client.get(f"/essays/{essay_id}/feedback", headers=auth(student_token))
    assert listed.status_code == 200
    assert [item["note"] for item in listed.json()] == ["Name the robot."]


def test_feedback_span_must_fit_the_content():
    client = TestClient(app)
    _, student_id, essay_id, coach_token = _student_with_counselor(client)
    url = f"/essays/{essay_id}/feedback?studentId={student_id}"

    past_end = client.post(
        url, json={"selection": "x", "note": "n", "selectionStart": 0, "selectionEnd": 500}, headers=auth(coach_token)
    )
    assert past_end.status_code == 400
    reversed_span = client.post(
        url, json={"selection": "x", "note": "n", "selectionStart": 5, "selectionEnd": 2}, headers=auth(coach_token)
    )
    assert reversed_span.status_code == 400
    empty_note = client.post(
        url, json={"selection": "x", "note": "", "selectionStart": 0, "selectionEnd": 1}, headers=auth(coach_token)
    )
    assert empty_note.status_code == 400


def test_parent_can_read_but_not_leave_feedback():
    client = TestClient(app)
    student_token, student_id, essay_id, coach_token = _student_with_counselor(client)
    client.post(
        f"/essays/{essay_id}/feedback?studentId={student_id}",
        json={"selection": "robot", "note": "Good hook.", "selectionStart": 10, "selectionEnd": 15},
        headers=auth(coach_token),
    )
    link = client.post(
        "/collaboration/links",
        json={"collaboratorEmail": "parent@example.com", "relationship": "parent"},
        headers=auth(student_token),
    ).json()
    parent_token = register_and_login(client, "parent@example.com", "secret", invite_token=link["invite_token"])

    read = client.get(f"/essays/{essay_id}/feedback?studentId={student_id}", headers=auth(parent_token))
    assert read.status_code == 200
    assert len(read.json()) == 1

    write = client.post(
        f"/essays/{essay_id}/feedback?studentId={student_id}",
        json={"selection": "robot", "note": "Hmm", "selectionStart": 10, "selectionEnd": 15},
        headers=auth(parent_token),
    )
    assert write.status_code == 403
    assert "manageEssays" in write.json()["detail"]
