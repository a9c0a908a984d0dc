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


def register_and_login(client: TestClient, email: str, password: str, role: str = "student") -> str:
    client.post("/auth/register", json={"email": email, "password": password, "role": role})
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


def test_me_returns_current_user():
    client = TestClient(app)
    token = register_and_login(client, "me@example.com", "secret")
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "me@example.com"
    assert data["role"] == "student"
    assert data["active_student_id"] is None


def test_me_without_token_returns_401():
    client = TestClient(app)
    response = client.get("/auth/me")
    assert response.status_code == 401


def test_me_with_invalid_token_returns_401():
    client = TestClient(app)
    response = client.get("/auth/me", headers={"Authorization": "Bearer invalid"})
    assert response.status_code == 401


def test_onboarding_sets_role_once():
    client = TestClient(app)
    token = register_and_login(client, "newcoach@example.com", "secret")
    headers = {"Authorization": f"Bearer {token}"}

    first = client.post("/onboarding/", json={"role": "counselor", "organization": "Ivy Prep"}, headers=headers)
    assert first.status_code == 200
    assert first.json()["role"] == "counselor"
    assert first.json()["organization"] == "Ivy Prep"
    assert first.json()["onboarded_at"] is not None

    second = client.post("/onboarding/", json={"role": "student"}, headers=headers)
    assert second.status_code == 400

    same_role = client.post("/onboarding/", json={"role": "counselor", "timezone": "America/New_York"}, headers=headers)
    assert same_role.status_code == 200
    assert same_role.json()["timezone"] == "America/New_York"
