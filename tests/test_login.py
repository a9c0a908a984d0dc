import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_user(client: TestClient, email: str, password: str):
    return client.post("/auth/register", json={"email": email, "password": password})


def test_successful_login_returns_token():
    client = TestClient(app)
    register_user(client, "login@example.com", "secret")
    response = client.post("/auth/login", json={"email": "login@example.com", "password": "secret"})
    assert response.status_code == 200
    data = response.json()
    assert data.get("token_type") == "bearer"
    assert isinstance(data.get("access_token"), str) and data["access_token"]


def test_wrong_password_returns_400():
    client = TestClient(app)
    register_user(client, "wrongpw@example.com", "secret")
    response = client.post("/auth/login", json={"email": "wrongpw@example.com", "password": "bad"})
    assert response.status_code == 400


def test_invited_user_without_password_cannot_log_in():
    with SessionLocal() as db:
        db.add(User(email="placeholder@example.com", role="counselor"))
        db.commit()
    client = TestClient(app)
    response = client.post("/auth/login", json={"email": "placeholder@example.com", "password": "secret"})
    assert response.status_code == 400


def test_inactive_user_returns_400():
    client = TestClient(app)
    register_user(client, "inactive@example.com", "secret")
    with SessionLocal() as db:
        user = db.query(User).filter(User.email == "inactive@example.com").first()
        user.is_active = False
        db.commit()
    response = client.post("/auth/login", json={"email": "inactive@example.com", "password": "secret"})
    assert response.status_code == 400


def test_nonexistent_user_returns_400():
    client = TestClient(app)
    response = client.post("/auth/login", json={"email": "nosuch@example.com", "password": "secret"})
    assert response.status_code == 400


def test_login_reports_role_and_onboarding_state():
    client = TestClient(app)
    client.post("/auth/register", json={"email": "Coach@Example.com", "password": "secret", "role": "counselor"})
    response = client.post("/auth/login", json={"email": "coach@example.com", "password": "secret"})
    assert response.status_code == 200
    assert response.json()["role"] == "counselor"
    assert response.json()["needs_onboarding"] is True
