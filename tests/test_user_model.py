from backend.app.models.collaborator_link import CollaboratorLink
from backend.app.models.user import User


def test_user_model_has_columns():
    column_names = [column.name for column in User.__table__.columns]
    expected = {"id", "email", "name", "role", "hashed_password", "active_student_id", "intake_year", "created_at"}
    assert expected.issubset(set(column_names))


def test_user_model_primary_key():
    pk_columns = [column.name for column in User.__table__.primary_key.columns]
    assert "id" in pk_columns


def test_collaborator_link_columns():
    column_names = {column.name for column in CollaboratorLink.__table__.columns}
    assert {"student_id", "collaborator_id", "relationship", "status", "permissions", "accepted_at"} <= column_names
