from backend.app.core.settings import Settings, get_settings


def test_settings_defaults():
    settings = get_settings()
    assert settings.app_name == "ApplyDesk"
    assert isinstance(settings.secret_key, str) and settings.secret_key
    assert isinstance(settings.database_url, str) and settings.database_url
    assert settings.access_token_expire_minutes > 0


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("REQUIRE_INVITE_ACCEPTANCE", "true")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "5")
    settings = Settings()
    assert settings.require_invite_acceptance is True
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 5


def test_invite_acceptance_off_by_default(monkeypatch):
    monkeypatch.delenv("REQUIRE_INVITE_ACCEPTANCE", raising=False)
    assert Settings().require_invite_acceptance is False
