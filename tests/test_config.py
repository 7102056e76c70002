import pytest

from jobs2go_admin.core.config import DEFAULT_SECRET_KEY, Settings, get_settings, validate_environment

pytestmark = pytest.mark.unit


def test_nested_sections_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECURITY__ACCESS_TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("PERMISSIONS__CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("EMAIL__ALERT_RECIPIENTS", '["a@example.com", "b@example.com"]')

    settings = Settings()

    assert settings.access_token_expire_minutes == 15
    assert settings.permissions.cache_ttl_seconds == 60
    assert settings.email.alert_recipients == ["a@example.com", "b@example.com"]
    assert settings.environment == "test"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_validate_environment_in_production_warns_about_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("EMAIL__PROVIDER", "smtp")

    report = validate_environment()

    assert report.success
    assert "security.secret_key still uses the default value" in report.warnings
    assert "no notification channel is configured" in report.warnings


def test_validate_environment_clean_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("SECURITY__SECRET_KEY", "a-much-better-secret")
    monkeypatch.setenv("SLACK__WEBHOOK_URL", "https://hooks.slack.test/T000")
    monkeypatch.setenv("EMAIL__RESEND_API_KEY", "re_live")

    report = validate_environment()

    assert report.success
    assert report.warnings == []
    assert Settings().secret_key != DEFAULT_SECRET_KEY


def test_validate_environment_reports_invalid_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECURITY__SECRET_KEY", "short")

    report = validate_environment()

    assert not report.success
    assert any(error.startswith("security.secret_key") for error in report.errors)
