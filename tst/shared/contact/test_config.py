"""Tests for environment-based contact settings."""

from src.shared.contact.config import RECAPTCHA_VERIFY_URL, get_settings


ENV_VARS = [
    "SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASSWORD", "SENDER_EMAIL_ADDRESS",
    "CONTACT_RECIPIENTS", "RECAPTCHA_SECRET_KEY", "RECAPTCHA_VERIFY_URL",
    "CONTACT_BLOCKED_EMAILS", "CONTACT_RATE_LIMIT_MAX_REQUESTS", "CONTACT_RATE_LIMIT_WINDOW_MS",
    "CONTACT_AUTO_REPLY_ENABLED", "FIRM_NAME", "FIRM_PHONE",
]


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    clear_env(monkeypatch)

    settings = get_settings()

    assert settings.smtp_port == 587
    assert settings.smtp_user is None
    assert settings.recipient_addresses == []
    assert settings.recaptcha_secret is None
    assert settings.recaptcha_verify_url == RECAPTCHA_VERIFY_URL
    assert settings.rate_limit_max_requests == 3
    assert settings.rate_limit_window_ms == 60000
    assert settings.auto_reply_enabled is False


def test_values_from_environment(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("CONTACT_RECIPIENTS", "brad@firm.example, web@firm.example,")
    monkeypatch.setenv("CONTACT_BLOCKED_EMAILS", "bad@spam.example")
    monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "secret")
    monkeypatch.setenv("CONTACT_RATE_LIMIT_MAX_REQUESTS", "5")
    monkeypatch.setenv("CONTACT_AUTO_REPLY_ENABLED", "true")
    monkeypatch.setenv("SMTP_PORT", "2525")

    settings = get_settings()

    assert settings.recipient_addresses == ["brad@firm.example", "web@firm.example"]
    assert settings.blocked_emails == ["bad@spam.example"]
    assert settings.recaptcha_secret == "secret"
    assert settings.rate_limit_max_requests == 5
    assert settings.auto_reply_enabled is True
    assert settings.smtp_port == 2525


def test_empty_secret_counts_as_unset(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("RECAPTCHA_SECRET_KEY", "")

    assert get_settings().recaptcha_secret is None
