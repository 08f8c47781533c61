import pytest
from pydantic import ValidationError

from salon_deposits.settings import Settings


@pytest.mark.parametrize(
    "env_value, expected",
    [
        (None, [5]),
        ("", [5]),
        ("sat,sun", [5, 6]),
        ("Friday, saturday", [4, 5]),
        ('["5","6"]', [5, 6]),
        ("[6]", [6]),
    ],
)
def test_weekend_weekdays_env_parsing(monkeypatch, env_value, expected):
    if env_value is None:
        monkeypatch.delenv("RELIABILITY_WEEKEND_PREMIUM_WEEKDAYS", raising=False)
    else:
        monkeypatch.setenv("RELIABILITY_WEEKEND_PREMIUM_WEEKDAYS", env_value)

    settings = Settings(_env_file=None)

    assert settings.reliability_weekend_premium_weekdays == expected


def test_invalid_weekday_rejected(monkeypatch):
    monkeypatch.setenv("RELIABILITY_WEEKEND_PREMIUM_WEEKDAYS", "caturday")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.reliability_decision_logging is True
    assert settings.log_level == "INFO"


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    assert Settings(_env_file=None).log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty", _env_file=None)


def test_host_env_file_keys_are_ignored(monkeypatch, tmp_path):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DATABASE_URL=postgres://booking:secret@db/booking\n"
        "STRIPE_SECRET_KEY=sk_test_123\n"
        "LOG_LEVEL=warning\n"
    )

    settings = Settings(_env_file=env_file)

    assert settings.log_level == "WARNING"
    assert not hasattr(settings, "database_url")
