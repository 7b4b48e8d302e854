import importlib
from types import SimpleNamespace

import pytest

from src.attendance_core.attendance_core.core.exceptions import ConfigError
from src.attendance_core.attendance_core.core.settings import AppSettings


def test_testing_module_loads():
    settings = AppSettings.from_module(importlib.import_module("config.testing"))

    assert settings.testing is True
    assert settings.ledger_id == "attendance-test"
    assert settings.mail.service == "outlook"
    assert settings.verify_whitelist is True
    assert settings.rate_limits == {}


def test_missing_values_are_listed():
    module = SimpleNamespace(
        SESSION_SECRET="",
        LEDGER_ID="ledger",
        MONGO_URI="mongodb://localhost",
        MONGO_DB="portal",
        MAIL_USER="noreply@example.com",
        MAIL_PASSWORD="",
        DB_CONFIG={"host": "localhost", "user": "root"},
    )

    with pytest.raises(ConfigError) as e:
        AppSettings.from_module(module)

    message = str(e.value)
    assert "SESSION_SECRET" in message
    assert "MAIL_PASSWORD" in message
    assert "DB_CONFIG['database']" in message
    assert "LEDGER_ID" not in message


@pytest.mark.parametrize(
    "env, expected",
    [("production", "config.production"), ("test", "config.testing"), ("", "config.development")],
)
def test_app_env_selects_settings_module(monkeypatch, env, expected):
    from config import get_settings_module

    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected
