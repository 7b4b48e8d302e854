from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Any, Mapping

from .exceptions import ConfigError


@dataclass(frozen=True)
class MailSettings:
    service: str
    user: str
    password: str


@dataclass(frozen=True)
class AppSettings:
    """Process-wide configuration, resolved once at startup.

    Every field listed in ``_REQUIRED`` must be non-empty; ``from_module``
    raises ``ConfigError`` otherwise so the app never boots half-configured.
    """

    session_secret: str
    ledger_id: str
    db_config: Mapping[str, Any]
    mongo_uri: str
    mongo_db: str
    mail: MailSettings
    debug: bool = False
    testing: bool = False
    secure_cookies: bool = False
    verify_whitelist: bool = True
    auto_init_db: bool = False
    rate_limits: Mapping[str, str] = field(default_factory=dict)

    _REQUIRED = (
        "SESSION_SECRET",
        "LEDGER_ID",
        "MONGO_URI",
        "MONGO_DB",
        "MAIL_USER",
        "MAIL_PASSWORD",
    )

    @classmethod
    def from_module(cls, settings: ModuleType) -> "AppSettings":
        missing = [name for name in cls._REQUIRED if not getattr(settings, name, None)]
        db_config = getattr(settings, "DB_CONFIG", None) or {}
        for key in ("host", "user", "database"):
            if not db_config.get(key):
                missing.append(f"DB_CONFIG[{key!r}]")
        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

        return cls(
            session_secret=str(settings.SESSION_SECRET),
            ledger_id=str(settings.LEDGER_ID),
            db_config=dict(db_config),
            mongo_uri=str(settings.MONGO_URI),
            mongo_db=str(settings.MONGO_DB),
            mail=MailSettings(
                service=str(getattr(settings, "MAIL_SERVICE", "outlook") or "outlook").lower(),
                user=str(settings.MAIL_USER),
                password=str(settings.MAIL_PASSWORD),
            ),
            debug=bool(getattr(settings, "DEBUG", False)),
            testing=bool(getattr(settings, "TESTING", False)),
            secure_cookies=bool(getattr(settings, "SECURE_COOKIES", False)),
            verify_whitelist=bool(getattr(settings, "VERIFY_WHITELIST", True)),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
            rate_limits=dict(getattr(settings, "RATE_LIMITS", {}) or {}),
        )
