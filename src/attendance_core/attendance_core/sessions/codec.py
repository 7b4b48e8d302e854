from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from flask import Flask, current_app
from flask_jwt_extended import JWTManager, create_access_token, decode_token

from ..core.constants import DEFAULT_SESSION_DAYS, SESSION_COOKIE_NAME
from ..core.enums import Role
from ..core.exceptions import ConfigError
from .model import SessionClaims

logger = logging.getLogger(__name__)


class TokenCodec:
    """Signs and verifies session tokens (HS256 JWT via Flask-JWT-Extended).

    The signing secret is checked in ``init_app`` so a misconfigured process
    fails at boot, not on the first login.
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        secret: str | None = None,
        ttl: timedelta = timedelta(days=DEFAULT_SESSION_DAYS),
        secure_cookies: bool = False,
    ):
        self._secret = secret
        self.ttl = ttl
        self._secure_cookies = secure_cookies
        if app:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        secret = self._secret or app.config.get("JWT_SECRET_KEY")
        if not secret:
            raise ConfigError("SESSION_SECRET is missing")

        app.config["JWT_SECRET_KEY"] = secret
        app.config["JWT_ALGORITHM"] = "HS256"
        app.config["JWT_ACCESS_TOKEN_EXPIRES"] = self.ttl
        app.config["JWT_TOKEN_LOCATION"] = ["cookies", "headers"]
        app.config["JWT_ACCESS_COOKIE_NAME"] = SESSION_COOKIE_NAME
        app.config["JWT_ACCESS_COOKIE_PATH"] = "/"
        app.config["JWT_COOKIE_SAMESITE"] = "Lax"
        app.config["JWT_COOKIE_SECURE"] = self._secure_cookies
        app.config["JWT_COOKIE_CSRF_PROTECT"] = False
        app.config["JWT_SESSION_COOKIE"] = False
        JWTManager(app)

    def issue(self, subject_id: str, role: Role | str) -> str:
        if not current_app.config.get("JWT_SECRET_KEY"):
            raise ConfigError("SESSION_SECRET is missing")
        role = role if isinstance(role, Role) else Role.normalize(role)
        return create_access_token(
            identity=str(subject_id),
            additional_claims={"role": role.value},
            expires_delta=self.ttl,
        )

    def verify(self, token: str | None) -> Optional[SessionClaims]:
        """Return the claims, or None for any malformed, expired or forged token."""
        if not token:
            return None
        try:
            decoded = decode_token(token, allow_expired=False)
            role = Role(decoded["role"])
            return SessionClaims(
                subject_id=str(decoded["sub"]),
                role=role,
                issued_at=datetime.fromtimestamp(int(decoded["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(decoded["exp"]), tz=timezone.utc),
            )
        except Exception as e:
            logger.warning("Session token rejected: %s", type(e).__name__)
            return None
