from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Response, g, request
from flask_jwt_extended import set_access_cookies, unset_jwt_cookies

from ..core.constants import LEGACY_COOKIE_NAMES, SESSION_COOKIE_NAME
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from .codec import TokenCodec
from .model import SessionClaims

_CACHE_KEY = "_session_claims"


class SessionGate:
    """Request-scoped authorization guards over the session cookie.

    Roles are never ranked: every check lists the roles it accepts, so an
    admin only passes a moderator check when ADMIN is listed too.
    """

    def __init__(self, codec: TokenCodec):
        self._codec = codec

    def _read_token(self) -> Optional[str]:
        token = request.cookies.get(SESSION_COOKIE_NAME)
        if token:
            return token
        auth = request.headers.get("Authorization", "")
        if auth.startswith("Bearer "):
            return auth[len("Bearer "):].strip() or None
        return None

    def current_session(self) -> Optional[SessionClaims]:
        if _CACHE_KEY not in g:
            setattr(g, _CACHE_KEY, self._codec.verify(self._read_token()))
        return getattr(g, _CACHE_KEY)

    def require_auth(self) -> SessionClaims:
        claims = self.current_session()
        if claims is None:
            raise AuthenticationError("Unauthorized")
        return claims

    def require_role(self, *roles: Role) -> SessionClaims:
        claims = self.require_auth()
        check_role(claims, roles)
        return claims

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            self.require_auth()
            return view(*args, **kwargs)

        return wrapper

    def roles_required(self, *roles: Role):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                self.require_role(*roles)
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def start_session(self, response: Response, subject_id: str, role: Role | str) -> str:
        token = self._codec.issue(subject_id, role)
        set_access_cookies(response, token, max_age=int(self._codec.ttl.total_seconds()))
        return token

    def end_session(self, response: Response) -> None:
        # No server-side revocation: logout only drops the cookies.
        unset_jwt_cookies(response)
        for name in LEGACY_COOKIE_NAMES:
            response.delete_cookie(name, path="/")


def check_role(claims: Optional[SessionClaims], roles) -> SessionClaims:
    """Service-level role check for callers holding claims outside a request."""
    if claims is None:
        raise AuthenticationError("Unauthorized")
    if claims.role not in tuple(roles):
        allowed = ", ".join(r.value for r in roles)
        raise AuthorizationError(f"Forbidden: requires one of [{allowed}]")
    return claims
