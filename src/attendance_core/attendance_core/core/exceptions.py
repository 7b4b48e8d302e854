class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigError(DomainError):
    """Raised when a required secret or credential is missing."""

    status_code = 500


class AuthenticationError(DomainError):
    """Raised when no valid session (or login proof) is present."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a session's role is not in the allowed set."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Raised on a duplicate key (e.g. renaming onto an existing id)."""

    status_code = 409


class RateLimitedError(DomainError):
    """Raised on a resend cooldown or an attempt lockout."""

    status_code = 429


class ExternalServiceError(DomainError):
    """Ledger, document store or mail failure.

    The message is safe to show to callers; backend details stay in the logs.
    """

    status_code = 502
