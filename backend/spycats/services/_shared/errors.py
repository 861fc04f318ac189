"""
Exceptions raised by services, repositories and caches.

Nothing here knows about HTTP. Each class carries a stable ``code`` that
callers and the API layer branch on; messages are for humans only.
``BaseService.translate_exceptions`` maps them onto ``spycats.core.errors``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint: str) -> bool:
    """
    ``True`` when the driver message of ``exc`` names ``constraint``.

    PostgreSQL reports the constraint name (``uq_users_email``), SQLite the
    ``table.column`` pair (``users.email``); pass whichever the backend uses.
    """
    return constraint.lower() in str(exc.orig or "").lower()


class ServiceError(Exception):
    """Root of every service-layer failure."""


# --------------------------------------------------------------------------- #
# Lookups and business rules
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    No row for ``key``; the code is derived from the entity (``cat_not_found``).

    :param entity: Entity name, e.g. ``"Cat"``.
    :param key: Identifier that was looked up.
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"

    @property
    def code(self) -> str:
        return f"{self.entity.lower()}_not_found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    The request clashes with current state: a taken username, a busy cat,
    a completed mission.

    :param code: e.g. ``"cat_busy"`` or ``"mission_complete"``.
    """

    entity: str
    detail: str
    code: str = "conflict"

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class BusinessRuleError(ServiceError):
    """
    Raised when input is well-formed but violates a domain rule
    (unknown breed, wrong number of targets, oversized bulk request).
    """

    def __init__(self, message: str, *, code: str = "bad_request") -> None:
        super().__init__(message)
        self.code = code


class PreconditionFailedError(ServiceError):
    """
    Raised when preconditions such as ETag ``If-Match`` validation fail.
    """

    def __init__(self, message: str = "Precondition failed (ETag mismatch)") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Authentication / authorization
# --------------------------------------------------------------------------- #


class AuthenticationError(ServiceError):
    """Base for failures that require the caller to (re-)authenticate."""

    code = "unauthorized"


class InvalidCredentialsError(AuthenticationError):
    """Username/password pair did not match a user."""

    code = "invalid_credentials"

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Bad signature, malformed input, wrong algorithm, wrong type or expired token."""

    code = "invalid_token"

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class RevokedTokenError(AuthenticationError):
    """The presented access token has been blacklisted."""

    code = "revoked_token"

    def __init__(self, message: str = "Token has been revoked") -> None:
        super().__init__(message)


class RefreshNotFoundError(AuthenticationError):
    """No live refresh token is recorded for the user (revoked or expired)."""

    code = "failed_refresh"

    def __init__(self, message: str = "No active session for this refresh token") -> None:
        super().__init__(message)


class RefreshMismatchError(AuthenticationError):
    """The refresh token is valid but has been superseded by a newer one."""

    code = "failed_refresh"

    def __init__(self, message: str = "Refresh token has been superseded") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """The authenticated actor is not allowed to perform the operation."""

    code = "forbidden"


class SigningError(ServiceError):
    """Internal fault while signing a token; not retried."""

    code = "failed_generate_token"


# --------------------------------------------------------------------------- #
# Cache
# --------------------------------------------------------------------------- #


class CacheError(ServiceError):
    """Base for key-value cache failures."""

    code = "cache_error"


class CacheKeyNotFound(CacheError):
    """Key is absent or its TTL has elapsed. An expected outcome, not a fault."""

    code = "cache_key_not_found"

    def __init__(self, key: str) -> None:
        super().__init__(f"Cache key not found: {key}")
        self.key = key


class CacheBackendUnavailable(CacheError):
    """Backing store could not be reached, timed out, or has been closed."""

    code = "cache_unavailable"


class CacheSerializationError(CacheError):
    """Value could not be encoded to, or decoded from, its stored text form."""

    code = "cache_serialization_error"


class CachePersistError(CacheError):
    """A write the caller depends on (session record, blacklist entry) failed."""

    code = "cache_unavailable"
