"""Base class every agency service derives from."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from spycats.core import errors as api_errors
from spycats.repositories.base import Pagination
from spycats.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleError,
    CacheBackendUnavailable,
    CacheError,
    CachePersistError,
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
    ServiceError,
    SigningError,
)
from spycats.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


@dataclass(slots=True)
class ServiceContext:
    """
    Who is calling, for services that log or audit on the caller's behalf.

    :param actor_id: Authenticated user id.
    :param actor_role: Role value from the access token.
    :param request_id: Correlation id of the HTTP request.
    """

    actor_id: int | None = None
    actor_role: str | None = None
    request_id: str | None = None


#: Service error -> API error, first match wins (subclasses before bases).
_TRANSLATIONS: tuple[tuple[type[ServiceError] | tuple[type[ServiceError], ...], Callable], ...] = (
    (NotFoundError, lambda e: api_errors.NotFound(str(e), code=e.code)),
    (ConflictError, lambda e: api_errors.Conflict(e.detail, code=e.code)),
    (PreconditionFailedError, lambda e: api_errors.PreconditionFailed(str(e))),
    (AuthenticationError, lambda e: api_errors.Unauthorized(str(e), code=e.code)),
    (AuthorizationError, lambda e: api_errors.Forbidden(str(e) or None, code=e.code)),
    (BusinessRuleError, lambda e: api_errors.APIError(str(e), code=e.code)),
    # signing internals stay server-side
    (SigningError, lambda e: api_errors.APIError("Failed to generate token", 500, e.code)),
    (
        (CacheBackendUnavailable, CachePersistError),
        lambda e: api_errors.ServiceUnavailable(
            "Session store temporarily unavailable", code="cache_unavailable"
        ),
    ),
    (CacheError, lambda e: api_errors.APIError("Session store error", 500, "cache_error")),
    (ServiceError, lambda e: api_errors.APIError(str(e), 400, "bad_request")),
)


class BaseService:
    """
    Shared plumbing for application services.

    Services open a unit of work per use case (:meth:`rw_uow` for changes,
    :meth:`ro_uow` for queries) and raise :mod:`spycats.services._shared.errors`
    exceptions. They never touch ``db.session`` directly.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- Units of work -------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Read-write scope that commits when the ``with`` block succeeds."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Read-only scope; flushes and DML inside it raise ``RuntimeError``."""
        return SQLAlchemyReadOnlyUnitOfWork()

    # --------------------------- Input checks -------------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """Clamp ``page`` and ``limit`` to at least 1."""
        return Pagination(page=max(1, int(page)), limit=max(1, int(limit)), sort=list(sort or []))

    def ensure_if_match(self, provided_etag: str | None, current_etag: str | None) -> None:
        """
        Optimistic concurrency check.

        ``None`` (no header, or ``*``) always passes; otherwise the value,
        with surrounding quotes removed, must equal ``current_etag``.

        :raises PreconditionFailedError: On a stale ETag.
        """
        if provided_etag is not None and provided_etag.strip().strip('"') != current_etag:
            raise PreconditionFailedError()

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """
        Map a service error onto its :class:`~spycats.core.errors.APIError`.

        Anything that is not a :class:`ServiceError` is returned unchanged and
        ends up in the generic 500 handler.
        """
        for types, build in _TRANSLATIONS:
            if isinstance(exc, types):
                return build(exc)
        return exc
