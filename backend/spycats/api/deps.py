"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from marshmallow import Schema

from spycats.core.errors import Forbidden, Unauthorized
from spycats.core.extensions import get_cache
from spycats.schemas.common import MetaSchema, PaginationQuerySchema
from spycats.services._shared.base import BaseService
from spycats.services._shared.dto import PageMeta, PaginationIn
from spycats.services._shared.errors import ServiceError
from spycats.services._shared.policies.roles import Role, has_role
from spycats.services._shared.ports.breeds import BreedValidator, StaticBreedValidator
from spycats.services.auth.service import AuthService
from spycats.services.tokens.dto import TokenClaims
from spycats.services.tokens.service import TokenService

F = TypeVar("F", bound=Callable[..., Any])

_translator = BaseService()


# --------------------------------------------------------------------------- #
# Request parsing
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class Pagination:
    """Container holding pagination arguments parsed from the request."""

    page: int
    limit: int
    sort: list[str]

    def to_dto(self) -> PaginationIn:
        return PaginationIn(page=self.page, limit=self.limit, sort=self.sort)


def parse_pagination(
    schema: PaginationQuerySchema | None = None,
) -> tuple[Pagination, dict[str, Any]]:
    """
    Parse pagination and filter arguments from ``request.args``.

    Returns the pagination block and the remaining non-null filter values.
    """
    schema = schema or PaginationQuerySchema()
    data = schema.load(request.args)
    pagination = Pagination(page=data.pop("page"), limit=data.pop("limit"), sort=data.pop("sort"))
    filters = {key: value for key, value in data.items() if value is not None}
    return pagination, filters


def load_json(schema: Schema) -> dict[str, Any]:
    """Validate the JSON body; marshmallow errors surface as 422 problems."""
    return cast(dict[str, Any], schema.load(request.get_json(silent=True) or {}))


# --------------------------------------------------------------------------- #
# Responses
# --------------------------------------------------------------------------- #


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def envelope(data: Any, *, meta: PageMeta | Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Wrap a payload in the ``{"data": ..., "meta": ...}`` envelope."""
    body: dict[str, Any] = {"data": data}
    if meta is not None:
        body["meta"] = MetaSchema().dump(meta)
    return body


# --------------------------------------------------------------------------- #
# Service providers
# --------------------------------------------------------------------------- #


def token_service() -> TokenService:
    """Return the app-wide :class:`TokenService`, built on first use."""
    service = current_app.extensions.get("token_service")
    if service is None:
        service = TokenService.from_config(get_cache(), current_app.config)
        current_app.extensions["token_service"] = service
    return cast(TokenService, service)


def breed_validator() -> BreedValidator:
    """Return the app-wide breed catalog, built on first use."""
    validator = current_app.extensions.get("breed_validator")
    if validator is None:
        config = current_app.config
        if config.get("BREED_VALIDATION_ENABLED", True):
            from spycats.infra.breeds.catapi_breed_validator import CatApiBreedValidator

            validator = CatApiBreedValidator(
                config["BREED_API_URL"],
                ttl=float(config.get("BREED_CACHE_TTL", 600.0)),
                timeout=float(config.get("BREED_API_TIMEOUT", 5.0)),
            )
        else:
            validator = StaticBreedValidator()
        current_app.extensions["breed_validator"] = validator
    return cast(BreedValidator, validator)


def auth_service() -> AuthService:
    return AuthService(tokens=token_service())


# --------------------------------------------------------------------------- #
# Decorators
# --------------------------------------------------------------------------- #


def translate_service_errors(func: F) -> F:
    """Re-raise service-layer exceptions as their HTTP ``APIError`` counterparts."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise _translator.translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Missing or malformed Authorization header", code="missing_token")
    return token.strip()


def require_auth(func: F) -> F:
    """
    Ensure the request carries a valid, non-revoked access token.

    On success the verified claims are stored on ``g.claims`` and the raw
    token on ``g.access_token``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = _bearer_token()
        try:
            claims = auth_service().authenticate_request(token)
        except ServiceError as exc:
            raise _translator.translate_exceptions(exc) from exc
        g.claims = claims
        g.access_token = token
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_role(*roles: Role) -> Callable[[F], F]:
    """Authenticate the request and ensure the caller holds one of ``roles``."""

    allowed = frozenset(roles)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            claims: TokenClaims = g.claims
            if not has_role(claims.role, allowed):
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return require_auth(wrapper)  # type: ignore[return-value]

    return decorator


def current_claims() -> TokenClaims:
    return cast(TokenClaims, g.claims)


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
