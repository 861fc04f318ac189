"""Mapping of service-layer exceptions to HTTP problems."""

from __future__ import annotations

import pytest
from spycats.core import errors as api_errors
from spycats.services._shared.base import BaseService
from spycats.services._shared.errors import (
    BusinessRuleError,
    CacheBackendUnavailable,
    CacheKeyNotFound,
    CachePersistError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    PreconditionFailedError,
    RefreshMismatchError,
    RevokedTokenError,
    SigningError,
)


@pytest.mark.parametrize(
    ("exc", "status", "code"),
    [
        (NotFoundError("Cat", 1), 404, "cat_not_found"),
        (ConflictError("Cat", "busy", code="cat_busy"), 409, "cat_busy"),
        (PreconditionFailedError(), 412, "precondition_failed"),
        (InvalidCredentialsError(), 401, "invalid_credentials"),
        (InvalidTokenError(), 401, "invalid_token"),
        (RevokedTokenError(), 401, "revoked_token"),
        (RefreshMismatchError(), 401, "failed_refresh"),
        (BusinessRuleError("nope", code="invalid_breed"), 400, "invalid_breed"),
        (SigningError("hsm"), 500, "failed_generate_token"),
        (CachePersistError("down"), 503, "cache_unavailable"),
        (CacheBackendUnavailable("down"), 503, "cache_unavailable"),
        (CacheKeyNotFound("k"), 500, "cache_error"),
    ],
)
def test_translation(exc, status, code):
    translated = BaseService().translate_exceptions(exc)

    assert isinstance(translated, api_errors.APIError)
    assert (translated.status_code, translated.code) == (status, code)


def test_signing_details_are_not_exposed():
    translated = BaseService().translate_exceptions(SigningError("key material leaked"))
    assert "key material" not in translated.message


def test_foreign_exceptions_pass_through():
    exc = KeyError("x")
    assert BaseService().translate_exceptions(exc) is exc


def test_if_match_accepts_quoted_and_missing_values():
    service = BaseService()
    service.ensure_if_match(None, "abc")
    service.ensure_if_match('"abc"', "abc")
    with pytest.raises(PreconditionFailedError):
        service.ensure_if_match("abd", "abc")
