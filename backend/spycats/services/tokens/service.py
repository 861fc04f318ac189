"""
TokenService
============

Issues, validates, rotates and revokes HMAC-signed JWTs.

Session state lives in a :class:`~spycats.services._shared.ports.cache.CacheStore`:

- ``refresh_token:<user_id>`` holds the one refresh token currently valid for
  the user (the revocation record).
- ``blacklist:<token>`` marks an access token invalidated before expiry.

The service keeps no other state and is safe to share across threads.
"""

from __future__ import annotations

import hmac
import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from spycats.services._shared.errors import (
    CacheError,
    CacheKeyNotFound,
    CachePersistError,
    InvalidTokenError,
    RefreshMismatchError,
    RefreshNotFoundError,
    SigningError,
)
from spycats.services._shared.policies.roles import Role
from spycats.services._shared.ports.cache import CacheStore
from spycats.services.tokens.dto import TokenClaims, TokenConfig, TokenPair, TokenType

log = logging.getLogger(__name__)

REFRESH_KEY_PREFIX = "refresh_token:"
BLACKLIST_KEY_PREFIX = "blacklist:"

REQUIRED_CLAIMS = ("exp", "iat", "nbf", "iss", "sub", "user_id", "username", "role", "type", "jti")


def refresh_key(user_id: int) -> str:
    """Cache key of the revocation record for ``user_id``."""
    return f"{REFRESH_KEY_PREFIX}{user_id}"


def blacklist_key(token: str) -> str:
    """Cache key marking ``token`` as blacklisted."""
    return f"{BLACKLIST_KEY_PREFIX}{token}"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    JWT issuance and session-state management.

    :param cache: Backing store for revocation and blacklist records.
    :type cache: CacheStore
    :param config: Signing key, algorithm, TTLs and issuer.
    :type config: TokenConfig
    :param clock: Returns the current aware UTC datetime (injectable for tests).
    :type clock: Callable[[], datetime] | None
    """

    def __init__(
        self,
        cache: CacheStore,
        config: TokenConfig,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.cache = cache
        self.config = config
        self._clock = clock or _utcnow

    @classmethod
    def from_config(cls, cache: CacheStore, config: Mapping[str, Any]) -> TokenService:
        return cls(cache, TokenConfig.from_mapping(config))

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def _claims(
        self, *, user_id: int, username: str, role: Role, token_type: TokenType, now: datetime
    ) -> dict[str, Any]:
        ttl = self.config.access_ttl if token_type is TokenType.ACCESS else self.config.refresh_ttl
        issued = int(now.timestamp())
        return {
            "sub": str(user_id),
            "user_id": user_id,
            "username": username,
            "role": role.value,
            "type": token_type.value,
            "jti": uuid.uuid4().hex,
            "iat": issued,
            "nbf": issued,
            "exp": issued + ttl,
            "iss": self.config.issuer,
        }

    def _sign(self, claims: dict[str, Any]) -> str:
        try:
            return jwt.encode(claims, self.config.secret, algorithm=self.config.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
            raise SigningError("Failed to sign token") from exc

    def generate_token_pair(self, user_id: int, username: str, role: Role | str) -> TokenPair:
        """
        Issue an access/refresh pair and record the refresh token.

        Both tokens are signed before the cache is touched, so a signing
        failure leaves any previous session intact.

        :param user_id: Subject identifier.
        :param username: Login handle embedded in the claims.
        :param role: Role embedded in the claims.
        :returns: The signed pair.
        :rtype: TokenPair
        :raises SigningError: If ``role`` is unknown or either token cannot be signed.
        :raises CachePersistError: If the revocation record cannot be written.
        """
        try:
            role = Role(role)
        except ValueError as exc:
            raise SigningError(f"Unknown role {role!r}") from exc
        now = self._clock()
        access = self._sign(
            self._claims(
                user_id=user_id, username=username, role=role, token_type=TokenType.ACCESS, now=now
            )
        )
        refresh = self._sign(
            self._claims(
                user_id=user_id, username=username, role=role, token_type=TokenType.REFRESH, now=now
            )
        )

        try:
            self.cache.set(refresh_key(user_id), refresh, self.config.refresh_ttl)
        except CacheError as exc:
            raise CachePersistError("Failed to store refresh token") from exc

        log.info("token pair issued", extra={"user_id": user_id})
        return TokenPair(
            access_token=access,
            refresh_token=refresh,
            expires_in=self.config.access_ttl,
        )

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def validate_token(self, token: str, *, expected_type: TokenType | None = None) -> TokenClaims:
        """
        Verify signature, algorithm, issuer, timing and claim shapes.

        The cache is never consulted here.

        :param token: Encoded JWT.
        :param expected_type: Require this ``type`` claim when given.
        :returns: Parsed claims.
        :rtype: TokenClaims
        :raises InvalidTokenError: On any verification failure.
        """
        try:
            return self._decode(token, expected_type)
        except InvalidTokenError as exc:
            log.debug("token rejected: %s", exc)
            raise
        except jwt.PyJWTError as exc:
            log.debug("token rejected: %s", exc)
            raise InvalidTokenError() from exc

    def _decode(self, token: str, expected_type: TokenType | None) -> TokenClaims:
        if not isinstance(token, str) or not token:
            raise InvalidTokenError("Token must be a non-empty string")

        header = jwt.get_unverified_header(token)
        alg = header.get("alg")
        if not isinstance(alg, str) or not alg.startswith("HS") or alg != self.config.algorithm:
            raise InvalidTokenError("Unexpected signing method")

        payload = jwt.decode(
            token,
            self.config.secret,
            algorithms=[self.config.algorithm],
            issuer=self.config.issuer,
            options={"require": list(REQUIRED_CLAIMS)},
        )

        user_id = payload["user_id"]
        username = payload["username"]
        jti = payload["jti"]
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidTokenError("Malformed user_id claim")
        if not isinstance(username, str) or not isinstance(jti, str):
            raise InvalidTokenError("Malformed claims")
        try:
            role = Role(payload["role"])
            token_type = TokenType(payload["type"])
        except ValueError as exc:
            raise InvalidTokenError("Unknown role or token type") from exc
        if expected_type is not None and token_type is not expected_type:
            raise InvalidTokenError(f"Expected a {expected_type.value} token")

        return TokenClaims(
            user_id=user_id,
            username=username,
            role=role,
            token_type=token_type,
            jti=jti,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
            not_before=datetime.fromtimestamp(payload["nbf"], tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
            issuer=payload["iss"],
        )

    # ------------------------------------------------------------------ #
    # Refresh / revocation
    # ------------------------------------------------------------------ #

    def refresh_token(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair (rotation).

        :param refresh_token: Encoded refresh JWT.
        :returns: A freshly issued pair.
        :rtype: TokenPair
        :raises InvalidTokenError: If the token fails validation.
        :raises RefreshNotFoundError: If no session is recorded for the user.
        :raises RefreshMismatchError: If the token is not the recorded one.
        :raises CacheBackendUnavailable: If the store cannot be read.
        """
        claims = self.validate_token(refresh_token, expected_type=TokenType.REFRESH)
        try:
            stored = self.cache.get(refresh_key(claims.user_id))
        except CacheKeyNotFound as exc:
            raise RefreshNotFoundError() from exc

        if not hmac.compare_digest(stored.encode(), refresh_token.encode()):
            log.info("superseded refresh token presented", extra={"user_id": claims.user_id})
            raise RefreshMismatchError()

        log.info("refresh token rotated", extra={"user_id": claims.user_id})
        return self.generate_token_pair(claims.user_id, claims.username, claims.role)

    def revoke_token(self, user_id: int) -> None:
        """Delete the revocation record; idempotent."""
        self.cache.delete(refresh_key(user_id))
        log.info("refresh token revoked", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Blacklist
    # ------------------------------------------------------------------ #

    def blacklist_token(self, token: str) -> None:
        """
        Mark ``token`` invalid for the rest of its natural lifetime.

        :raises InvalidTokenError: If the token fails validation.
        :raises CachePersistError: If the marker cannot be written.
        """
        claims = self.validate_token(token)
        remaining = (claims.expires_at - self._clock()) / timedelta(seconds=1)
        if remaining <= 0:
            return
        try:
            self.cache.set(blacklist_key(token), "1", remaining)
        except CacheError as exc:
            raise CachePersistError("Failed to blacklist token") from exc
        log.info("token blacklisted", extra={"user_id": claims.user_id})

    def is_token_blacklisted(self, token: str) -> bool:
        """
        Return ``True`` if ``token`` carries a blacklist marker.

        Fails open: a store error is logged and reported as not blacklisted.
        """
        try:
            return self.cache.exists(blacklist_key(token))
        except CacheError as exc:
            log.warning("blacklist check failed, allowing token: %s", exc)
            return False
