# spycats/services/tokens/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from spycats.services._shared.policies.roles import Role

#: HMAC algorithms accepted for signing and verification.
SUPPORTED_ALGORITHMS: frozenset[str] = frozenset({"HS256", "HS384", "HS512"})


class TokenType(str, Enum):
    """Kind of token carried in the ``type`` claim."""

    ACCESS = "access"
    REFRESH = "refresh"


# ------------------------ Config DTO --------------------------- #


@dataclass(frozen=True, slots=True)
class TokenConfig:
    """
    Token emission configuration.

    :param secret: Symmetric HMAC key.
    :type secret: str
    :param algorithm: One of ``HS256``, ``HS384``, ``HS512``.
    :type algorithm: str
    :param access_ttl: Access token lifetime in seconds.
    :type access_ttl: int
    :param refresh_ttl: Refresh token lifetime in seconds.
    :type refresh_ttl: int
    :param issuer: Value of the ``iss`` claim.
    :type issuer: str
    :raises ValueError: On an empty secret, non-HMAC algorithm or non-positive TTL.
    """

    secret: str
    algorithm: str = "HS256"
    access_ttl: int = 900
    refresh_ttl: int = 604800
    issuer: str = "spy-cats-api"

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("Token secret must not be empty.")
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {self.algorithm!r}")
        if self.access_ttl <= 0 or self.refresh_ttl <= 0:
            raise ValueError("Token TTLs must be positive.")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenConfig:
        """
        Build from a Flask-style config mapping.

        :param config: Usually ``app.config``.
        :returns: Immutable token configuration.
        :rtype: TokenConfig
        """
        return cls(
            secret=str(config.get("JWT_SECRET") or ""),
            algorithm=str(config.get("JWT_SIGNING_ALGORITHM") or "HS256"),
            access_ttl=int(config.get("JWT_ACCESS_TOKEN_TTL") or 900),
            refresh_ttl=int(config.get("JWT_REFRESH_TOKEN_TTL") or 604800),
            issuer=str(config.get("APP_NAME") or "spy-cats-api"),
        )


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access and refresh tokens issued together.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param expires_in: Access token lifetime in seconds.
    :type expires_in: int
    """

    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified token payload.

    :param user_id: Subject identifier.
    :param username: Login handle at issuance time.
    :param role: Role at issuance time.
    :param token_type: ``access`` or ``refresh``.
    :param jti: Unique token id.
    :param issued_at: ``iat`` (also the ``nbf`` value).
    :param expires_at: ``exp``.
    :param issuer: ``iss``.
    """

    user_id: int
    username: str
    role: Role
    token_type: TokenType
    jti: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime
    issuer: str
