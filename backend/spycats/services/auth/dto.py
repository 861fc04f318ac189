# spycats/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from spycats.services.identity.dto import UserPublicOut
from spycats.services.tokens.dto import TokenPair

# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthSessionOut:
    """
    Result of a successful register/login: the user and their tokens.

    :param user: Public user payload.
    :type user: UserPublicOut
    :param tokens: Issued access/refresh pair.
    :type tokens: TokenPair
    """

    user: UserPublicOut
    tokens: TokenPair
