# spycats/services/auth/service.py
from __future__ import annotations

import logging

from spycats.services._shared.base import BaseService
from spycats.services._shared.errors import RevokedTokenError
from spycats.services.auth.dto import AuthSessionOut
from spycats.services.identity.dto import UserAuthIn, UserPublicOut, UserRegisterIn
from spycats.services.identity.service import IdentityService
from spycats.services.tokens.dto import TokenClaims, TokenPair, TokenType
from spycats.services.tokens.service import TokenService

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / refresh / logout).

    Credentials are checked by :class:`IdentityService`; tokens and their
    session state belong to :class:`TokenService`.
    """

    def __init__(self, *, tokens: TokenService, identity: IdentityService | None = None) -> None:
        """
        Initialize the service with its dependencies.

        :param tokens: Token issuance/validation service.
        :param identity: User aggregate service.
        """
        super().__init__()
        self.tokens = tokens
        self.identity = identity or IdentityService()

    # ------------------------------------------------------------------ #
    # Sign-up / sign-in
    # ------------------------------------------------------------------ #

    def register(self, dto: UserRegisterIn) -> AuthSessionOut:
        """
        Create a user and sign them in.

        :raises ConflictError: When the username or email is taken.
        """
        user = self.identity.register_user(dto)
        pair = self.tokens.generate_token_pair(user.id, user.username, user.role)
        return AuthSessionOut(user=user, tokens=pair)

    def login(self, dto: UserAuthIn) -> AuthSessionOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises InvalidCredentialsError: If credentials are invalid.
        """
        user = self.identity.authenticate(dto)
        pair = self.tokens.generate_token_pair(user.id, user.username, user.role)
        log.info("user logged in", extra={"user_id": user.id})
        return AuthSessionOut(user=user, tokens=pair)

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> TokenPair:
        """Rotate a refresh token (see :meth:`TokenService.refresh_token`)."""
        return self.tokens.refresh_token(refresh_token)

    def logout(self, user_id: int, access_token: str) -> None:
        """
        End the user's session.

        The refresh record is removed first, then the presented access token
        is blacklisted for the rest of its lifetime.
        """
        self.tokens.revoke_token(user_id)
        self.tokens.blacklist_token(access_token)
        log.info("user logged out", extra={"user_id": user_id})

    def me(self, user_id: int) -> UserPublicOut:
        return self.identity.get_user(user_id)

    # ------------------------------------------------------------------ #
    # Request guard
    # ------------------------------------------------------------------ #

    def authenticate_request(self, token: str) -> TokenClaims:
        """
        Validate the bearer token of an incoming request.

        :param token: Encoded access JWT.
        :returns: Verified claims.
        :rtype: TokenClaims
        :raises RevokedTokenError: If the token was blacklisted.
        :raises InvalidTokenError: If the token fails validation or is not an access token.
        """
        if self.tokens.is_token_blacklisted(token):
            raise RevokedTokenError()
        return self.tokens.validate_token(token, expected_type=TokenType.ACCESS)
