from .dto import SUPPORTED_ALGORITHMS, TokenClaims, TokenConfig, TokenPair, TokenType
from .service import TokenService, blacklist_key, refresh_key

__all__ = [
    "SUPPORTED_ALGORITHMS",
    "TokenClaims",
    "TokenConfig",
    "TokenPair",
    "TokenService",
    "TokenType",
    "blacklist_key",
    "refresh_key",
]
