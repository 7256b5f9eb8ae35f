from .auth import RefreshRequest, TokenPair
from .errors import BaseUrlMissingError, RefreshTokenMissingError, TokenRefreshError
from .exceptions import EnrichedException

__all__ = [
    "BaseUrlMissingError",
    "EnrichedException",
    "RefreshRequest",
    "RefreshTokenMissingError",
    "TokenPair",
    "TokenRefreshError",
]
