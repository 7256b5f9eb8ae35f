from ._auth_failure import AuthFailureHandler
from ._location import ClientLocation, RoutePredicate, prefix_route_matcher
from ._refresh import SessionRefresher
from ._token_store import (
    FileTokenStore,
    InMemoryTokenStore,
    TokenStore,
    default_session_file,
)

__all__ = [
    "AuthFailureHandler",
    "ClientLocation",
    "FileTokenStore",
    "InMemoryTokenStore",
    "RoutePredicate",
    "SessionRefresher",
    "TokenStore",
    "default_session_file",
    "prefix_route_matcher",
]
