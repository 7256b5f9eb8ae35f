"""StoreDesk admin API client.

Resilient async client for the StoreDesk multi-tenant admin platform.
"""

from ._config import Config
from ._events import EventBus, SessionEvents, get_event_bus
from ._notifications import ConsoleNotifier, Notifier
from ._services import ApiClient
from ._session import ClientLocation, FileTokenStore, InMemoryTokenStore, TokenStore
from ._storedesk import StoreDesk
from .models import (
    BaseUrlMissingError,
    EnrichedException,
    RefreshTokenMissingError,
    TokenPair,
    TokenRefreshError,
)

__all__ = [
    "ApiClient",
    "BaseUrlMissingError",
    "ClientLocation",
    "Config",
    "ConsoleNotifier",
    "EnrichedException",
    "EventBus",
    "FileTokenStore",
    "InMemoryTokenStore",
    "Notifier",
    "RefreshTokenMissingError",
    "SessionEvents",
    "StoreDesk",
    "TokenPair",
    "TokenRefreshError",
    "TokenStore",
    "get_event_bus",
]
