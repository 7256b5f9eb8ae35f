from typing import Optional

from ._config import Config
from ._events import EventBus, get_event_bus
from ._notifications import ConsoleNotifier, Notifier
from ._services import ApiClient
from ._session import ClientLocation, FileTokenStore, RoutePredicate, TokenStore
from ._utils import setup_logging


class StoreDesk:
    """Entry point wiring the admin API client to its collaborators.

    Settings not passed explicitly are read from ``STOREDESK_*`` environment
    variables (and ``.env``).
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        hostname: Optional[str] = None,
        token_store: Optional[TokenStore] = None,
        notifier: Optional[Notifier] = None,
        event_bus: Optional[EventBus] = None,
        location: Optional[ClientLocation] = None,
        is_public_route: Optional[RoutePredicate] = None,
        debug: bool = False,
    ) -> None:
        """
        Initialize the SDK.

        Args:
            base_url (Optional[str]): The API root, including the version
                segment. Defaults to ``STOREDESK_API_URL``.
            hostname (Optional[str]): Host name used to detect the tenant.
                Defaults to ``STOREDESK_HOSTNAME``.
            token_store (Optional[TokenStore]): Where the session is kept.
                Defaults to a :class:`FileTokenStore`.
            notifier (Optional[Notifier]): Receives user-facing error messages.
            event_bus (Optional[EventBus]): Receives ``auth:unauthorized``.
                Defaults to the process-wide bus.
            location (Optional[ClientLocation]): Current page, used for
                tenant detection and the login redirect.
            is_public_route (Optional[RoutePredicate]): Decides which pages
                tolerate a lost session. Defaults to the configured prefixes.
            debug (bool): Enable debug logging.
        """
        self._config = Config.from_env(base_url=base_url, hostname=hostname)

        setup_logging(debug)

        self._token_store = token_store or FileTokenStore()
        self._notifier = notifier or ConsoleNotifier()
        self._event_bus = event_bus or get_event_bus()
        self._location = location or ClientLocation(hostname=self._config.hostname)
        self._is_public_route = is_public_route
        self._api_client: Optional[ApiClient] = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def location(self) -> ClientLocation:
        return self._location

    @property
    def api_client(self) -> ApiClient:
        """
        Client for the admin API. A single instance is shared so that all
        calls take part in the same session refresh.
        """
        if self._api_client is None:
            self._api_client = ApiClient(
                self._config,
                self._token_store,
                notifier=self._notifier,
                event_bus=self._event_bus,
                location=self._location,
                is_public_route=self._is_public_route,
            )
        return self._api_client
