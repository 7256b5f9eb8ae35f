import logging

from .._events import EventBus, SessionEvents
from ._location import ClientLocation, RoutePredicate
from ._token_store import TokenStore

logger = logging.getLogger(__name__)


class AuthFailureHandler:
    """Tear down the session after an unrecoverable authentication failure.

    Clears the stored credentials and user profile, publishes
    ``auth:unauthorized`` and navigates to the login page unless the
    current page is public.
    """

    def __init__(
        self,
        token_store: TokenStore,
        event_bus: EventBus,
        location: ClientLocation,
        is_public_route: RoutePredicate,
        login_path: str,
    ) -> None:
        self._token_store = token_store
        self._event_bus = event_bus
        self._location = location
        self._is_public_route = is_public_route
        self._login_path = login_path

    async def handle(self) -> None:
        logger.warning("Session could not be recovered, signing out")

        self._token_store.clear_tokens()
        self._token_store.clear_user()

        await self._event_bus.publish(SessionEvents.UNAUTHORIZED)

        current_path = self._location.pathname
        if self._is_public_route(current_path):
            logger.debug(f"Staying on public route {current_path}")
            return

        self._location.navigate(self._login_path)
