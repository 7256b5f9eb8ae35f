import logging
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

RoutePredicate = Callable[[str], bool]


class ClientLocation:
    """The page the client is currently serving.

    Holds the host name used for tenant detection and the current path used
    to decide whether losing the session requires navigating to the login
    page. ``on_navigate`` is called with the target path on navigation.
    """

    def __init__(
        self,
        hostname: Optional[str] = None,
        pathname: str = "/",
        on_navigate: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.hostname = hostname
        self.pathname = pathname
        self.on_navigate = on_navigate

    def navigate(self, path: str) -> None:
        logger.debug(f"Navigating from {self.pathname} to {path}")
        self.pathname = path
        if self.on_navigate is not None:
            self.on_navigate(path)


def prefix_route_matcher(prefixes: Iterable[str]) -> RoutePredicate:
    """Build a predicate matching paths that start with any of ``prefixes``."""
    prefixes = tuple(prefixes)

    def is_public_route(path: str) -> bool:
        return path.startswith(prefixes)

    return is_public_route
