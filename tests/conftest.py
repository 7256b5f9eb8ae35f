import asyncio
from typing import Callable
from unittest.mock import Mock

import pytest

from storedesk import (
    ApiClient,
    ClientLocation,
    Config,
    EventBus,
    InMemoryTokenStore,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "STOREDESK_API_URL",
        "STOREDESK_TIMEOUT",
        "STOREDESK_DEV_MODE",
        "STOREDESK_DEV_ACCESS_TOKEN",
        "STOREDESK_HOSTNAME",
        "STOREDESK_LOGIN_PATH",
        "STOREDESK_SESSION_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.storedesk.test/v1"


@pytest.fixture
def hostname() -> str:
    return "acme.storedesk.test"


@pytest.fixture
def access_token() -> str:
    return "access-token"


@pytest.fixture
def refresh_token() -> str:
    return "refresh-token"


@pytest.fixture
def config(base_url: str, hostname: str) -> Config:
    return Config(base_url=base_url, hostname=hostname)


@pytest.fixture
def token_store(access_token: str, refresh_token: str) -> InMemoryTokenStore:
    return InMemoryTokenStore(
        access_token=access_token,
        refresh_token=refresh_token,
        user={"id": "user-1", "role": "COMPANY_ADMIN"},
    )


@pytest.fixture
def notifier() -> Mock:
    return Mock(spec=["error"])


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def unauthorized_handler(event_bus: EventBus) -> Mock:
    handler = Mock()
    event_bus.subscribe("auth:unauthorized", handler)
    return handler


@pytest.fixture
def location(hostname: str) -> ClientLocation:
    return ClientLocation(hostname=hostname, pathname="/dashboard")


@pytest.fixture
def service(
    config: Config,
    token_store: InMemoryTokenStore,
    notifier: Mock,
    event_bus: EventBus,
    location: ClientLocation,
) -> ApiClient:
    return ApiClient(
        config,
        token_store,
        notifier=notifier,
        event_bus=event_bus,
        location=location,
    )


async def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Yield to the event loop until ``predicate`` holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("Condition not met before timeout")
        await asyncio.sleep(0.001)


@pytest.fixture
def wait_until() -> Callable:
    return _wait_until
