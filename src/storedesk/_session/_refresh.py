"""Single-flight refresh of an expired session."""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from httpx import AsyncClient, HTTPError, HTTPStatusError
from pydantic import ValidationError

from ..models.auth import RefreshRequest, TokenPair
from ..models.errors import RefreshTokenMissingError, TokenRefreshError
from ._token_store import TokenStore

logger = logging.getLogger(__name__)


class SessionRefresher:
    """Exchange the refresh token for a new token pair, once per expiry.

    ``is_refreshing`` gates the refresh: the first caller to see a 401 starts
    it, every caller arriving while it is in flight is queued and released,
    in arrival order, when it settles. The flag is set before the first
    suspension point so no second refresh can start in between.

    The refresh itself runs in its own task. Cancelling the caller that
    started it, or any queued caller, leaves the refresh and the other
    callers untouched.
    """

    def __init__(
        self,
        client: AsyncClient,
        refresh_url: str,
        token_store: TokenStore,
        on_failure: Callable[[], Awaitable[None]],
    ) -> None:
        self._client = client
        self._refresh_url = refresh_url
        self._token_store = token_store
        self._on_failure = on_failure
        self._is_refreshing = False
        self._failed_queue: List[asyncio.Future[str]] = []

    @property
    def is_refreshing(self) -> bool:
        return self._is_refreshing

    @property
    def pending_count(self) -> int:
        """Number of callers waiting on the refresh in flight."""
        return sum(1 for future in self._failed_queue if not future.done())

    async def wait_for_token(self) -> str:
        """Wait for the refresh in flight and return the new access token.

        Raises the refresh error when the refresh fails.
        """
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self._failed_queue.append(future)
        return await future

    async def refresh(self) -> str:
        """Start a refresh and return the new access token.

        Must only be called when no refresh is in flight.
        """
        if self._is_refreshing:
            raise RuntimeError("A session refresh is already in flight")

        self._is_refreshing = True
        task = asyncio.ensure_future(self._run())
        task.add_done_callback(_consume_result)
        return await asyncio.shield(task)

    async def _run(self) -> str:
        failure: Optional[TokenRefreshError] = None
        try:
            tokens = await self._request_tokens()
        except TokenRefreshError as e:
            failure = e
            logger.error(f"Session refresh failed: {e}")
            self._process_queue(e, None)
            try:
                await self._on_failure()
            except Exception as failure_error:
                logger.error(
                    f"Signing out after failed refresh raised: {failure_error}",
                    exc_info=True,
                )
            raise
        else:
            self._token_store.set_access_token(tokens.access_token)
            self._token_store.set_refresh_token(tokens.refresh_token)
            logger.debug("Session refreshed")
            self._process_queue(None, tokens.access_token)
            return tokens.access_token
        finally:
            self._is_refreshing = False
            if failure is not None:
                # callers that queued while signing out
                self._process_queue(failure, None)

    async def _request_tokens(self) -> TokenPair:
        refresh_token = self._token_store.get_refresh_token()
        if not refresh_token:
            raise TokenRefreshError("No refresh token") from RefreshTokenMissingError()

        body = RefreshRequest(refresh_token=refresh_token).model_dump(by_alias=True)
        try:
            response = await self._client.post(self._refresh_url, json=body)
            response.raise_for_status()
            return TokenPair.model_validate(response.json())
        except HTTPStatusError as e:
            raise TokenRefreshError(
                f"Refresh rejected with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except HTTPError as e:
            raise TokenRefreshError(f"Refresh request failed: {e}") from e
        except (ValidationError, ValueError) as e:
            raise TokenRefreshError("Malformed refresh response") from e

    def _process_queue(
        self, error: Optional[BaseException], token: Optional[str]
    ) -> None:
        queue, self._failed_queue = self._failed_queue, []
        for future in queue:
            # callers cancelled while waiting are skipped
            if future.done():
                continue
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(token)  # type: ignore[arg-type]


def _consume_result(task: "asyncio.Task[str]") -> None:
    # the starting caller may have been cancelled; keep the outcome retrieved
    if not task.cancelled():
        task.exception()
