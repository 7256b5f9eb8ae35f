import asyncio
from logging import getLogger
from typing import Any, Optional, Union

from httpx import (
    URL,
    AsyncClient,
    Headers,
    HTTPStatusError,
    RequestError,
    Response,
)
from opentelemetry import trace
from tenacity import AsyncRetrying, RetryCallState, retry_if_result

from .._config import Config
from .._events import EventBus, get_event_bus
from .._notifications import ConsoleNotifier, Notifier
from .._session import (
    AuthFailureHandler,
    ClientLocation,
    RoutePredicate,
    SessionRefresher,
    TokenStore,
    prefix_route_matcher,
)
from .._utils import (
    RequestContext,
    get_httpx_client_kwargs,
    header_request_id,
    header_tenant,
    normalize_path,
    response_body,
)
from .._utils.constants import (
    EXPECTED_NOT_FOUND_PATHS,
    HEADER_AUTHORIZATION,
    HEADER_REQUEST_ID,
)
from ..models.exceptions import EnrichedException
from ._error_reporter import ErrorReporter

_tracer = trace.get_tracer("storedesk")


def is_service_unavailable(response: Response) -> bool:
    return response.status_code == 503


async def _backoff_sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


class BaseService:
    """Request pipeline shared by every client of the admin API.

    Each call goes through path normalization and header injection, is
    retried on 503 with exponential backoff, recovers from an expired access
    token through a single shared refresh, and reports terminal failures to
    the user at most once. The awaited call always resolves to the final
    response or raises the terminal error.
    """

    MAX_RETRIES = 3
    BACKOFF_BASE = 1.0
    BACKOFF_MAX = 5.0

    def __init__(
        self,
        config: Config,
        token_store: TokenStore,
        *,
        notifier: Optional[Notifier] = None,
        event_bus: Optional[EventBus] = None,
        location: Optional[ClientLocation] = None,
        is_public_route: Optional[RoutePredicate] = None,
    ) -> None:
        self._logger = getLogger("storedesk")
        self._config = config
        self._token_store = token_store
        self._location = location or ClientLocation(hostname=config.hostname)
        self._event_bus = event_bus or get_event_bus()

        default_client_kwargs = get_httpx_client_kwargs(config.timeout)

        self._client_async = AsyncClient(
            **default_client_kwargs,
            base_url=config.base_url,
            headers=Headers(self.default_headers),
        )
        # refresh calls bypass the pipeline, including the 401 handling
        self._refresh_client = AsyncClient(**default_client_kwargs)

        self._auth_failure = AuthFailureHandler(
            token_store=token_store,
            event_bus=self._event_bus,
            location=self._location,
            is_public_route=is_public_route
            or prefix_route_matcher(config.public_route_prefixes),
            login_path=config.login_path,
        )
        self._refresher = SessionRefresher(
            client=self._refresh_client,
            refresh_url=config.refresh_url,
            token_store=token_store,
            on_failure=self._auth_failure.handle,
        )
        self._error_reporter = ErrorReporter(
            notifier=notifier or ConsoleNotifier(),
            best_effort_paths=config.best_effort_paths,
        )

        self._logger.debug(f"HEADERS: {self.default_headers}")

        super().__init__()

    @property
    def default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    @property
    def location(self) -> ClientLocation:
        return self._location

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    async def request_async(
        self,
        method: str,
        url: Union[URL, str],
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        content: Any = None,
        data: Any = None,
        files: Any = None,
        headers: Optional[dict[str, str]] = None,
        timeout: Union[int, float, None] = None,
        skip_error_toast: bool = False,
        stream: bool = False,
    ) -> Response:
        context = RequestContext(
            method=method.upper(),
            path=normalize_path(str(url)),
            params=dict(params or {}),
            headers=dict(headers or {}),
            content=content,
            json=json,
            data=data,
            files=files,
            timeout=timeout,
            skip_error_toast=skip_error_toast,
            stream=stream,
        )

        with _tracer.start_as_current_span("storedesk.request") as span:
            span.set_attribute("http.request.method", context.method)
            span.set_attribute("url.path", context.path)
            try:
                return await self._execute(context)
            finally:
                span.set_attribute("storedesk.retry_count", context.retry_count)
                span.set_attribute("storedesk.refreshed", context.is_refresh_retry)

    async def aclose(self) -> None:
        await self._client_async.aclose()
        await self._refresh_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _execute(self, context: RequestContext) -> Response:
        try:
            response = await self._send_with_retry(context)
        except RequestError as e:
            self._logger.error(f"{context.method} {context.path} failed: {e!r}")
            self._error_reporter.report(context, None, e)
            raise

        if not response.is_error:
            return response

        self._log_failure(context, response)

        if response.status_code == 401 and not context.is_refresh_retry:
            await response.aclose()
            return await self._recover_session(context)

        self._error_reporter.report(context, response)

        try:
            response.raise_for_status()
        except HTTPStatusError as e:
            await response.aclose()
            raise EnrichedException(e) from e
        return response

    async def _send_with_retry(self, context: RequestContext) -> Response:
        retrying = AsyncRetrying(
            retry=retry_if_result(
                lambda response: is_service_unavailable(response)
                and context.retry_count < self.MAX_RETRIES
            ),
            wait=lambda retry_state: self._backoff_delay(context.retry_count),
            before_sleep=lambda retry_state: self._before_retry(context, retry_state),
            sleep=_backoff_sleep,
            reraise=True,
        )
        return await retrying(self._dispatch, context)

    def _backoff_delay(self, retry_count: int) -> float:
        return min(self.BACKOFF_BASE * 2**retry_count, self.BACKOFF_MAX)

    def _before_retry(self, context: RequestContext, retry_state: RetryCallState) -> None:
        context.retry_count += 1
        delay = retry_state.next_action.sleep if retry_state.next_action else 0
        self._logger.warning(
            f"Service unavailable (503). Retrying {context.method} {context.path} "
            f"({context.retry_count}/{self.MAX_RETRIES}) after {delay * 1000:.0f}ms"
        )

    async def _dispatch(self, context: RequestContext) -> Response:
        headers = {**context.headers, **self._request_headers(context)}
        trace.get_current_span().set_attribute(
            "storedesk.request_id", headers.get(HEADER_REQUEST_ID, "")
        )
        self._logger.debug(f"Request: {context.method} {context.path}")
        request = self._client_async.build_request(
            context.method,
            context.path,
            headers=headers,
            **context.request_kwargs(),
        )
        response = await self._client_async.send(request, stream=context.stream)
        if context.stream and response.is_error:
            # error bodies are always read for reporting
            await response.aread()
        return response

    def _request_headers(self, context: RequestContext) -> dict[str, str]:
        headers: dict[str, str] = {}
        for step in (self._auth_header, self._tenant_header, self._request_id_header):
            try:
                headers.update(step(context))
            except Exception as e:
                self._logger.debug(f"Skipping {step.__name__}: {e!r}")
        return headers

    def _auth_header(self, context: RequestContext) -> dict[str, str]:
        token = self._token_store.get_access_token() or context.access_token
        if token:
            return {HEADER_AUTHORIZATION: f"Bearer {token}"}

        if self._config.development and self._config.dev_access_token:
            self._logger.debug("Using development access token")
            return {HEADER_AUTHORIZATION: f"Bearer {self._config.dev_access_token}"}

        return {}

    def _tenant_header(self, context: RequestContext) -> dict[str, str]:
        return header_tenant(self._location.hostname)

    def _request_id_header(self, context: RequestContext) -> dict[str, str]:
        return header_request_id()

    async def _recover_session(self, context: RequestContext) -> Response:
        if self._refresher.is_refreshing:
            self._logger.debug(
                f"Waiting for session refresh before retrying {context.method} {context.path}"
            )
            token = await self._refresher.wait_for_token()
        else:
            context.is_refresh_retry = True
            token = await self._refresher.refresh()

        context.is_refresh_retry = True
        context.access_token = token
        return await self._execute(context)

    def _log_failure(self, context: RequestContext, response: Response) -> None:
        status = response.status_code
        request_line = f"{context.method} {context.path}"

        if status == 404 and any(
            probe in context.path for probe in EXPECTED_NOT_FOUND_PATHS
        ):
            self._logger.debug(f"{request_line} - 404 (expected, will try fallback)")
            return

        body = response_body(response)
        if status == 401:
            self._logger.warning(
                f"{request_line} - authentication failed, token may be invalid or expired"
            )
        elif status == 403:
            if isinstance(body, dict) and body.get("geofenceData"):
                self._logger.warning(f"{request_line} - geofencing restriction: {body}")
            else:
                # permission errors never invalidate the session
                self._logger.error(
                    f"{request_line} - access denied, insufficient permissions: {body}"
                )
        elif status == 503:
            self._logger.error(
                f"{request_line} - service still unavailable after "
                f"{context.retry_count} retries"
            )
        elif status >= 500:
            self._logger.error(f"{request_line} - server error {status}: {body}")
        else:
            self._logger.debug(f"{request_line} - failed with status {status}")
