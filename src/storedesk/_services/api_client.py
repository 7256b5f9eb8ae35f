import asyncio
import io
from pathlib import Path
from typing import Any, Callable, Optional, Union

from httpx import URL, Response

from ._base_service import BaseService


class ApiClient(BaseService):
    """Client for making HTTP requests to the StoreDesk admin API.

    Every call goes through the shared request pipeline: path normalization,
    bearer/tenant/request-id headers, retry of ``503`` responses, a single
    shared session refresh on ``401`` and user notification of terminal
    failures.

    Example:
        ```python
        async with StoreDesk().api_client as client:
            response = await client.get("/v1/orders/123")
            order = response.json()
        ```
    """

    async def request(self, method: str, url: Union[URL, str], **kwargs: Any) -> Response:
        """Send a request through the pipeline.

        Args:
            method (str): The HTTP method (GET, POST, PUT, PATCH, DELETE, ...).
            url (Union[URL, str]): Path relative to the API root. ``/v1/x``,
                ``v1/x``, ``/x`` and ``x`` are equivalent.
            **kwargs (Any): ``params``, ``json``, ``content``, ``data``,
                ``files``, ``headers``, ``timeout``, ``skip_error_toast`` and
                ``stream``. ``skip_error_toast`` suppresses the user
                notification only; the error is still raised. With
                ``stream`` a successful body is left unread and the caller
                closes the response.

        Returns:
            Response: The final response.

        Raises:
            EnrichedException: The API answered with an error status.
            TokenRefreshError: The session expired and could not be refreshed.
            httpx.RequestError: The request could not be completed.
        """
        return await self.request_async(method, url, **kwargs)

    async def get(self, url: Union[URL, str], **kwargs: Any) -> Response:
        return await self.request_async("GET", url, **kwargs)

    async def post(self, url: Union[URL, str], json: Any = None, **kwargs: Any) -> Response:
        return await self.request_async("POST", url, json=json, **kwargs)

    async def put(self, url: Union[URL, str], json: Any = None, **kwargs: Any) -> Response:
        return await self.request_async("PUT", url, json=json, **kwargs)

    async def patch(self, url: Union[URL, str], json: Any = None, **kwargs: Any) -> Response:
        return await self.request_async("PATCH", url, json=json, **kwargs)

    async def delete(self, url: Union[URL, str], **kwargs: Any) -> Response:
        return await self.request_async("DELETE", url, **kwargs)

    async def upload(
        self,
        url: Union[URL, str],
        file_path: Union[str, Path],
        *,
        field_name: str = "file",
        on_progress: Optional[Callable[[int], None]] = None,
        **kwargs: Any,
    ) -> Response:
        """Upload a local file as a multipart form field.

        Args:
            url (Union[URL, str]): The upload endpoint.
            file_path (Union[str, Path]): The file to send.
            field_name (str): Name of the form field holding the file.
            on_progress (Optional[Callable[[int], None]]): Called with the
                percentage of the file sent so far. Starts over when the
                request is retried.

        Returns:
            Response: The final response.
        """
        path = Path(file_path)
        file_content = await asyncio.to_thread(path.read_bytes)

        file: Union[bytes, _ProgressReader] = file_content
        if on_progress is not None:
            file = _ProgressReader(file_content, on_progress)

        files = {field_name: (path.name, file)}
        return await self.request_async("POST", url, files=files, **kwargs)

    async def download(
        self,
        url: Union[URL, str],
        destination: Union[str, Path],
        **kwargs: Any,
    ) -> Path:
        """Stream a response body into ``destination`` and return its path.

        Nothing is written when the request fails.
        """
        response = await self.request_async("GET", url, stream=True, **kwargs)

        target = Path(destination)
        try:
            await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
            file = await asyncio.to_thread(open, target, "wb")
            try:
                async for chunk in response.aiter_bytes():
                    await asyncio.to_thread(file.write, chunk)
            finally:
                await asyncio.to_thread(file.close)
        finally:
            await response.aclose()
        return target


class _ProgressReader(io.BytesIO):
    """In-memory upload body reporting how much of it has been read."""

    def __init__(self, content: bytes, on_progress: Callable[[int], None]) -> None:
        super().__init__(content)
        self._total = len(content)
        self._on_progress = on_progress

    def read(self, size: Optional[int] = -1) -> bytes:
        chunk = super().read(size)
        if chunk and self._total:
            self._on_progress(round(self.tell() * 100 / self._total))
        return chunk
