# SPDX-License-Identifier: Apache-2.0
"""HTTP transport with retries for the DeepL API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

import aiohttp

from deepl_client.core.backoff import BackoffTimer
from deepl_client.errors import ConnectionError

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "DELETE", "PATCH", "PUT"]
RequestData = Sequence[tuple[str, str]]


@dataclass
class HttpResponse:
    """Status code and content of a completed request.

    ``content`` is the decoded body text, or the still-open
    :class:`aiohttp.ClientResponse` when the request asked for a streamed
    response. Streamed responses must be released by the caller.
    """

    status_code: int
    content: str | aiohttp.ClientResponse

    @property
    def is_stream(self) -> bool:
        return isinstance(self.content, aiohttp.ClientResponse)

    def release(self) -> None:
        """Release a streamed response back to the connection pool."""
        if isinstance(self.content, aiohttp.ClientResponse):
            self.content.release()


class HttpClient:
    """Sends requests to the DeepL API, retrying transient failures.

    Headers, retry and timeout settings are fixed at construction, so one
    instance may serve any number of concurrent requests.
    """

    def __init__(
        self,
        server_url: str,
        headers: dict[str, str],
        max_retries: int = 5,
        min_timeout: float = 10.0,
        proxy: str | None = None,
        session: aiohttp.ClientSession | None = None,
        backoff_factory: Callable[[], BackoffTimer] = BackoffTimer,
    ) -> None:
        """Initialize HttpClient.

        Args:
            server_url: Base URL, e.g. "https://api.deepl.com".
            headers: Headers sent with every request.
            max_retries: Maximum number of retries per request.
            min_timeout: Minimum per-attempt timeout in seconds.
            proxy: Optional proxy URL.
            session: Optional externally managed aiohttp session.
            backoff_factory: Creates the retry timer for each request.
        """
        self._server_url = server_url.rstrip("/")
        self._headers = dict(headers)
        self._max_retries = max_retries
        self._min_timeout = min_timeout
        self._proxy = proxy
        self._session = session
        self._owns_session = session is None
        self._backoff_factory = backoff_factory

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def max_retries(self) -> int:
        return self._max_retries

    async def __aenter__(self) -> HttpClient:
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def send_request_with_backoff(
        self,
        method: HttpMethod,
        path: str,
        *,
        data: RequestData | None = None,
        headers: dict[str, str] | None = None,
        file_buffer: bytes | None = None,
        filename: str | None = None,
        response_as_stream: bool = False,
    ) -> HttpResponse:
        """Send a request, retrying on transient failures.

        Args:
            method: HTTP method.
            path: Endpoint path, excluding the server URL.
            data: Ordered fields; query string for GET, body otherwise.
            headers: Extra headers merged over the default headers.
            file_buffer: File content to send as multipart form data.
            filename: Filename of the file part.
            response_as_stream: Return the open response instead of its text.

        Returns:
            Response of the last attempt, whatever its status code.

        Raises:
            ConnectionError: If the last attempt failed without a response.
        """
        logger.info("Request to DeepL API %s %s", method, path)
        logger.debug("Request details: %s", data)

        backoff = self._backoff_factory()

        while True:
            timeout = max(self._min_timeout, backoff.time_until_deadline())
            try:
                response = await self._send_request(
                    method,
                    path,
                    timeout=timeout,
                    data=data,
                    headers=headers,
                    file_buffer=file_buffer,
                    filename=filename,
                    response_as_stream=response_as_stream,
                )
            except ConnectionError as exc:
                if not self._should_retry(None, exc) or self._retries_exhausted(backoff):
                    raise
                logger.debug("Encountered a retryable error: %s", exc.message)
            else:
                if not self._should_retry(response, None) or self._retries_exhausted(backoff):
                    break
                response.release()

            logger.info(
                "Starting retry %d for request %s %s after sleeping for %.2f seconds.",
                backoff.num_retries + 1,
                method,
                path,
                backoff.time_until_deadline(),
            )
            await backoff.advance()

        logger.info("DeepL API response %s %s %d", method, path, response.status_code)
        if not response.is_stream:
            logger.debug("Response details: %s", response.content)
        return response

    async def _send_request(
        self,
        method: HttpMethod,
        path: str,
        *,
        timeout: float,
        data: RequestData | None,
        headers: dict[str, str] | None,
        file_buffer: bytes | None,
        filename: str | None,
        response_as_stream: bool,
    ) -> HttpResponse:
        """Perform a single attempt.

        Raises:
            ConnectionError: On any network-level failure.
        """
        session = await self._ensure_session()
        kwargs = self._prepare_request(
            method, timeout, response_as_stream, data, headers, file_buffer, filename
        )

        try:
            response = await session.request(method, self._server_url + path, **kwargs)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise _connection_error(exc) from exc

        if response_as_stream:
            return HttpResponse(response.status, response)

        try:
            text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise _connection_error(exc) from exc
        finally:
            response.release()
        return HttpResponse(response.status, text)

    def _prepare_request(
        self,
        method: HttpMethod,
        timeout: float,
        response_as_stream: bool,
        data: RequestData | None,
        headers: dict[str, str] | None,
        file_buffer: bytes | None,
        filename: str | None,
    ) -> dict[str, Any]:
        merged_headers = {**self._headers, **(headers or {})}
        kwargs: dict[str, Any] = {
            "headers": merged_headers,
            # Streamed downloads may take longer than one attempt's budget;
            # only bound the connect and per-read phases for them.
            "timeout": aiohttp.ClientTimeout(
                total=None if response_as_stream else timeout,
                sock_connect=timeout,
                sock_read=timeout,
            ),
        }
        if self._proxy is not None:
            kwargs["proxy"] = self._proxy

        if file_buffer is not None:
            form = aiohttp.FormData()
            form.add_field("file", file_buffer, filename=filename)
            for key, value in data or ():
                form.add_field(key, value)
            kwargs["data"] = form
        elif data:
            if method == "GET":
                kwargs["params"] = list(data)
            else:
                kwargs["data"] = aiohttp.FormData(list(data))
        return kwargs

    @staticmethod
    def _should_retry(
        response: HttpResponse | None, error: ConnectionError | None
    ) -> bool:
        if response is None:
            return error is not None and error.should_retry

        # 503 means "not ready" to the caller, not a transient failure
        status = response.status_code
        return status == 429 or (status >= 500 and status != 503)

    def _retries_exhausted(self, backoff: BackoffTimer) -> bool:
        return backoff.num_retries >= self._max_retries


def _connection_error(exc: BaseException) -> ConnectionError:
    """Wrap a transport exception, tagging whether it is worth retrying."""
    message = str(exc) or type(exc).__name__
    if isinstance(exc, (asyncio.TimeoutError, aiohttp.ServerDisconnectedError)):
        return ConnectionError(f"Connection failure: {message}", should_retry=True, cause=exc)
    logger.debug("Unrecognized connection error: %r", exc)
    return ConnectionError(f"Connection failure: {message}", should_retry=False, cause=exc)

