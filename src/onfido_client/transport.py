"""
HTTP transport for the Onfido REST API.

Builds authenticated requests, performs exactly one round trip per call and
turns network failures into typed TransportErrors. It never looks at the
response status; classifying the body is the envelope decoder's job.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import urlparse

import aiohttp

from onfido_client.common.exceptions import (
    InvalidRequestError,
    RequestCancelledError,
    RequestTimeoutError,
    TransportError,
)
from onfido_client.common.logging import LoggedClass
from onfido_client.common.security import sanitize_url
from onfido_client.config import ClientConfig

JSON_CONTENT_TYPE = "application/json"


@dataclass
class Request:
    """A single API call.

    Attributes:
        method: HTTP method (GET, POST, PUT, DELETE)
        path: Path relative to the endpoint ("/checks/123") or an absolute
              URL (an href returned by the API), used verbatim
        body: Encoded request body, if any
        content_type: Overrides the default JSON content type for the body
        accept: Overrides the default JSON Accept header (binary downloads)
    """

    method: str
    path: str
    body: Optional[bytes] = None
    content_type: Optional[str] = None
    accept: Optional[str] = None


@dataclass
class Response:
    """Raw outcome of a round trip: status, body bytes and headers."""

    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    links: Dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def next_link(self) -> Optional[str]:
        """URL of the Link header's rel="next" relation, if present."""
        return self.links.get("next") or None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


def is_absolute_url(path: str) -> bool:
    """Whether path is a fully-qualified URL rather than an endpoint path."""
    parsed = urlparse(path)
    return bool(parsed.scheme and parsed.netloc)


class Transport(LoggedClass):
    """
    Async HTTP transport bound to one endpoint and API token.

    Holds only immutable configuration plus the shared session and
    concurrency semaphore, so a single instance can serve many concurrent
    callers.

    Usage:
        async with Transport(ClientConfig(api_token="...")) as transport:
            response = await transport.send(Request("GET", "/checks/123"))

    A caller-supplied aiohttp session is used as-is and not closed by
    close(); the caller owns its lifetime.
    """

    log_component = "transport"

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.config = config
        self.base_url = config.endpoint

        self._session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(config.max_concurrent)

        super().__init__()

    async def __aenter__(self) -> "Transport":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Create aiohttp session if not exists."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.config.max_concurrent,
                limit_per_host=self.config.max_concurrent,
            )
            self._session = aiohttp.ClientSession(connector=connector)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this transport created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None

    def resolve_url(self, path: str) -> str:
        """
        Resolve a request path against the configured endpoint.

        Absolute URLs are returned unchanged; anything else is appended to
        the endpoint.

        Raises:
            InvalidRequestError: If path is empty
        """
        if not path:
            raise InvalidRequestError("Request path must not be empty")
        try:
            absolute = is_absolute_url(path)
        except ValueError as e:
            raise InvalidRequestError(
                f"Invalid request URL: {sanitize_url(path)}", cause=e
            ) from e
        if absolute:
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def build_headers(self, request: Request) -> Dict[str, str]:
        """Headers sent with every request; auth is never cached in the session."""
        headers = {
            "Authorization": f"Bearer {self.config.api_token}",
            "Accept": request.accept or JSON_CONTENT_TYPE,
            "User-Agent": self.config.user_agent,
        }
        if request.body is not None:
            headers["Content-Type"] = request.content_type or JSON_CONTENT_TYPE
        return headers

    async def send(self, request: Request) -> Response:
        """
        Perform one round trip. Never retries.

        Args:
            request: Request to send

        Returns:
            Response with status, raw body, headers and Link relations,
            whatever the status code

        Raises:
            InvalidRequestError: If the request cannot be built
            RequestTimeoutError: If the configured timeout elapses
            TransportError: On connection-level failures
            asyncio.CancelledError: If the calling task is cancelled
        """
        url = self.resolve_url(request.path)
        headers = self.build_headers(request)
        log_url = sanitize_url(url)
        session = await self._ensure_session()

        start = time.monotonic()
        async with self._semaphore:
            try:
                async with session.request(
                    request.method,
                    url,
                    data=request.body,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
                ) as resp:
                    body = await resp.read()
                    response = Response(
                        status=resp.status,
                        body=body,
                        headers=dict(resp.headers),
                        links={
                            str(rel): str(link.get("url", ""))
                            for rel, link in resp.links.items()
                        },
                        url=url,
                    )

            except asyncio.CancelledError:
                self._log(
                    logging.INFO,
                    "API request cancelled",
                    api_method=request.method,
                    api_url=log_url,
                )
                raise

            except asyncio.TimeoutError as e:
                error = RequestTimeoutError(
                    f"Timeout after {self.config.timeout_seconds}s: {log_url}",
                    cause=e,
                    context={"url": log_url},
                )
                self._log(
                    logging.WARNING,
                    "API request timeout",
                    api_method=request.method,
                    api_url=log_url,
                    error_category=error.category.value,
                )
                raise error from e

            except aiohttp.InvalidURL as e:
                raise InvalidRequestError(
                    f"Invalid request URL: {log_url}", cause=e
                ) from e

            except aiohttp.ClientError as e:
                error = TransportError(
                    f"Connection error: {log_url}",
                    cause=e,
                    context={"url": log_url},
                )
                self._log_exception(
                    e,
                    "API connection error",
                    level=logging.WARNING,
                    api_method=request.method,
                    api_url=log_url,
                )
                raise error from e

        self._log(
            logging.DEBUG,
            "API request completed",
            api_method=request.method,
            api_url=log_url,
            http_status=response.status,
            duration_ms=round((time.monotonic() - start) * 1000, 1),
        )
        return response


def cancelled_error(url: str) -> RequestCancelledError:
    """Error recorded when a caller cancels an in-flight request."""
    return RequestCancelledError(f"Request cancelled: {sanitize_url(url)}")
