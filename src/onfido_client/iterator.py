"""
Lazy iteration over paginated collection endpoints.

One ResourceIter serves every resource kind: what differs per resource is
only how a page body is decoded, and that is injected as a PageDecoder.

    it = client.list_checks(applicant_id)
    while await it.advance():
        print(it.current.id)
    if it.error:
        raise it.error

or, equivalently:

    async for check in client.list_checks(applicant_id):
        print(check.id)
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from onfido_client.common.exceptions import MalformedResponseError, OnfidoError
from onfido_client.common.logging import LoggedClass
from onfido_client.common.security import sanitize_url
from onfido_client.envelope import raise_for_status
from onfido_client.transport import Request, Response, Transport, cancelled_error

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# Consecutive empty pages tolerated within one advance()
MAX_EMPTY_PAGES = 10


@dataclass
class Page(Generic[T]):
    """One decoded page: its items and the URL of the following page."""

    items: List[T] = field(default_factory=list)
    next_url: Optional[str] = None


PageDecoder = Callable[[Response], Page[T]]


def collection_decoder(
    model: Type[M],
    collection_field: str,
    next_field: Optional[str] = None,
) -> PageDecoder[M]:
    """
    Build a PageDecoder for a ``{"<collection_field>": [...]}`` envelope.

    The continuation URL is read from ``next_field`` in the body when given
    and present, otherwise from the response's Link rel="next" header.

    Args:
        model: Pydantic model for one item
        collection_field: Name of the array field holding the items
        next_field: Optional body field carrying the next page URL

    Returns:
        Callable decoding a success Response into a Page

    Example:
        decoder = collection_decoder(Check, "checks")
    """
    adapter = TypeAdapter(List[model])  # type: ignore[valid-type]

    def decode(response: Response) -> Page[M]:
        try:
            data = json.loads(response.body)
        except ValueError as e:
            raise MalformedResponseError(
                f"Page body is not JSON (expected '{collection_field}')",
                status_code=response.status,
                cause=e,
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get(collection_field), list):
            raise MalformedResponseError(
                f"Page body has no '{collection_field}' array",
                status_code=response.status,
            )

        try:
            items = adapter.validate_python(data[collection_field])
        except SchemaValidationError as e:
            raise MalformedResponseError(
                f"Invalid {model.__name__} in '{collection_field}'",
                status_code=response.status,
                cause=e,
            ) from e

        next_url = data.get(next_field) if next_field else None
        if not isinstance(next_url, str) or not next_url:
            next_url = response.next_link

        return Page(items=items, next_url=next_url)

    return decode


class ResourceIter(LoggedClass, Generic[T]):
    """
    Pull-based, forward-only, non-restartable sequence over a paginated
    collection.

    ``advance()`` serves items from the buffered page without I/O and only
    performs a round trip when the buffer is used up and a continuation URL
    is known. Failures are sticky: once ``advance()`` returns False because
    of an error, it keeps returning False and ``error`` keeps reporting the
    same exception. Exhaustion is reported as False with ``error`` None.

    Not safe for concurrent ``advance()`` calls; share the client, not the
    iterator.
    """

    log_component = "iterator"

    def __init__(
        self,
        transport: Transport,
        path: str,
        decoder: PageDecoder[T],
    ):
        """
        Args:
            transport: Transport used for page fetches
            path: First page path (relative) or absolute URL
            decoder: Turns a success Response into a Page of T
        """
        self.collection_path = path
        self._transport = transport
        self._decode = decoder

        self._next_url: Optional[str] = path
        self._page: List[T] = []
        self._pos = 0
        self._current: Optional[T] = None
        self._error: Optional[OnfidoError] = None
        self.pages_fetched = 0

        super().__init__()

    @property
    def current(self) -> T:
        """
        Item at the cursor set by the last successful ``advance()``.

        Raises:
            RuntimeError: If no item is current (before the first successful
                advance, after exhaustion, or after an error)
        """
        if self._current is None:
            raise RuntimeError("No current item; advance() must return True first")
        return self._current

    @property
    def error(self) -> Optional[OnfidoError]:
        """The error that stopped iteration, or None."""
        return self._error

    async def advance(self) -> bool:
        """
        Move to the next item, fetching the next page if needed.

        An empty page that still has a continuation is skipped, so one call
        may make more than one round trip. After MAX_EMPTY_PAGES consecutive
        empty pages the iterator fails with MalformedResponseError.

        Returns:
            True if positioned on a new item; False when exhausted or failed

        Raises:
            asyncio.CancelledError: If cancelled during a page fetch (the
                iterator is left failed with RequestCancelledError)
        """
        if self._error is not None:
            return False

        empty_pages = 0
        while self._pos >= len(self._page):
            if not self._next_url:
                self._current = None
                return False
            if self.pages_fetched and not self._page:
                empty_pages += 1
                if empty_pages >= MAX_EMPTY_PAGES:
                    self._fail(MalformedResponseError(
                        f"{empty_pages} consecutive empty pages, giving up",
                        context={"url": sanitize_url(self._next_url)},
                    ))
                    return False
            if not await self._fetch_page(self._next_url):
                return False

        self._current = self._page[self._pos]
        self._pos += 1
        return True

    async def _fetch_page(self, url: str) -> bool:
        try:
            response = await self._transport.send(Request("GET", url))
            raise_for_status(response)
        except asyncio.CancelledError:
            self._fail(cancelled_error(url))
            raise
        except OnfidoError as e:
            self._fail(e)
            return False

        try:
            page = self._decode(response)
        except OnfidoError as e:
            self._fail(e)
            return False
        except Exception as e:
            self._fail(MalformedResponseError(
                "Page decoder failed",
                status_code=response.status,
                cause=e,
                context={"url": sanitize_url(url)},
            ))
            return False

        self._page = page.items
        self._pos = 0
        self._next_url = page.next_url
        self.pages_fetched += 1
        self._log(
            logging.DEBUG,
            "Fetched page",
            page_number=self.pages_fetched,
            page_items=len(page.items),
            has_next=bool(page.next_url),
        )
        return True

    def _fail(self, error: OnfidoError) -> None:
        self._error = error
        self._page = []
        self._pos = 0
        self._next_url = None
        self._current = None
        self._log_exception(
            error,
            "Iteration stopped by error",
            level=logging.WARNING,
            page_number=self.pages_fetched + 1,
        )

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        if await self.advance():
            return self.current
        if self._error is not None:
            raise self._error
        raise StopAsyncIteration

    async def collect(self) -> List[T]:
        """Drain the remaining items into a list, raising on failure."""
        return [item async for item in self]
