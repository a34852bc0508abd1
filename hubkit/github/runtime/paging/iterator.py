"""Forward-only iterator over the pages of one paginated listing."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Protocol

from ...core.context import Context
from ...core.exceptions import CancellationError, GitHubError
from ...models import Page
from .telemetry import log_page_fetched


class PageGetter(Protocol):
    """What the iterator needs from a client: one GET producing a Page."""

    async def get(
        self,
        url: str,
        ctx: Context | None = None,
        *,
        use_stable_api: bool | None = None,
    ) -> Page: ...


class IteratorState(str, Enum):
    UNSTARTED = "unstarted"
    HAS_CURRENT = "has_current"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class PageIterator:
    """Stateful pull cursor over a URL sequence.

    Each ``next()`` performs one GET and advances to the continuation link
    carried by the previous page. Pages are strictly ordered: page N+1 is
    never requested before page N has completed.

    Once an error page has been seen the iterator stays failed and never
    issues another request; construct a new iterator to start over.

    Example:
        >>> pages = PageIterator(url, client)
        >>> async for page in pages:
        ...     print(page.status_code, page.content.next_link)
        >>> pages.error  # sticky error, if any
    """

    def __init__(
        self,
        start_url: str,
        client: PageGetter,
        *,
        use_stable_api: bool | None = None,
    ) -> None:
        self.start_url = start_url
        self._client = client
        self._use_stable_api = use_stable_api
        self._current: Page | None = None
        self._error: GitHubError | None = None
        self._state = IteratorState.UNSTARTED
        self._pages_fetched = 0

    @property
    def state(self) -> IteratorState:
        return self._state

    @property
    def current(self) -> Page | None:
        return self._current

    @property
    def error(self) -> GitHubError | None:
        return self._error

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    async def next(self, ctx: Context | None = None) -> Page | None:
        """Fetch the next page, or return None once the listing is done.

        An error page is returned once (so the caller can inspect its
        status code) and recorded as the sticky error.
        """
        if self._state in (IteratorState.FAILED, IteratorState.EXHAUSTED):
            return None

        if self._current is None:
            url = self.start_url
        elif self._current.is_last():
            self._state = IteratorState.EXHAUSTED
            return None
        else:
            url = self._current.content.next_link  # type: ignore[union-attr]

        try:
            page = await self._client.get(url, ctx, use_stable_api=self._use_stable_api)
        except asyncio.CancelledError:
            self._error = CancellationError("Page request cancelled")
            self._state = IteratorState.FAILED
            raise

        log_page_fetched(
            url=url,
            status_code=page.status_code,
            page_index=self._pages_fetched,
            has_next=not page.is_last(),
        )
        self._pages_fetched += 1
        self._current = page

        if page.error is not None:
            self._error = page.error
            self._state = IteratorState.FAILED
        else:
            self._state = IteratorState.HAS_CURRENT
        return page

    def __aiter__(self) -> PageIterator:
        return self

    async def __anext__(self) -> Page:
        page = await self.next()
        if page is None:
            raise StopAsyncIteration
        return page
