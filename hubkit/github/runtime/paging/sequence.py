"""Typed, lazy sequence of items spread across result pages.

Architecture:
    PagedSequence wraps a PageIterator and a decoder. Each page body (a JSON
    array) is decoded into a batch of T; items are then handed out one at a
    time and the next page is requested only once the batch is used up. The
    caller never sees page boundaries.

    Every typed listing (branches, commits, statuses, issues, comments, pull
    requests, teams, members) is one ``paginate()`` call with a different
    item type.

Design Decisions:
    - One generic projector parameterized by a decoder instead of a copy per type
    - Lazy and not restartable: once exhausted or failed, build a new sequence
    - Errors are sticky and replayed on every later call
    - A body that does not decode is a DecodeError by default; lenient_decode
      restores "log it and treat the page as the end of the results"
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from functools import lru_cache
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ...core.context import Context
from ...core.exceptions import CancellationError, DecodeError, GitHubError
from .iterator import PageGetter, PageIterator
from .telemetry import log_decode_failed, log_sequence_exhausted, log_sequence_failed

T = TypeVar("T")

Decoder = Callable[[str], list[T]]


@lru_cache(maxsize=None)
def _list_adapter(item_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(list[item_type])


def json_array_decoder(item_type: type[T]) -> Decoder[T]:
    """Decoder turning a JSON array body into ``list[item_type]``.

    Raises (from the returned decoder):
        DecodeError: Body is not JSON or not an array of ``item_type``
    """
    adapter = _list_adapter(item_type)

    def decode(body: str) -> list[T]:
        try:
            return adapter.validate_json(body)
        except PydanticValidationError as exc:
            raise DecodeError(
                f"Unable to parse JSON as a list of {getattr(item_type, '__name__', item_type)}: "
                f"{exc.error_count()} error(s)"
            ) from exc

    decode.item_type = item_type  # type: ignore[attr-defined]
    return decode


class PagedSequence(Generic[T]):
    """One-at-a-time sequence of decoded items.

    Example:
        >>> commits = paginate(client, url, Commit)
        >>> async for commit in commits:
        ...     print(commit.sha)

        Or, with explicit state checks:

        >>> while await commits.has_next(ctx):
        ...     print(commits.item)
        >>> if commits.error:
        ...     raise commits.error
    """

    def __init__(
        self,
        pages: PageIterator,
        decoder: Decoder[T],
        *,
        lenient_decode: bool = False,
    ) -> None:
        self._pages = pages
        self._decode = decoder
        self._lenient_decode = lenient_decode
        self._batch: list[T] | None = None
        self._position = 0
        self._current: T | None = None
        self._error: GitHubError | None = None
        self._exhausted = False
        self._pages_loaded = 0
        self._items_yielded = 0

    @property
    def item(self) -> T | None:
        """Item published by the last advance (None when there is none)."""
        return self._current

    @property
    def error(self) -> GitHubError | None:
        return self._error

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def pages_loaded(self) -> int:
        return self._pages_loaded

    def _fail(self, error: GitHubError) -> None:
        self._error = error
        self._current = None
        self._batch = None
        log_sequence_failed(start_url=self._pages.start_url, error=error)

    def _finish(self) -> None:
        self._exhausted = True
        self._current = None
        self._batch = None
        log_sequence_exhausted(
            start_url=self._pages.start_url,
            pages_loaded=self._pages_loaded,
            items_yielded=self._items_yielded,
        )

    async def _load(self, ctx: Context | None) -> bool:
        """Pull and decode the next page; False when no batch is available."""
        try:
            page = await self._pages.next(ctx)
        except asyncio.CancelledError:
            self._fail(CancellationError("Page request cancelled"))
            raise

        if page is None:
            self._finish()
            return False
        if page.error is not None:
            self._fail(page.error)
            return False
        if page.no_content():
            self._finish()
            return False

        try:
            batch = self._decode(page.content.body)  # type: ignore[union-attr]
        except DecodeError as exc:
            item_type = getattr(self._decode, "item_type", None)
            log_decode_failed(
                url=page.url,
                item_type=getattr(item_type, "__name__", str(item_type)),
                error=exc,
                lenient=self._lenient_decode,
            )
            if self._lenient_decode:
                self._finish()
            else:
                self._fail(exc)
            return False

        if not batch:
            self._finish()
            return False

        self._batch = batch
        self._position = 0
        self._pages_loaded += 1
        return True

    async def advance(self, ctx: Context | None = None) -> None:
        """Publish the next item as ``item`` (None when there are no more)."""
        if self._error is not None or self._exhausted:
            self._current = None
            return

        if self._batch is None or self._position >= len(self._batch):
            if not await self._load(ctx):
                return

        self._current = self._batch[self._position]  # type: ignore[index]
        self._position += 1
        self._items_yielded += 1

    async def has_next(self, ctx: Context | None = None) -> bool:
        """Advance and report whether an item is available.

        A finished ``ctx`` is recorded as the sticky error and reported as
        "no next item", even when the current batch still has items.
        """
        await self.advance(ctx)
        if ctx is not None and ctx.done():
            if self._error is None:
                self._fail(ctx.err())  # type: ignore[arg-type]
            self._current = None
            return False
        return self._current is not None

    async def iter(self, ctx: Context | None = None) -> AsyncIterator[T]:
        """Yield every remaining item, then raise the sticky error if there is one."""
        while await self.has_next(ctx):
            yield self._current  # type: ignore[misc]
        if self._error is not None:
            raise self._error

    def __aiter__(self) -> AsyncIterator[T]:
        return self.iter()

    async def to_list(self, ctx: Context | None = None) -> list[T]:
        return [item async for item in self.iter(ctx)]

    async def last(self, ctx: Context | None = None) -> T | None:
        """Drain the sequence and return its final item."""
        item: T | None = None
        async for item in self.iter(ctx):
            pass
        return item


def paginate(
    client: PageGetter,
    url: str,
    item_type: type[T],
    *,
    lenient_decode: bool = False,
    use_stable_api: bool | None = None,
) -> PagedSequence[T]:
    """Lazy typed listing starting at ``url``.

    Args:
        client: Anything with a ``get(url, ctx)`` returning a Page
        url: First page of the listing
        item_type: Pydantic model (or any type pydantic validates) of one item
        lenient_decode: Treat an undecodable page as the end of the results
        use_stable_api: Ask for the stable (True) or preview (False) media
            type; None leaves the choice to the client
    """
    pages = PageIterator(url, client, use_stable_api=use_stable_api)
    return PagedSequence(pages, json_array_decoder(item_type), lenient_decode=lenient_decode)
