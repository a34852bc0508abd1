"""Caller-owned cancellation context.

Architecture:
    Every network operation accepts an optional Context. The context is the
    only way the library bounds request duration: it can be cancelled
    explicitly (``cancel()``) or carry a deadline (``timeout``). When either
    fires while a request is outstanding, the request task is cancelled and
    the operation fails with CancellationError (or DeadlineExceededError),
    which callers can tell apart from TransportError.

    Native asyncio task cancellation is left untouched: ``CancelledError``
    keeps propagating so structured concurrency keeps working.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import Awaitable
from typing import TypeVar

from .exceptions import CancellationError, DeadlineExceededError

T = TypeVar("T")


class Context:
    """Cancellation token with an optional deadline.

    Example:
        >>> ctx = Context(timeout=10.0)
        >>> page = await client.get(url, ctx)
        >>> ctx.cancel()  # every later call made with ctx fails fast
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self._cancelled = asyncio.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._expired = False

    @classmethod
    def background(cls) -> Context:
        """Context that is never cancelled and has no deadline."""
        return cls()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline (None when there is no deadline)."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def done(self) -> bool:
        if self._cancelled.is_set() or self._expired:
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._expired = True
            return True
        return False

    def err(self) -> CancellationError | None:
        """Error describing why the context is done, or None if it is not."""
        if self._cancelled.is_set():
            return CancellationError("Context cancelled")
        if self.done():
            return DeadlineExceededError("Context deadline exceeded")
        return None

    async def run(self, aw: Awaitable[T]) -> T:
        """Await ``aw`` unless the context finishes first.

        Raises:
            CancellationError: context cancelled (or deadline passed) before
                ``aw`` completed; ``aw`` is cancelled.
        """
        if self.done():
            if asyncio.iscoroutine(aw):
                aw.close()
            raise self.err()  # type: ignore[misc]

        task = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(self._cancelled.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            task.cancel()
            waiter.cancel()
            raise

        waiter.cancel()
        if task in done:
            return task.result()

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        if not self._cancelled.is_set():
            self._expired = True
        raise self.err()  # type: ignore[misc]
