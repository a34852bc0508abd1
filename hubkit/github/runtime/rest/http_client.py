"""Async HTTP client wrapper."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ...core.context import Context
from ...core.exceptions import CancellationError, TransportError

logger = logging.getLogger(__name__)

# A hook sees every response and may return a delay (seconds) to apply
# before the next request.
ResponseHook = Callable[[aiohttp.ClientResponse], "float | None | Awaitable[float | None]"]


@dataclass(frozen=True)
class HTTPResponse:
    """Fully read response: status, headers and body text."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""
    url: str = ""

    def header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default


def _merge_headers(items: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Flatten response headers, joining repeated fields with ", " (RFC 9110 5.3)."""
    merged: dict[str, str] = {}
    names: dict[str, str] = {}
    for name, value in items:
        key = names.setdefault(name.lower(), name)
        merged[key] = f"{merged[key]}, {value}" if key in merged else value
    return merged


class HTTPClient:
    """Async HTTP client wrapper.

    Owns one aiohttp session (created lazily, recreated if closed), resolves
    relative URLs against ``base_url``, runs response hooks and honours a
    throttle window requested by those hooks. Requests are never retried.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        self._response_hooks.append(hook)

    def set_throttle(self, delay: float) -> None:
        """Hold the next request back for ``delay`` seconds.

        A shorter window never replaces a longer one already in place.
        """
        if delay <= 0:
            return
        until = time.time() + delay
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    def resolve_url(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def _wait_for_throttle(self) -> None:
        if self._throttle_until is None:
            return
        delay = self._throttle_until - time.time()
        self._throttle_until = None
        if delay > 0:
            logger.debug("Throttling request", extra={"delay_s": delay})
            await asyncio.sleep(delay)

    async def _run_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                result = hook(response)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:  # hooks must never break a request
                logger.warning(
                    "Response hook failed",
                    extra={"hook": getattr(hook, "__name__", repr(hook)), "error": str(exc)},
                )
                continue
            if result:
                self.set_throttle(float(result))

    async def _send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
        data: bytes | None,
    ) -> HTTPResponse:
        # The throttle wait is part of the request so a Context can interrupt it
        await self._wait_for_throttle()
        async with self.session.request(method, url, headers=headers, data=data) as response:
            body = await response.text()
            await self._run_hooks(response)
            return HTTPResponse(
                status=response.status,
                headers=_merge_headers(response.headers.items()),
                body=body,
                url=url,
            )

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: bytes | None = None,
        ctx: Context | None = None,
    ) -> HTTPResponse:
        """Issue one request and read the full response.

        Raises:
            CancellationError: ``ctx`` was cancelled or its deadline passed
            TransportError: Connection, DNS or timeout failure
        """
        url = self.resolve_url(url)

        try:
            if ctx is None:
                return await self._send(method, url, headers, data)
            return await ctx.run(self._send(method, url, headers, data))
        except CancellationError:
            logger.info("Context done, cancelling HTTP request", extra={"method": method, "url": url})
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error(
                "Unable to make HTTP request",
                extra={"method": method, "url": url, "error": str(exc)},
            )
            raise TransportError(f"{method} {url} failed: {exc}", url=url) from exc

    async def get(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        ctx: Context | None = None,
    ) -> HTTPResponse:
        """GET request."""
        return await self.request("GET", url, headers=headers, ctx=ctx)

    async def post(
        self,
        url: str,
        data: bytes | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        ctx: Context | None = None,
    ) -> HTTPResponse:
        """POST request."""
        return await self.request("POST", url, headers=headers, data=data, ctx=ctx)

    async def patch(
        self,
        url: str,
        data: bytes | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        ctx: Context | None = None,
    ) -> HTTPResponse:
        """PATCH request."""
        return await self.request("PATCH", url, headers=headers, data=data, ctx=ctx)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        await self.close()
