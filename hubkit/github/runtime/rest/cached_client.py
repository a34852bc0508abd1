"""Caching GitHub client: conditional GETs backed by a CacheStore.

Architecture:
    Every GET is keyed by a fingerprint of its URL. When the store holds an
    entry for that key, its etag / last-modified validators are sent as
    ``If-None-Match`` / ``If-Modified-Since``; a 304 answer is served from
    the stored entry. Any other answer is a cache miss: the old entry is
    evicted first, then replaced when the response is 200 or 204.

    POST and PATCH are never cached and never touch the store.

Design Decisions:
    - get() returns a Page carrying either content or an error, so the
      paging layer can keep sticky errors without try/except at every step
    - post(), patch() and rate_limit() raise, since they return plain values
    - No retries at this layer; retry policy belongs to the caller
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from ...auth.headers import HeaderProvider, conditional_headers
from ...cache.store import CacheStore, url_fingerprint
from ...core.config import ClientConfig
from ...core.constants import (
    API_URL,
    DEFAULT_HTTP_TIMEOUT,
    ETAG_HEADER,
    LAST_MODIFIED_HEADER,
    LINK_HEADER,
    RATE_LIMIT_LIMIT_HEADER,
    RATE_LIMIT_REMAINING_HEADER,
    RATE_LIMIT_UNKNOWN,
    RETRY_AFTER_HEADER,
)
from ...core.context import Context
from ...core.exceptions import (
    AuthUnavailableError,
    CancellationError,
    EncodeError,
    ForbiddenError,
    GitHubError,
    NotFoundError,
    RateLimitError,
    StorageError,
    TransportError,
    UnexpectedStatusError,
)
from ...models import APICalls, CacheEntry, Page
from .http_client import HTTPClient, HTTPResponse
from .links import parse_next_link

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Per-client cache counters."""

    hits: int = 0
    misses: int = 0
    writes: int = 0
    evictions: int = 0


def _header_int(response: HTTPResponse, name: str, default: int = RATE_LIMIT_UNKNOWN) -> int:
    raw = response.header(name)
    try:
        return int(raw)
    except ValueError:
        return default


class CachingClient:
    """GitHub REST client with a persistent conditional-GET cache.

    Example:
        >>> store = CacheStore.from_env()
        >>> async with CachingClient(store, TokenAuth(EnvToken())) as client:
        ...     page = await client.get("https://api.github.com/orgs/python")
        ...     page.raise_for_error()
        ...     print(page.content.body)
    """

    def __init__(
        self,
        store: CacheStore,
        auth: HeaderProvider | None,
        *,
        http: HTTPClient | None = None,
        api_url: str = API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        use_stable_api: bool = True,
    ) -> None:
        """Initialize the client.

        Args:
            store: Cache store driven by this client
            auth: Auth header provider; requests fail with
                AuthUnavailableError when it is None
            http: HTTP client to use (created if not provided)
            api_url: API root used for relative URLs and the rate-limit probe
            timeout: Total timeout per request for a created HTTP client
            use_stable_api: Default media type choice for requests that do
                not pass their own (stable when True, preview otherwise)
        """
        self.store = store
        self.api_url = api_url.rstrip("/")
        self._auth = auth
        self.use_stable_api = use_stable_api
        self._owns_http = http is None
        self.http = http or HTTPClient(base_url=self.api_url, timeout=timeout)
        self.stats = CacheStats()

    @classmethod
    def from_config(cls, config: ClientConfig, auth: HeaderProvider | None) -> CachingClient:
        return cls(
            CacheStore(config.cache_path),
            auth,
            api_url=config.api_url,
            timeout=config.timeout,
            use_stable_api=config.use_stable_api,
        )

    def _auth_headers(self, use_stable_api: bool | None) -> dict[str, str]:
        if self._auth is None:
            raise AuthUnavailableError("No auth header provider configured")
        if use_stable_api is None:
            use_stable_api = self.use_stable_api
        return dict(self._auth(use_stable_api))

    # ------------------------------------------------------------------
    # GET
    # ------------------------------------------------------------------

    async def get(
        self,
        url: str,
        ctx: Context | None = None,
        *,
        use_stable_api: bool | None = None,
    ) -> Page:
        """Conditional GET; returns a Page that may link to further pages.

        Request-level failures (missing auth, transport, cancellation,
        cache file I/O) are reported on ``Page.error`` instead of raised.
        """
        logger.debug("GET", extra={"url": url})

        key = url_fingerprint(url)
        cached = self.store.get(key)

        try:
            headers = self._auth_headers(use_stable_api)
        except AuthUnavailableError as exc:
            return Page(url=url, error=exc)
        if cached is not None:
            headers.update(conditional_headers(cached.etag, cached.last_modified))

        try:
            response = await self.http.get(url, headers=headers, ctx=ctx)
        except (TransportError, CancellationError) as exc:
            return Page(url=url, error=exc)

        if response.status == 304:
            if cached is None:
                return Page(
                    url=url,
                    status_code=304,
                    error=UnexpectedStatusError(304, url=url),
                )
            self.stats.hits += 1
            logger.debug("Cache hit", extra={"url": url})
            return Page(url=url, content=cached, status_code=304)

        # Cache miss: the old entry goes before anything else happens
        self.stats.misses += 1
        evicted = self.store.remove(key)
        if evicted:
            self.stats.evictions += 1
            logger.debug("Evicted stale cache entry", extra={"url": url})

        try:
            return self._classify(url, key, response, evicted)
        except StorageError as exc:
            return Page(url=url, status_code=response.status, error=exc)

    def _classify(self, url: str, key: str, response: HTTPResponse, evicted: bool) -> Page:
        status = response.status

        if status == 200:
            entry = CacheEntry(
                body=response.body,
                etag=response.header(ETAG_HEADER),
                last_modified=response.header(LAST_MODIFIED_HEADER),
                next_link=parse_next_link(response.header(LINK_HEADER)),
            )
            self._store(key, entry)
            return Page(url=url, content=entry, status_code=status)

        if status == 204:
            entry = CacheEntry(
                body="",
                etag=response.header(ETAG_HEADER),
                last_modified=response.header(LAST_MODIFIED_HEADER),
            )
            self._store(key, entry)
            return Page(url=url, content=entry, status_code=status)

        error: GitHubError
        if status == 404:
            error = NotFoundError(url=url)
        elif status == 403:
            logger.info("Forbidden", extra={"url": url, "status_code": status})
            error = ForbiddenError(url=url)
        elif status == 429:
            error = RateLimitError(
                url=url,
                retry_after=_header_int(response, RETRY_AFTER_HEADER, default=60),
            )
        else:
            error = UnexpectedStatusError(status, url=url)

        if evicted:
            self.store.persist()
        return Page(url=url, status_code=status, error=error)

    def _store(self, key: str, entry: CacheEntry) -> None:
        self.store.put(key, entry)
        self.stats.writes += 1

    # ------------------------------------------------------------------
    # POST / PATCH
    # ------------------------------------------------------------------

    async def post(
        self,
        url: str,
        body: Any,
        ctx: Context | None = None,
        *,
        use_stable_api: bool | None = None,
    ) -> int:
        """HTTP POST of ``body`` as JSON, returning the status code.

        Raises:
            EncodeError: ``body`` is not JSON serializable (nothing is sent)
            TransportError: Network failure
            CancellationError: ``ctx`` finished first
        """
        return await self._send_json("POST", url, body, ctx, use_stable_api)

    async def patch(
        self,
        url: str,
        body: Any,
        ctx: Context | None = None,
        *,
        use_stable_api: bool | None = None,
    ) -> int:
        """HTTP PATCH of ``body`` as JSON, returning the status code."""
        return await self._send_json("PATCH", url, body, ctx, use_stable_api)

    async def _send_json(
        self,
        method: str,
        url: str,
        body: Any,
        ctx: Context | None,
        use_stable_api: bool | None,
    ) -> int:
        headers = self._auth_headers(use_stable_api)
        headers["Content-Type"] = "application/json"

        try:
            data = json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as exc:
            logger.error(
                "Unable to JSON encode the HTTP request body",
                extra={"method": method, "url": url, "error": str(exc)},
            )
            raise EncodeError(f"Unable to JSON encode {method} body: {exc}") from exc

        response = await self.http.request(method, url, headers=headers, data=data, ctx=ctx)
        return response.status

    # ------------------------------------------------------------------
    # Rate limit
    # ------------------------------------------------------------------

    async def rate_limit(self, ctx: Context | None = None) -> APICalls:
        """Remaining / limit API calls for the current token (uncached).

        Counts that are missing or unparseable are ``-1``.
        """
        headers = self._auth_headers(None)
        response = await self.http.get(f"{self.api_url}/rate_limit", headers=headers, ctx=ctx)
        if response.status != 200:
            return APICalls()
        return APICalls(
            remaining=_header_int(response, RATE_LIMIT_REMAINING_HEADER),
            limit=_header_int(response, RATE_LIMIT_LIMIT_HEADER),
        )

    # ------------------------------------------------------------------

    async def close(self) -> None:
        if self._owns_http:
            await self.http.close()

    async def __aenter__(self) -> CachingClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
