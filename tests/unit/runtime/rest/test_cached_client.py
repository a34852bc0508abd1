"""Unit tests for CachingClient.

The HTTP layer is mocked; the cache store is real and backed by a
temporary file so persistence is observable.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hubkit.github.auth import StaticToken, TokenAuth
from hubkit.github.cache import CacheStore, url_fingerprint
from hubkit.github.core import (
    AuthUnavailableError,
    CancellationError,
    EncodeError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    StorageError,
    TransportError,
    UnexpectedStatusError,
)
from hubkit.github.core.config import ClientConfig
from hubkit.github.models import APICalls, CacheEntry, Commit
from hubkit.github.runtime.paging import paginate
from hubkit.github.runtime.rest import CachingClient, HTTPResponse

URL = "https://api.github.com/repos/octo/hello/branches"
NEXT = "https://api.github.com/repositories/1/branches?page=2"


@pytest.fixture
def store(tmp_path):
    return CacheStore(tmp_path / "cache")


@pytest.fixture
def http():
    mock_http = MagicMock()
    mock_http.get = AsyncMock()
    mock_http.request = AsyncMock()
    mock_http.close = AsyncMock()
    return mock_http


@pytest.fixture
def client(store, http):
    return CachingClient(store, TokenAuth(StaticToken("t0k")), http=http)


def _response(status, body="", **headers):
    return HTTPResponse(status=status, headers=headers, body=body, url=URL)


def _seed(store, **fields):
    entry = CacheEntry(**fields)
    store.put(url_fingerprint(URL), entry)
    return entry


class TestConditionalGet:
    @pytest.mark.asyncio
    async def test_first_request_has_no_validators(self, client, http):
        http.get.return_value = _response(200, "[]")

        await client.get(URL)

        headers = http.get.call_args.kwargs["headers"]
        assert headers["Authorization"] == "token t0k"
        assert headers["Accept"] == "application/vnd.github.v3+json"
        assert "If-None-Match" not in headers
        assert "If-Modified-Since" not in headers

    @pytest.mark.asyncio
    async def test_cached_entry_sends_validators(self, client, http, store):
        _seed(store, body="[1]", etag='"abc"', last_modified="Mon, 01 Jan 2024 00:00:00 GMT")
        http.get.return_value = _response(304)

        await client.get(URL)

        headers = http.get.call_args.kwargs["headers"]
        assert headers["If-None-Match"] == '"abc"'
        assert headers["If-Modified-Since"] == "Mon, 01 Jan 2024 00:00:00 GMT"

    @pytest.mark.asyncio
    async def test_preview_media_type(self, client, http):
        http.get.return_value = _response(200, "[]")
        await client.get(URL, use_stable_api=False)
        assert http.get.call_args.kwargs["headers"]["Accept"] == (
            "application/vnd.github.korra-preview"
        )


class TestNotModified:
    @pytest.mark.asyncio
    async def test_304_serves_cached_entry(self, client, http, store):
        entry = _seed(store, body='[{"name": "main"}]', etag='"abc"', next_link=NEXT)
        http.get.return_value = _response(304)

        with patch.object(store, "persist") as persist:
            page = await client.get(URL)

        assert page.error is None
        assert page.status_code == 304
        assert page.content == entry
        assert page.content.next_link == NEXT
        persist.assert_not_called()
        assert client.stats.hits == 1
        assert client.stats.misses == 0

    @pytest.mark.asyncio
    async def test_304_without_entry_is_unexpected(self, client, http):
        http.get.return_value = _response(304)

        page = await client.get(URL)

        assert isinstance(page.error, UnexpectedStatusError)
        assert page.error.status_code == 304
        assert page.content is None


class TestSuccess:
    @pytest.mark.asyncio
    async def test_200_is_stored_and_persisted(self, client, http, store):
        link = f'<{NEXT}>; rel="next", <{NEXT}9>; rel="last"'
        http.get.return_value = _response(
            200,
            '[{"name": "main"}]',
            ETag='"v2"',
            **{"Last-Modified": "lm", "Link": link},
        )

        page = await client.get(URL)

        assert page.error is None
        assert page.status_code == 200
        assert page.content.body == '[{"name": "main"}]'
        assert page.content.next_link == NEXT
        assert not page.is_last()

        stored = CacheStore(store.path).get(url_fingerprint(URL))
        assert stored == CacheEntry(
            body='[{"name": "main"}]', etag='"v2"', last_modified="lm", next_link=NEXT
        )
        assert client.stats.writes == 1

    @pytest.mark.asyncio
    async def test_200_replaces_stale_entry(self, client, http, store):
        _seed(store, body="[1]", etag='"old"')
        http.get.return_value = _response(200, "[2]", ETag='"new"')

        page = await client.get(URL)

        assert page.content.body == "[2]"
        assert store.get(url_fingerprint(URL)).etag == '"new"'
        assert client.stats.evictions == 1

    @pytest.mark.asyncio
    async def test_200_without_link_is_last_page(self, client, http):
        http.get.return_value = _response(200, "[1]")
        page = await client.get(URL)
        assert page.is_last()

    @pytest.mark.asyncio
    async def test_204_stores_empty_body(self, client, http, store):
        http.get.return_value = _response(204)

        page = await client.get(URL)

        assert page.error is None
        assert page.status_code == 204
        assert page.content.body == ""
        assert page.no_content()
        assert store.get(url_fingerprint(URL)).body == ""


class TestErrorStatuses:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "error_type"),
        [(404, NotFoundError), (403, ForbiddenError), (500, UnexpectedStatusError)],
    )
    async def test_error_page(self, client, http, status, error_type):
        http.get.return_value = _response(status, '{"message": "nope"}')

        page = await client.get(URL)

        assert isinstance(page.error, error_type)
        assert page.error.status_code == status
        assert page.status_code == status
        assert page.content is None
        assert page.is_last()

    @pytest.mark.asyncio
    async def test_429_carries_retry_after(self, client, http):
        http.get.return_value = _response(429, **{"Retry-After": "17"})

        page = await client.get(URL)

        assert isinstance(page.error, RateLimitError)
        assert page.error.retry_after == 17

    @pytest.mark.asyncio
    async def test_error_status_evicts_and_persists(self, client, http, store):
        _seed(store, body="[1]", etag='"abc"')
        http.get.return_value = _response(404)

        await client.get(URL)

        assert store.get(url_fingerprint(URL)) is None
        assert url_fingerprint(URL) not in CacheStore(store.path)

    @pytest.mark.asyncio
    async def test_error_status_without_entry_does_not_write(self, client, http, store):
        http.get.return_value = _response(500)

        with patch.object(store, "persist") as persist:
            await client.get(URL)

        persist.assert_not_called()


class TestEvictionBeforeWrite:
    @pytest.mark.asyncio
    async def test_failed_write_never_exposes_old_validators(self, client, http, store):
        _seed(store, body="[1]", etag='"old"')
        http.get.return_value = _response(200, "[2]", ETag='"new"')

        with patch.object(store, "persist", side_effect=StorageError("disk full")):
            page = await client.get(URL)

        assert isinstance(page.error, StorageError)
        assert page.status_code == 200
        entry = store.get(url_fingerprint(URL))
        assert entry is None or entry.etag == '"new"'

    @pytest.mark.asyncio
    async def test_failed_put_leaves_no_entry(self, client, http, store):
        _seed(store, body="[1]", etag='"old"')
        http.get.return_value = _response(200, "[2]", ETag='"new"')

        with patch.object(store, "put", side_effect=StorageError("disk full")):
            page = await client.get(URL)

        assert isinstance(page.error, StorageError)
        assert store.get(url_fingerprint(URL)) is None


class TestRequestFailures:
    @pytest.mark.asyncio
    async def test_auth_unavailable(self, store, http):
        client = CachingClient(store, None, http=http)

        page = await client.get(URL)

        assert isinstance(page.error, AuthUnavailableError)
        http.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error(self, client, http, store):
        _seed(store, body="[1]", etag='"abc"')
        http.get.side_effect = TransportError("refused", url=URL)

        page = await client.get(URL)

        assert isinstance(page.error, TransportError)
        assert page.status_code == 0
        assert store.get(url_fingerprint(URL)) is not None

    @pytest.mark.asyncio
    async def test_cancellation(self, client, http):
        http.get.side_effect = CancellationError("Context cancelled")

        page = await client.get(URL)

        assert isinstance(page.error, CancellationError)
        assert not isinstance(page.error, TransportError)


class TestWrites:
    @pytest.mark.asyncio
    async def test_post_sends_json(self, client, http, store):
        http.request.return_value = _response(201)

        status = await client.post(URL, {"body": "hello"})

        assert status == 201
        args, kwargs = http.request.call_args
        assert args == ("POST", URL)
        assert json.loads(kwargs["data"]) == {"body": "hello"}
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["Authorization"] == "token t0k"
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_patch_returns_error_status_unraised(self, client, http):
        http.request.return_value = _response(422)

        status = await client.patch(URL, {"body": "x"})

        assert status == 422
        assert http.request.call_args.args[0] == "PATCH"

    @pytest.mark.asyncio
    async def test_unencodable_body(self, client, http):
        with pytest.raises(EncodeError):
            await client.post(URL, {"when": object()})
        http.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_post_without_auth_raises(self, store, http):
        client = CachingClient(store, None, http=http)
        with pytest.raises(AuthUnavailableError):
            await client.post(URL, {})

    @pytest.mark.asyncio
    async def test_post_transport_error_raises(self, client, http):
        http.request.side_effect = TransportError("refused")
        with pytest.raises(TransportError):
            await client.post(URL, {})


class TestRateLimit:
    @pytest.mark.asyncio
    async def test_parses_headers(self, client, http):
        http.get.return_value = _response(
            200, "{}", **{"X-RateLimit-Remaining": "4999", "X-RateLimit-Limit": "5000"}
        )

        calls = await client.rate_limit()

        assert calls == APICalls(remaining=4999, limit=5000)
        assert calls.known
        assert http.get.call_args.args[0] == "https://api.github.com/rate_limit"

    @pytest.mark.asyncio
    async def test_missing_and_garbage_headers(self, client, http):
        http.get.return_value = _response(200, "{}", **{"X-RateLimit-Remaining": "lots"})

        calls = await client.rate_limit()

        assert calls.remaining == -1
        assert calls.limit == -1
        assert not calls.known

    @pytest.mark.asyncio
    async def test_non_200(self, client, http):
        http.get.return_value = _response(401)
        assert await client.rate_limit() == APICalls()

    @pytest.mark.asyncio
    async def test_not_cached(self, client, http, store):
        http.get.return_value = _response(200, "{}")
        await client.rate_limit()
        assert len(store) == 0


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_close_injected_http_is_left_open(self, client, http):
        await client.close()
        http.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_owned_http(self, store):
        client = CachingClient(store, None)
        client.http.close = AsyncMock()
        async with client:
            pass
        client.http.close.assert_awaited_once()


class TestMediaTypeDefault:
    @pytest.fixture
    def preview_client(self, tmp_path, http):
        config = ClientConfig(cache_path=str(tmp_path / "cache"), use_stable_api=False)
        client = CachingClient.from_config(config, TokenAuth(StaticToken("t0k")))
        client.http = http
        return client

    @pytest.mark.asyncio
    async def test_config_selects_preview_for_get(self, preview_client, http):
        http.get.return_value = _response(200, "[]")

        await preview_client.get(URL)

        assert http.get.call_args.kwargs["headers"]["Accept"] == (
            "application/vnd.github.korra-preview"
        )

    @pytest.mark.asyncio
    async def test_explicit_choice_overrides_default(self, preview_client, http):
        http.get.return_value = _response(200, "[]")

        await preview_client.get(URL, use_stable_api=True)

        assert http.get.call_args.kwargs["headers"]["Accept"] == "application/vnd.github.v3+json"

    @pytest.mark.asyncio
    async def test_config_selects_preview_for_writes(self, preview_client, http):
        http.request.return_value = _response(201)

        await preview_client.post(URL, {"body": "x"})
        await preview_client.patch(URL, {"body": "y"})

        for call in http.request.call_args_list:
            assert call.kwargs["headers"]["Accept"] == "application/vnd.github.korra-preview"

    @pytest.mark.asyncio
    async def test_listings_follow_client_default(self, preview_client, http):
        http.get.return_value = _response(200, '[{"sha": "a"}]')

        await paginate(preview_client, URL, Commit).to_list()

        assert http.get.call_args.kwargs["headers"]["Accept"] == (
            "application/vnd.github.korra-preview"
        )

    def test_default_is_stable(self, client):
        assert client.use_stable_api is True


class TestPaginationThroughCache:
    @pytest.mark.asyncio
    async def test_revalidated_first_page_links_to_fresh_second_page(self, client, http, store):
        _seed(store, body='[{"sha": "1"}, {"sha": "2"}]', etag='"e1"', next_link=NEXT)

        async def answer(url, *, headers, ctx):
            if url == URL:
                assert headers["If-None-Match"] == '"e1"'
                return _response(304)
            assert url == NEXT
            assert "If-None-Match" not in headers
            return HTTPResponse(
                status=200, headers={"ETag": '"e2"'}, body='[{"sha": "3"}]', url=url
            )

        http.get.side_effect = answer

        commits = paginate(client, URL, Commit)
        shas = [commit.sha async for commit in commits]

        assert shas == ["1", "2", "3"]
        assert [call.args[0] for call in http.get.call_args_list] == [URL, NEXT]
        assert client.stats.hits == 1
        assert client.stats.writes == 1

        reloaded = CacheStore(store.path)
        assert reloaded.get(url_fingerprint(URL)).etag == '"e1"'
        assert reloaded.get(url_fingerprint(URL)).next_link == NEXT
        assert reloaded.get(url_fingerprint(NEXT)).etag == '"e2"'
