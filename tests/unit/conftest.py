"""Shared fixtures for unit tests."""

from __future__ import annotations

import json

import pytest

from hubkit.github.core import Context
from hubkit.github.models import CacheEntry, Page

BASE = "https://api.github.com/repos/octo/hello/commits"


class FakePageClient:
    """Serves canned pages by URL and records every GET."""

    def __init__(self, pages: dict[str, Page] | None = None) -> None:
        self.pages = dict(pages or {})
        self.calls: list[str] = []
        self.before_get = None

    def add(self, url: str, items=None, *, body: str | None = None, next_link: str = "", status: int = 200):
        if body is None:
            body = json.dumps(items if items is not None else [])
        self.pages[url] = Page(
            url=url,
            content=CacheEntry(body=body, next_link=next_link),
            status_code=status,
        )

    def add_error(self, url: str, error, status: int = 0):
        self.pages[url] = Page(url=url, status_code=status, error=error)

    async def get(self, url: str, ctx: Context | None = None, *, use_stable_api: bool | None = None) -> Page:
        self.calls.append(url)
        if self.before_get is not None:
            await self.before_get(url)
        if ctx is not None and ctx.done():
            return Page(url=url, error=ctx.err())
        return self.pages[url]


def _page_url(n: int) -> str:
    return BASE if n == 1 else f"{BASE}?page={n}"


@pytest.fixture
def page_url():
    """Builds the URL of the n-th page of the canned listing."""
    return _page_url


@pytest.fixture
def fake_client():
    return FakePageClient()


@pytest.fixture
def three_pages(fake_client):
    """Three linked pages of two commits each."""
    for n in (1, 2, 3):
        items = [{"sha": f"{n}a"}, {"sha": f"{n}b"}]
        fake_client.add(_page_url(n), items, next_link=_page_url(n + 1) if n < 3 else "")
    return fake_client
