"""Fixtures for the resource API tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from hubkit.github.api import GitHubAPI

API = "https://api.github.com"
REPO = f"{API}/repos/octo/hello"


@pytest.fixture
def client(fake_client):
    """Fake page client extended with the write side of CachingClient."""
    fake_client.api_url = API
    fake_client.post = AsyncMock(return_value=201)
    fake_client.patch = AsyncMock(return_value=200)
    fake_client.rate_limit = AsyncMock()
    fake_client.close = AsyncMock()
    return fake_client


@pytest.fixture
def api(client):
    return GitHubAPI(client)


@pytest.fixture
def repo(api):
    return api.repository("octo", "hello")
