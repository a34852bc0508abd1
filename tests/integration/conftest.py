"""Shared fixtures for integration tests."""

import os

import pytest
import pytest_asyncio

from hubkit.github import GitHubAPI

# Skip all integration tests unless RUN_HUBKIT_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_HUBKIT_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_HUBKIT_NETWORK_TESTS=1 to run",
)


@pytest_asyncio.fixture
async def api(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_CACHE_FILE", str(tmp_path / "cache"))
    async with GitHubAPI.from_env() as github:
        yield github
