"""URL builders for the GitHub REST resources the library exposes."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode


def join_url(base: str, *parts: str | int) -> str:
    """Append path segments to ``base`` (segments are percent-encoded)."""
    url = base.rstrip("/")
    for part in parts:
        url = f"{url}/{quote(str(part).strip('/'), safe='/')}"
    return url


def with_query(url: str, params: dict[str, Any]) -> str:
    query = urlencode({key: value for key, value in params.items() if value is not None})
    return f"{url}?{query}" if query else url


def repo_url(api_url: str, owner: str, name: str) -> str:
    return join_url(api_url, "repos", owner, name)


def organisation_url(api_url: str, name: str) -> str:
    return join_url(api_url, "orgs", name)

