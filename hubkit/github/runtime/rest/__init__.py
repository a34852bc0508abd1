"""REST runtime abstractions."""

from .cached_client import CacheStats, CachingClient
from .http_client import HTTPClient, HTTPResponse
from .links import parse_next_link

__all__ = [
    "CacheStats",
    "CachingClient",
    "HTTPClient",
    "HTTPResponse",
    "parse_next_link",
]
