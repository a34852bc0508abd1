"""Runtime components: HTTP transport, caching client and paging."""

from .paging import PagedSequence, PageIterator, paginate
from .rest import CachingClient, HTTPClient

__all__ = [
    "CachingClient",
    "HTTPClient",
    "PageIterator",
    "PagedSequence",
    "paginate",
]
