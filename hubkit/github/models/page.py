"""Page model: the transient result of one HTTP GET."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import GitHubError
from .cache_entry import CacheEntry


@dataclass
class Page:
    """One page of results.

    Not persisted; consumed immediately by the paging layer. Either
    ``content`` or ``error`` is set, never both.
    """

    url: str
    content: CacheEntry | None = None
    status_code: int = 0
    error: GitHubError | None = None

    def no_content(self) -> bool:
        return self.content is None or self.content.empty

    def is_last(self) -> bool:
        """True when no further page follows this one."""
        return self.no_content() or not self.content.next_link  # type: ignore[union-attr]

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def __str__(self) -> str:
        return f"{self.url}:{self.status_code} -- is_last? {self.is_last()}"
