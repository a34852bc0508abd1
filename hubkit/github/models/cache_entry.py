"""Cache entry model."""

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """Raw response body plus the validators needed to revalidate it.

    Entries are immutable; the store replaces them as a whole.
    """

    body: str = ""
    etag: str = ""
    last_modified: str = ""
    next_link: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def empty(self) -> bool:
        """True when the body carries no results ("" or an empty JSON array)."""
        return self.body in ("", "[]")
