"""Persistent fingerprint -> CacheEntry store.

Architecture:
    The store keeps the validators (etag, last-modified) and body of every
    successful GET, keyed by a fingerprint of the *request*. It is loaded
    once when constructed and written through on every mutation: the whole
    map is serialized as one JSON document and atomically swapped in place
    of the previous file.

Concurrency:
    Not safe for concurrent mutation from several threads. Inside one event
    loop every operation is synchronous, so a single CachingClient driving
    the store serializes access naturally; sharing a store across threads
    needs an external lock.
"""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..core.config import resolve_cache_path
from ..core.exceptions import StorageError
from ..models import CacheEntry

logger = logging.getLogger(__name__)

CACHE_FORMAT_VERSION = 1


class _CacheDocument(BaseModel):
    """On-disk layout of the cache file."""

    version: int = CACHE_FORMAT_VERSION
    entries: dict[str, CacheEntry] = {}

    model_config = ConfigDict(frozen=True)


def fingerprint(parts: Iterable[tuple[str, str]]) -> str:
    """Digest of an ordered sequence of (name, value) request fields.

    Names and values are concatenated in order, so reordering the same pairs
    yields a different fingerprint.
    """
    digest = hashlib.sha256()
    for name, value in parts:
        digest.update(name.encode("utf-8"))
        digest.update(value.encode("utf-8"))
    return digest.hexdigest()


def url_fingerprint(url: str) -> str:
    return fingerprint([("url", url)])


class CacheStore:
    """Durable key-value cache of prior response metadata.

    Example:
        >>> store = CacheStore("/tmp/.github-cache")
        >>> store.put(url_fingerprint(url), CacheEntry(body="[]", etag='"abc"'))
        >>> store.get(url_fingerprint(url)).etag
        '"abc"'
    """

    def __init__(self, path: str | os.PathLike[str], *, load: bool = True) -> None:
        """Create the store and load it from ``path``.

        Args:
            path: Backing file. It does not need to exist yet.
            load: Read the file now (default). Set False for a fresh store.

        Raises:
            StorageError: File exists but cannot be read or parsed
        """
        self.path = str(path)
        self._entries: dict[str, CacheEntry] = {}
        if load:
            self.load()

    @classmethod
    def from_env(cls) -> CacheStore:
        """Store at ``$GITHUB_CACHE_FILE`` (default ``.github-cache`` in the cwd)."""
        path = resolve_cache_path()
        logger.info("Using cache file", extra={"path": path})
        return cls(path)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def entries(self) -> dict[str, CacheEntry]:
        """Snapshot of the in-memory map."""
        return dict(self._entries)

    def load(self) -> None:
        """Replace the in-memory map with the file's content.

        A missing file yields an empty store; it is created on first persist.
        """
        path = Path(self.path)
        if not path.exists():
            logger.debug("Cache file does not exist yet", extra={"path": self.path})
            self._entries = {}
            return

        try:
            raw = path.read_bytes()
        except OSError as exc:
            logger.error("Unable to read cache file", extra={"path": self.path, "error": str(exc)})
            raise StorageError(f"Unable to read cache file: {exc}", path=self.path) from exc

        try:
            document = _CacheDocument.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.error("Unable to decode cache file", extra={"path": self.path})
            raise StorageError(f"Unable to decode cache file {self.path}", path=self.path) from exc

        if document.version != CACHE_FORMAT_VERSION:
            raise StorageError(
                f"Unsupported cache file version {document.version}", path=self.path
            )

        self._entries = dict(document.entries)
        logger.debug("Loaded cache file", extra={"path": self.path, "entries": len(self._entries)})

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry, *, persist: bool = True) -> None:
        """Insert or replace the entry for ``key``.

        Raises:
            StorageError: ``persist`` is set and the file cannot be written
        """
        self._entries[key] = entry
        if persist:
            self.persist()

    def remove(self, key: str) -> bool:
        """Drop the entry for ``key``; returns False when there was none."""
        return self._entries.pop(key, None) is not None

    def persist(self) -> None:
        """Overwrite the backing file with the full in-memory map.

        Raises:
            StorageError: The file cannot be written
        """
        document = _CacheDocument(entries=self._entries)
        payload = document.model_dump_json()

        directory = os.path.dirname(self.path) or "."
        tmp_path: str | None = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=".tmp-", suffix=".cache", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as exc:
            logger.error("Unable to save cache data", extra={"path": self.path, "error": str(exc)})
            raise StorageError(f"Unable to save cache data: {exc}", path=self.path) from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
