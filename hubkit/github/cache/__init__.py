"""Persistent HTTP cache."""

from .store import CacheStore, fingerprint, url_fingerprint

__all__ = ["CacheStore", "fingerprint", "url_fingerprint"]
