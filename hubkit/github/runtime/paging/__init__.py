"""Generic paging layer.

Architecture:
    The paging layer consists of:
    - iterator.py: PageIterator, the cursor over one listing's pages
    - sequence.py: PagedSequence[T], the typed one-item-at-a-time projection
    - telemetry.py: Structured logging

Usage:
    Resource listings call ``paginate(client, url, ItemModel)`` and hand the
    resulting lazy sequence to the caller.
"""

from __future__ import annotations

from .iterator import IteratorState, PageGetter, PageIterator
from .sequence import Decoder, PagedSequence, json_array_decoder, paginate

__all__ = [
    "Decoder",
    "IteratorState",
    "PageGetter",
    "PageIterator",
    "PagedSequence",
    "json_array_decoder",
    "paginate",
]
