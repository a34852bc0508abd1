"""Structured logging for paging operations.

This module provides telemetry hooks for the page iterator and typed
sequences, emitting structured logs for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    url: str,
    status_code: int,
    page_index: int,
    has_next: bool,
) -> None:
    """Log one fetched page.

    Args:
        url: Page URL
        status_code: HTTP status (304 for pages served from the cache)
        page_index: Zero-based index of the page within its listing
        has_next: Whether a continuation link was present
    """
    logger.debug(
        "page_fetched",
        extra={
            "url": url,
            "status_code": status_code,
            "page_index": page_index,
            "has_next": has_next,
            "from_cache": status_code == 304,
        },
    )


def log_sequence_exhausted(*, start_url: str, pages_loaded: int, items_yielded: int) -> None:
    logger.debug(
        "page_sequence_exhausted",
        extra={
            "start_url": start_url,
            "pages_loaded": pages_loaded,
            "items_yielded": items_yielded,
        },
    )


def log_sequence_failed(*, start_url: str, error: BaseException) -> None:
    """Log the error that put a sequence into its failed state.

    Args:
        start_url: First URL of the listing
        error: Sticky error recorded on the sequence
    """
    logger.error(
        "page_sequence_failed",
        extra={
            "start_url": start_url,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "status_code": getattr(error, "status_code", None),
        },
    )


def log_decode_failed(*, url: str, item_type: str, error: BaseException, lenient: bool) -> None:
    logger.log(
        logging.WARNING if lenient else logging.ERROR,
        "page_decode_failed",
        extra={
            "url": url,
            "item_type": item_type,
            "error_message": str(error),
            "lenient": lenient,
        },
    )
