"""Pagination continuation parsing from the ``Link`` response header.

The header value is built from one or more comma-separated terms like::

    <https://api.github.com/user/repos?page=3&per_page=100>; rel="next"
"""

from __future__ import annotations

NEXT_RELATION = 'rel="next"'


def parse_next_link(header: str) -> str:
    """URL of the ``rel="next"`` descriptor, or "" on the last (or only) page.

    The relation must be exactly ``next``, quoted and lowercase.
    """
    if not header:
        return ""

    for descriptor in header.split(","):
        url_part, sep, params = descriptor.partition(";")
        if not sep:
            continue
        if any(param.strip() == NEXT_RELATION for param in params.split(";")):
            url = url_part.strip().strip("<>").strip()
            if url:
                return url
    return ""
