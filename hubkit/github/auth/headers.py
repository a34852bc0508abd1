"""HTTP headers pertaining to authorisation and conditional requests."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from ..core.constants import (
    IF_MODIFIED_SINCE_HEADER,
    IF_NONE_MATCH_HEADER,
    PREVIEW_MEDIA_TYPE,
    STABLE_MEDIA_TYPE,
)
from ..core.exceptions import AuthUnavailableError
from .token import TokenProvider

# Given the "use stable API" flag, returns header name -> value
HeaderProvider = Callable[[bool], Mapping[str, str]]


def auth_headers(provider: TokenProvider | None, use_stable_api: bool = True) -> dict[str, str]:
    """Accept and Authorization headers for ``provider``'s token.

    Raises:
        AuthUnavailableError: No provider configured
    """
    if provider is None:
        raise AuthUnavailableError("Cannot build auth headers without a token provider")

    accept = STABLE_MEDIA_TYPE if use_stable_api else PREVIEW_MEDIA_TYPE
    return {"Accept": accept, "Authorization": f"token {provider.token()}"}


def conditional_headers(etag: str = "", last_modified: str = "") -> dict[str, str]:
    headers: dict[str, str] = {}
    if etag:
        headers[IF_NONE_MATCH_HEADER] = etag
    if last_modified:
        headers[IF_MODIFIED_SINCE_HEADER] = last_modified
    return headers


class TokenAuth:
    """Header provider backed by a TokenProvider.

    Example:
        >>> auth = TokenAuth(EnvToken())
        >>> auth(True)["Accept"]
        'application/vnd.github.v3+json'
    """

    def __init__(self, provider: TokenProvider | None) -> None:
        self.provider = provider

    def __call__(self, use_stable_api: bool = True) -> dict[str, str]:
        return auth_headers(self.provider, use_stable_api)
