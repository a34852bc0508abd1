"""Authorisation: token providers and request headers."""

from .headers import HeaderProvider, TokenAuth, auth_headers, conditional_headers
from .token import EnvToken, StaticToken, TokenProvider

__all__ = [
    "EnvToken",
    "HeaderProvider",
    "StaticToken",
    "TokenAuth",
    "TokenProvider",
    "auth_headers",
    "conditional_headers",
]
