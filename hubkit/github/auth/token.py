"""Token providers."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from ..core.constants import TOKEN_ENV
from ..core.exceptions import ConfigurationError


@runtime_checkable
class TokenProvider(Protocol):
    """Anything that can hand out a GitHub token."""

    def token(self) -> str: ...


class StaticToken:
    """Token given explicitly by the caller."""

    def __init__(self, value: str) -> None:
        value = value.strip()
        if not value:
            raise ConfigurationError("GitHub token must not be empty")
        self._value = value

    def token(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return "StaticToken(<redacted>)"


class EnvToken:
    """Token read once from an environment variable.

    Raises:
        ConfigurationError: The variable is unset or blank
    """

    def __init__(
        self,
        var: str = TOKEN_ENV,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        env = os.environ if environ is None else environ
        value = env.get(var, "").strip()
        if not value:
            raise ConfigurationError(f"Please set the {var} env var")
        self.var = var
        self._value = value

    def token(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"EnvToken(var={self.var!r})"
