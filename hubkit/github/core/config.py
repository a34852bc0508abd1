"""Client configuration resolved from explicit values or the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .constants import (
    API_URL,
    API_URL_ENV,
    CACHE_FILE_ENV,
    DEFAULT_CACHE_FILE,
    DEFAULT_HTTP_TIMEOUT,
    HTTP_TIMEOUT_ENV,
)
from .exceptions import ConfigurationError


def resolve_cache_path(environ: Mapping[str, str] | None = None) -> str:
    """Absolute cache file path: ``$GITHUB_CACHE_FILE`` or ``.github-cache`` in the cwd."""
    env = os.environ if environ is None else environ
    path = env.get(CACHE_FILE_ENV) or DEFAULT_CACHE_FILE
    return str(Path(path).expanduser().absolute())


@dataclass(frozen=True)
class ClientConfig:
    api_url: str = API_URL
    cache_path: str = DEFAULT_CACHE_FILE
    timeout: float = DEFAULT_HTTP_TIMEOUT
    use_stable_api: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (tests)

        Raises:
            ConfigurationError: ``GITHUB_HTTP_TIMEOUT`` is not a positive number
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get(HTTP_TIMEOUT_ENV)
        timeout = DEFAULT_HTTP_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{HTTP_TIMEOUT_ENV} must be a number, got {raw_timeout!r}"
                ) from exc
            if timeout <= 0:
                raise ConfigurationError(f"{HTTP_TIMEOUT_ENV} must be positive")

        return cls(
            api_url=(env.get(API_URL_ENV) or API_URL).rstrip("/"),
            cache_path=resolve_cache_path(env),
            timeout=timeout,
        )
