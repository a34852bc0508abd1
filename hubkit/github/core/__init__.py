"""Core components."""

from .config import ClientConfig, resolve_cache_path
from .context import Context
from .exceptions import (
    AuthUnavailableError,
    CancellationError,
    ConfigurationError,
    DeadlineExceededError,
    DecodeError,
    DuplicateStatusError,
    EncodeError,
    ForbiddenError,
    GitHubError,
    HTTPStatusError,
    NotFoundError,
    RateLimitError,
    StorageError,
    TransportError,
    UnexpectedStatusError,
)

__all__ = [
    "ClientConfig",
    "Context",
    "resolve_cache_path",
    # Exceptions
    "GitHubError",
    "ConfigurationError",
    "AuthUnavailableError",
    "TransportError",
    "CancellationError",
    "DeadlineExceededError",
    "HTTPStatusError",
    "NotFoundError",
    "ForbiddenError",
    "UnexpectedStatusError",
    "RateLimitError",
    "StorageError",
    "DecodeError",
    "EncodeError",
    "DuplicateStatusError",
]
