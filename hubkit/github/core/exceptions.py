"""Custom exception hierarchy."""

from __future__ import annotations


class GitHubError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(GitHubError):
    """Required configuration (credential, path, setting) is missing or invalid."""

    pass


class AuthUnavailableError(ConfigurationError):
    """No auth header provider has been configured for the client."""

    pass


class TransportError(GitHubError):
    """Network level failure (DNS, refused connection, socket timeout).

    Never retried by the library; retry policy belongs to the caller.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class CancellationError(GitHubError):
    """The caller's context was cancelled while a request was outstanding."""

    pass


class DeadlineExceededError(CancellationError):
    """The caller's context deadline passed while a request was outstanding."""

    pass


class HTTPStatusError(GitHubError):
    """Response carried a status code the caller has to act on."""

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NotFoundError(HTTPStatusError):
    """Resource does not exist (404)."""

    def __init__(self, message: str = "Not found", url: str | None = None) -> None:
        super().__init__(message, status_code=404, url=url)


class ForbiddenError(HTTPStatusError):
    """Access to the resource is refused (403)."""

    def __init__(self, message: str = "Forbidden", url: str | None = None) -> None:
        super().__init__(message, status_code=403, url=url)


class UnexpectedStatusError(HTTPStatusError):
    """Any status code the client does not handle explicitly."""

    def __init__(self, status_code: int, url: str | None = None) -> None:
        super().__init__(
            f"HTTP request returned status code {status_code}",
            status_code=status_code,
            url=url,
        )


class RateLimitError(UnexpectedStatusError):
    """Rate limit exceeded (429)."""

    def __init__(self, url: str | None = None, retry_after: int = 60) -> None:
        super().__init__(429, url=url)
        self.retry_after = retry_after


class StorageError(GitHubError):
    """Cache file exists but cannot be read, parsed or written."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class DecodeError(GitHubError):
    """Response or cached body is not valid JSON of the expected shape."""

    pass


class EncodeError(GitHubError):
    """Request body could not be serialized to JSON."""

    pass


class DuplicateStatusError(GitHubError):
    """The commit already carries an identical status."""

    pass
