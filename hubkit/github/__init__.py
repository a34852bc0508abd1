"""Hubkit GitHub - cache-backed, paginating GitHub REST client."""

from .api import GitHubAPI, Repository
from .auth import EnvToken, StaticToken, TokenAuth
from .cache import CacheStore
from .core import (
    AuthUnavailableError,
    CancellationError,
    ClientConfig,
    ConfigurationError,
    Context,
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
from .models import (
    APICalls,
    Branch,
    CacheEntry,
    Commit,
    CommitStatus,
    Issue,
    IssueComment,
    Organisation,
    Page,
    PullRequest,
    Team,
    TeamMember,
    User,
)
from .runtime import CachingClient, HTTPClient, PagedSequence, PageIterator, paginate

__version__ = "0.1.0"

__all__ = [
    # API
    "GitHubAPI",
    "Repository",
    # Runtime
    "CachingClient",
    "HTTPClient",
    "PageIterator",
    "PagedSequence",
    "paginate",
    # Auth and config
    "CacheStore",
    "ClientConfig",
    "Context",
    "EnvToken",
    "StaticToken",
    "TokenAuth",
    # Models
    "APICalls",
    "Branch",
    "CacheEntry",
    "Commit",
    "CommitStatus",
    "Issue",
    "IssueComment",
    "Organisation",
    "Page",
    "PullRequest",
    "Team",
    "TeamMember",
    "User",
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
