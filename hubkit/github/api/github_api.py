"""GitHubAPI facade over the caching client and the paging layer.

Architecture:
    GitHubAPI is the single entry point for callers. It owns a CachingClient
    and exposes:
    - listing(): lazy typed listings (PagedSequence[T]) for any endpoint
    - fetch(): one cached GET decoded into a model
    - organisation, team, comment, status and pull request operations
    - repository(): Repository handles for per-repository operations

Design Decisions:
    - Facade over direct client use so callers never see Page or CacheEntry
    - Client injection allows testing with a mocked CachingClient
    - Context manager pattern ensures the HTTP session is closed
    - Mutating operations (comments, statuses) return the HTTP status code
      and leave interpretation to the caller, as GitHub's answers vary

See Also:
    - CachingClient: Conditional GETs and the persistent cache
    - PagedSequence: The typed lazy listing
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..auth import EnvToken, TokenAuth
from ..core.config import ClientConfig
from ..core.context import Context
from ..core.exceptions import DecodeError, DuplicateStatusError, NotFoundError
from ..models import (
    APICalls,
    Commit,
    CommitStatus,
    Issue,
    IssueComment,
    Organisation,
    PullRequest,
    Team,
    TeamMember,
)
from ..runtime.paging import PagedSequence, paginate
from ..runtime.rest import CachingClient
from .endpoints import join_url, organisation_url
from .repository import Repository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GitHubAPI:
    """High-level, cache-backed access to the GitHub REST API.

    Example:
        >>> async with GitHubAPI.from_env() as api:
        ...     repo = api.repository("python", "cpython")
        ...     async for pull in repo.pulls("main"):
        ...         print(pull)
        ...     print(await api.rate_limit())
    """

    def __init__(self, client: CachingClient, *, lenient_decode: bool = False) -> None:
        """Initialize the facade.

        Args:
            client: Caching client every request goes through
            lenient_decode: Listings treat an undecodable page as the end of
                the results instead of failing with DecodeError
        """
        self.client = client
        self._lenient_decode = lenient_decode

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **kwargs: Any) -> GitHubAPI:
        """Build an API from GITHUB_TOKEN, GITHUB_CACHE_FILE and friends.

        Raises:
            ConfigurationError: GITHUB_TOKEN is unset or a setting is invalid
        """
        config = ClientConfig.from_env(environ)
        auth = TokenAuth(EnvToken(environ=environ))
        return cls(CachingClient.from_config(config, auth), **kwargs)

    @property
    def api_url(self) -> str:
        return self.client.api_url

    # ------------------------------------------------------------------
    # Generic access
    # ------------------------------------------------------------------

    def listing(self, url: str, item_type: type[T]) -> PagedSequence[T]:
        """Lazy listing of ``item_type`` starting at ``url``."""
        return paginate(self.client, url, item_type, lenient_decode=self._lenient_decode)

    async def fetch(self, url: str, item_type: type[T], ctx: Context | None = None) -> T:
        """GET ``url`` and decode its body into ``item_type``.

        Raises:
            NotFoundError, ForbiddenError, UnexpectedStatusError: Error status
            TransportError, CancellationError, StorageError: Request failure
            DecodeError: Body does not describe an ``item_type``
        """
        page = await self.client.get(url, ctx)
        page.raise_for_error()
        body = page.content.body if page.content is not None else ""
        try:
            return TypeAdapter(item_type).validate_json(body)
        except PydanticValidationError as exc:
            logger.error(
                "Unable to decode response",
                extra={"url": url, "item_type": getattr(item_type, "__name__", str(item_type))},
            )
            raise DecodeError(f"Unable to parse JSON from {url}: {exc.error_count()} error(s)") from exc

    async def rate_limit(self, ctx: Context | None = None) -> APICalls:
        return await self.client.rate_limit(ctx)

    def repository(self, owner: str, name: str) -> Repository:
        return Repository(self, owner, name)

    def repository_from_path(self, path: str) -> Repository:
        """Repository handle from an ``owner/name`` string.

        Raises:
            ValueError: ``path`` is not exactly two non-empty segments
        """
        parts = path.strip().strip("/").split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Repository path must look like 'owner/name', got {path!r}")
        return Repository(self, parts[0], parts[1])

    # ------------------------------------------------------------------
    # Organisations and teams
    # ------------------------------------------------------------------

    async def organisation(self, name: str, ctx: Context | None = None) -> Organisation:
        return await self.fetch(organisation_url(self.api_url, name), Organisation, ctx)

    def teams(self, organisation: Organisation) -> PagedSequence[Team]:
        return self.listing(join_url(organisation.url, "teams"), Team)

    def team_members(self, team: Team) -> PagedSequence[TeamMember]:
        return self.listing(join_url(team.url, "members"), TeamMember)

    async def is_team_member(self, team: Team, login: str, ctx: Context | None = None) -> bool:
        """True when ``login`` has a membership (active or pending) in ``team``."""
        page = await self.client.get(join_url(team.url, "memberships", login), ctx)
        if page.error is None:
            return True
        if isinstance(page.error, NotFoundError):
            return False
        page.raise_for_error()
        return False

    # ------------------------------------------------------------------
    # Issue comments
    # ------------------------------------------------------------------

    def issue_comments(self, issue: Issue) -> PagedSequence[IssueComment]:
        return self.listing(join_url(issue.url, "comments"), IssueComment)

    async def post_issue_comment(self, issue: Issue, body: str, ctx: Context | None = None) -> int:
        """Add a comment to ``issue``; returns the HTTP status (201 on success)."""
        return await self.client.post(join_url(issue.url, "comments"), {"body": body}, ctx)

    async def update_issue_comment(
        self, comment: IssueComment, body: str, ctx: Context | None = None
    ) -> int:
        """Replace the body of an existing comment; returns the HTTP status."""
        return await self.client.patch(comment.url, {"body": body}, ctx)

    # ------------------------------------------------------------------
    # Commit statuses
    # ------------------------------------------------------------------

    def commit_statuses(self, commit: Commit) -> PagedSequence[CommitStatus]:
        return self.listing(join_url(commit.url, "statuses"), CommitStatus)

    async def has_commit_status(
        self, commit: Commit, status: CommitStatus, ctx: Context | None = None
    ) -> bool:
        """True when ``commit`` already carries a status matching ``status``."""
        async for existing in self.commit_statuses(commit).iter(ctx):
            if existing.matches(status):
                return True
        return False

    async def set_commit_status(
        self, commit: Commit, status: CommitStatus, ctx: Context | None = None
    ) -> int:
        """Attach ``status`` to ``commit``; returns the HTTP status (201 on success).

        Raises:
            DuplicateStatusError: An identical status is already set
        """
        if await self.has_commit_status(commit, status, ctx):
            raise DuplicateStatusError(f"Status already set on {commit.sha}: {status}")
        # Statuses are listed under /commits/{sha} but created under /statuses/{sha}
        base, _, sha = commit.url.rstrip("/").rpartition("/commits/")
        url = join_url(base, "statuses", sha)
        logger.info("Setting commit status", extra={"sha": commit.sha, "context": status.context})
        return await self.client.post(url, status.to_payload(), ctx)

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------

    def pull_commits(self, pull: PullRequest) -> PagedSequence[Commit]:
        return self.listing(join_url(pull.url, "commits"), Commit)

    async def pull_head_commit(self, pull: PullRequest, ctx: Context | None = None) -> Commit | None:
        """Last commit of the pull request (None when it has none)."""
        return await self.pull_commits(pull).last(ctx)

    # ------------------------------------------------------------------

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> GitHubAPI:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
