"""Repository handle: listings and lookups scoped to one owner/name."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.context import Context
from ..core.exceptions import NotFoundError
from ..models import PULL_REQUEST_STATES, Branch, Commit, Issue, PullRequest
from ..runtime.paging import PagedSequence
from .endpoints import join_url, repo_url, with_query

if TYPE_CHECKING:
    from .github_api import GitHubAPI


class Repository:
    """A GitHub repository, addressed by owner and name.

    The handle holds no remote state; every method issues (cached) requests
    through the API it was created from.
    """

    def __init__(self, api: GitHubAPI, owner: str, name: str) -> None:
        if not owner or not name:
            raise ValueError("Repository owner and name must not be empty")
        self._api = api
        self.owner = owner
        self.name = name

    @property
    def path(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        return repo_url(self._api.api_url, self.owner, self.name)

    def _url(self, *parts: str | int) -> str:
        return join_url(self.url, *parts)

    def __repr__(self) -> str:
        return f"Repository({self.path!r})"

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def branches(self) -> PagedSequence[Branch]:
        return self._api.listing(self._url("branches"), Branch)

    async def branch(self, name: str, ctx: Context | None = None) -> Branch:
        return await self._api.fetch(self._url("branches", name), Branch, ctx)

    async def branch_exists(self, name: str, ctx: Context | None = None) -> bool:
        """True when the branch exists; other failures (403, cancellation, ...) raise."""
        try:
            await self.branch(name, ctx)
        except NotFoundError:
            return False
        return True

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def commits(self, branch: str | None = None) -> PagedSequence[Commit]:
        """Commits reachable from ``branch`` (default branch when None)."""
        return self._api.listing(with_query(self._url("commits"), {"sha": branch}), Commit)

    async def commit(self, sha: str, ctx: Context | None = None) -> Commit:
        return await self._api.fetch(self._url("commits", sha), Commit, ctx)

    # ------------------------------------------------------------------
    # Pull requests
    # ------------------------------------------------------------------

    def pulls(self, branch: str | None = None, state: str = "open") -> PagedSequence[PullRequest]:
        """Pull requests targeting ``branch`` in the given state.

        Raises:
            ValueError: ``state`` is not one of open, closed, all
        """
        if state not in PULL_REQUEST_STATES:
            raise ValueError(
                f"Unknown pull request state {state!r}, expected one of {PULL_REQUEST_STATES}"
            )
        url = with_query(self._url("pulls"), {"base": branch, "state": state})
        return self._api.listing(url, PullRequest)

    async def pull(self, number: int, ctx: Context | None = None) -> PullRequest:
        return await self._api.fetch(self._url("pulls", number), PullRequest, ctx)

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    def issues(
        self,
        state: str = "open",
        author: str = "",
        assignee: str = "",
    ) -> PagedSequence[Issue]:
        """Issues (including pull requests) in the repository.

        Args:
            state: open, closed or all
            author: Only issues created by this login (all authors when blank)
            assignee: Only issues assigned to this login; blank means unassigned
        """
        params = {
            "state": state,
            "assignee": assignee.strip() or "none",
            "creator": author.strip() or None,
        }
        return self._api.listing(with_query(self._url("issues"), params), Issue)

    async def issue(self, number: int, ctx: Context | None = None) -> Issue:
        return await self._api.fetch(self._url("issues", number), Issue, ctx)

    # ------------------------------------------------------------------

    async def is_collaborator(self, login: str, ctx: Context | None = None) -> bool:
        """True when ``login`` is a collaborator (GitHub answers 204, else 404).

        A revalidated (304) answer counts as the cached 204.
        """
        page = await self._api.client.get(self._url("collaborators", login), ctx)
        if page.error is None:
            return True
        if isinstance(page.error, NotFoundError):
            return False
        page.raise_for_error()
        return False
