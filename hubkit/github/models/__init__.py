"""Data models for GitHub resources and the caching layer.

Architecture:
    This module exports all Pydantic v2 data models used throughout the library.
    Resource models are immutable (frozen=True) and ignore JSON fields they do
    not declare, so the same model decodes both listing and detail payloads.

Model Categories:
    - Caching: CacheEntry, Page
    - Repositories: Branch, Commit, CommitStatus, Issue, IssueComment, PullRequest
    - Accounts: User, Organisation, Team, TeamMember
    - Quota: APICalls
"""

from .branch import Branch
from .cache_entry import CacheEntry
from .commit import (
    Commit,
    CommitDetail,
    CommitFile,
    CommitSignature,
    CommitStats,
    CommitStatus,
)
from .issue import Issue, IssueComment
from .organisation import Organisation, Team, TeamMember
from .page import Page
from .pull_request import PULL_REQUEST_STATES, PullRequest, PullRequestRef
from .rate_limit import APICalls
from .user import User

__all__ = [
    "APICalls",
    "Branch",
    "CacheEntry",
    "Commit",
    "CommitDetail",
    "CommitFile",
    "CommitSignature",
    "CommitStats",
    "CommitStatus",
    "Issue",
    "IssueComment",
    "Organisation",
    "PULL_REQUEST_STATES",
    "Page",
    "PullRequest",
    "PullRequestRef",
    "Team",
    "TeamMember",
    "User",
]
