"""High-level API: the GitHubAPI facade and repository handles."""

from .endpoints import join_url, with_query
from .github_api import GitHubAPI
from .repository import Repository

__all__ = ["GitHubAPI", "Repository", "join_url", "with_query"]
