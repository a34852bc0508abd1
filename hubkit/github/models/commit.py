"""Commit and commit status models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import NOT_AVAILABLE
from .user import User


class CommitSignature(BaseModel):
    """Name, email and date recorded in the git object itself."""

    name: str = ""
    email: str = ""
    date: datetime | None = None

    model_config = ConfigDict(frozen=True)


class CommitDetail(BaseModel):
    message: str = ""
    committer: CommitSignature | None = None

    model_config = ConfigDict(frozen=True)


class CommitStats(BaseModel):
    additions: int = 0
    deletions: int = 0
    total: int = 0

    model_config = ConfigDict(frozen=True)


class CommitFile(BaseModel):
    name: str = Field(default="", alias="filename")
    additions: int = 0
    deletions: int = 0
    changes: int = 0

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Commit(BaseModel):
    """A repository commit.

    ``author`` and ``committer`` are GitHub accounts (may be absent when the
    git identity is not linked to an account); the git-level details live
    under ``commit``.
    """

    sha: str = ""
    url: str = ""
    html_url: str = ""
    author: User | None = None
    committer: User | None = None
    commit: CommitDetail | None = None
    stats: CommitStats | None = None
    files: list[CommitFile] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def message(self) -> str:
        return self.commit.message if self.commit is not None else ""

    def __str__(self) -> str:
        author = self.author.login if self.author is not None else NOT_AVAILABLE
        return f"[{self.sha}:{author}] {self.message}"


class CommitStatus(BaseModel):
    """A status (CI result, check, ...) attached to a commit."""

    state: str = ""
    target_url: str | None = None
    description: str | None = None
    context: str = ""
    creator: User | None = None
    created_at: str = ""
    updated_at: str = ""

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict[str, str | None]:
        """Fields sent when creating the status on a commit."""
        return {
            "state": self.state,
            "target_url": self.target_url,
            "description": self.description,
            "context": self.context,
        }

    def matches(self, other: CommitStatus) -> bool:
        """Same state, target, description and context (creator and dates ignored)."""
        return self.to_payload() == other.to_payload()

    def __str__(self) -> str:
        return (
            f"Context: {self.context}, State: {self.state}, "
            f"Description: {self.description}, URL: {self.target_url}"
        )
