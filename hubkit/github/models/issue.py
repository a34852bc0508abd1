"""Issue and issue comment models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import NOT_AVAILABLE
from .user import User


class Issue(BaseModel):
    """A repository issue.

    Every pull request is also an issue, so issue listings include pull
    requests unless filtered.
    """

    number: int = 0
    url: str = ""
    state: str = ""
    title: str = ""
    body: str | None = None
    assignee: User | None = None
    assignees: list[User] = Field(default_factory=list)
    author: User | None = Field(default=None, alias="user")
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def __str__(self) -> str:
        author = self.author.login if self.author is not None else NOT_AVAILABLE
        return f"[{self.number}:{author}:{self.state}] {self.title}"


class IssueComment(BaseModel):
    id: int = 0
    url: str = ""
    html_url: str = ""
    body: str = ""
    author: User | None = Field(default=None, alias="user")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def __str__(self) -> str:
        author = self.author.login if self.author is not None else NOT_AVAILABLE
        return f"{self.id}: {author}"
