"""Pull request model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import NOT_AVAILABLE
from .user import User

PULL_REQUEST_STATES = ("open", "closed", "all")


class PullRequestRef(BaseModel):
    sha: str = ""
    ref: str = ""

    model_config = ConfigDict(frozen=True)


class PullRequest(BaseModel):
    number: int = 0
    state: str = ""
    title: str = ""
    body: str | None = None
    head: PullRequestRef | None = None
    url: str = ""
    html_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    author: User | None = Field(default=None, alias="user")
    assignee: User | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    def __str__(self) -> str:
        author = self.author.login if self.author is not None else NOT_AVAILABLE
        return f"[{self.number}:{self.state}:{author}] {self.title}"
