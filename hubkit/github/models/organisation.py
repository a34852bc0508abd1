"""Organisation, team and team member models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Organisation(BaseModel):
    id: int = 0
    login: str = ""
    name: str | None = None
    description: str | None = None
    url: str = ""
    html_url: str = ""
    company: str | None = None
    collaborators: int | None = None

    model_config = ConfigDict(frozen=True)


class Team(BaseModel):
    id: int = 0
    url: str = ""
    name: str = ""
    slug: str = ""
    description: str | None = None
    members_count: int | None = None
    repos_count: int | None = None
    organization: Organisation | None = None
    parent: Team | None = None

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.name}({self.id})"


class TeamMember(BaseModel):
    id: int = 0
    login: str = ""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.login}({self.id})"
