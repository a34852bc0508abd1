"""Branch model."""

from pydantic import BaseModel, ConfigDict, Field

from .commit import Commit


class Branch(BaseModel):
    name: str = ""
    head: Commit | None = Field(default=None, alias="commit")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def head_commit(self) -> Commit | None:
        return self.head

    def __str__(self) -> str:
        sha = self.head.sha if self.head is not None else ""
        return f"{self.name}:{sha}"
