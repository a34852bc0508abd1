"""GitHub account model."""

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    login: str = ""
    id: int | None = None
    url: str = ""
    html_url: str = ""
    type: str = ""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.login
