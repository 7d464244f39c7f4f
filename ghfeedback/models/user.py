"""GitHub account that reported an issue or wrote a comment."""

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """GitHub account (login and numeric id)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str
    id: int
