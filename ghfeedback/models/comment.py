"""Comment on a feedback issue."""

from pydantic import BaseModel, ConfigDict

from ghfeedback.models.user import User


class Comment(BaseModel):
    """Comment on an issue (read-only, fetched per issue)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    body: str = ""
    user: User
    created_at: str
    updated_at: str
