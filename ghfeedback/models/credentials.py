"""Repository coordinates and access token."""

from pydantic import BaseModel, ConfigDict, Field


class GitHubCredentials(BaseModel):
    """Target repository and token, fixed for the lifetime of a service."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    token: str = Field(repr=False)

    @property
    def full_name(self) -> str:
        """Repository as ``owner/repo``."""
        return f"{self.owner}/{self.repo}"
