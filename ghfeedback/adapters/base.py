"""Abstract gateway to the issue tracker backing the feedback list."""

from abc import ABC, abstractmethod
from typing import List

from ghfeedback.models import Comment, Issue, IssueState


class GatewayError(Exception):
    """Raised when a call to the issue tracker fails."""

    message = "Issue tracker request failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class InvalidURLError(GatewayError):
    message = "Invalid URL"


class InvalidResponseError(GatewayError):
    message = "Invalid response from GitHub"


class FailedToCreateError(GatewayError):
    message = "Failed to create issue"


class FailedToUpdateError(GatewayError):
    message = "Failed to update issue"


class IssueGateway(ABC):
    """Issue operations for a single repository."""

    @abstractmethod
    def list_open_issues(self) -> List[Issue]:
        """Open issues, newest first (first page only)."""
        ...

    @abstractmethod
    def list_closed_issues(self) -> List[Issue]:
        """Closed bug / feature-request issues, most recently updated first."""
        ...

    @abstractmethod
    def get_issue(self, number: int) -> Issue:
        """Fetch a single issue by number."""
        ...

    @abstractmethod
    def create_issue(self, title: str, body: str, labels: List[str]) -> Issue:
        """Create an issue and return it with its server-assigned number."""
        ...

    @abstractmethod
    def update_issue_content(self, number: int, title: str, body: str, labels: List[str]) -> Issue:
        """Replace title, body and labels."""
        ...

    @abstractmethod
    def update_issue_body(self, number: int, body: str) -> None:
        """Replace the body only."""
        ...

    @abstractmethod
    def set_issue_state(self, number: int, state: IssueState) -> None:
        """Close or reopen an issue."""
        ...

    @abstractmethod
    def list_comments(self, number: int) -> List[Comment]:
        """Comments on an issue, oldest first."""
        ...

    @abstractmethod
    def add_comment(self, number: int, body: str) -> Comment:
        """Post a comment and return it."""
        ...
