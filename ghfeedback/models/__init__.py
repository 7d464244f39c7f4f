"""Data models for feedback issues, labels, comments (Pydantic)."""

from ghfeedback.models.comment import Comment
from ghfeedback.models.credentials import GitHubCredentials
from ghfeedback.models.issue import Issue, parse_vote_count
from ghfeedback.models.issue_type import IssueState, IssueType, SortOrder
from ghfeedback.models.label import (
    BUG_LABEL,
    FEATURE_REQUEST_LABEL,
    USER_SUBMITTED_LABEL,
    Label,
)
from ghfeedback.models.user import User

__all__ = [
    "BUG_LABEL",
    "FEATURE_REQUEST_LABEL",
    "USER_SUBMITTED_LABEL",
    "Comment",
    "GitHubCredentials",
    "Issue",
    "IssueState",
    "IssueType",
    "Label",
    "SortOrder",
    "User",
    "parse_vote_count",
]
