"""Feedback kind, issue state and list ordering enums."""

from enum import Enum

from ghfeedback.models.label import BUG_LABEL, FEATURE_REQUEST_LABEL


class IssueType(str, Enum):
    """Feedback kind. ALL is only meaningful as a list filter."""

    ALL = "All"
    BUGS = "Bugs"
    FEATURES = "Feature Requests"

    @property
    def label(self) -> str:
        """Label applied when submitting feedback of this kind."""
        return BUG_LABEL if self is IssueType.BUGS else FEATURE_REQUEST_LABEL


class IssueState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class SortOrder(str, Enum):
    """Ordering of the open feedback list."""

    VOTES = "votes"
    MOST_RECENT = "recent"
