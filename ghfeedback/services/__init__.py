"""Feedback operations over the gateway and local stores."""

from ghfeedback.services.body import build_feedback_body, build_issue_body
from ghfeedback.services.errors import (
    AlreadyVotedError,
    VoteInProgressError,
    VotingError,
)
from ghfeedback.services.feedback_sync import FeedbackSyncService
from ghfeedback.services.listing import filter_issues, sort_issues
from ghfeedback.services.state import FeedbackState, ListState

__all__ = [
    "AlreadyVotedError",
    "FeedbackState",
    "FeedbackSyncService",
    "ListState",
    "VoteInProgressError",
    "VotingError",
    "build_feedback_body",
    "build_issue_body",
    "filter_issues",
    "sort_issues",
]
