"""Device-local vote and ownership records (.ghfeedback/)."""

from ghfeedback.store.preferences import (
    IssueNumberStore,
    OwnedIssueStore,
    VotedIssueStore,
    open_stores,
)

__all__ = [
    "IssueNumberStore",
    "OwnedIssueStore",
    "VotedIssueStore",
    "open_stores",
]
