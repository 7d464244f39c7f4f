"""Issue tracker gateways."""

from ghfeedback.adapters.base import (
    FailedToCreateError,
    FailedToUpdateError,
    GatewayError,
    InvalidResponseError,
    InvalidURLError,
    IssueGateway,
)
from ghfeedback.adapters.github import GitHubIssueGateway

__all__ = [
    "FailedToCreateError",
    "FailedToUpdateError",
    "GatewayError",
    "GitHubIssueGateway",
    "InvalidResponseError",
    "InvalidURLError",
    "IssueGateway",
]
