"""Filtering and ordering of cached issue lists."""

from typing import Iterable, List

from ghfeedback.models import Issue, IssueType, SortOrder


def filter_issues(issues: Iterable[Issue], issue_type: IssueType = IssueType.ALL) -> List[Issue]:
    """Issues of one kind; ALL keeps every issue."""
    if issue_type is IssueType.BUGS:
        return [i for i in issues if i.is_bug]
    if issue_type is IssueType.FEATURES:
        return [i for i in issues if i.is_feature_request]
    return list(issues)


def sort_issues(issues: Iterable[Issue], order: SortOrder = SortOrder.VOTES) -> List[Issue]:
    """Most votes first, or most recently updated first. Ties keep input order."""
    if order is SortOrder.MOST_RECENT:
        return sorted(issues, key=lambda i: i.updated_at, reverse=True)
    return sorted(issues, key=lambda i: i.vote_count, reverse=True)
