"""GitHub REST API gateway for feedback issues."""

import logging
import re
from typing import Any, Dict, List, Type

import requests
from pydantic import TypeAdapter, ValidationError

from ghfeedback.adapters.base import (
    FailedToCreateError,
    FailedToUpdateError,
    GatewayError,
    InvalidResponseError,
    InvalidURLError,
    IssueGateway,
)
from ghfeedback.models import (
    BUG_LABEL,
    FEATURE_REQUEST_LABEL,
    Comment,
    GitHubCredentials,
    Issue,
    IssueState,
)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30

LOG = logging.getLogger("ghfeedback.adapters.github")

_PATH_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_.-]+$")

_ISSUE_LIST = TypeAdapter(List[Issue])
_COMMENT_LIST = TypeAdapter(List[Comment])

# Closed issues without one of these labels are not feedback (e.g. PRs, chores)
_FEEDBACK_LABELS = (BUG_LABEL, FEATURE_REQUEST_LABEL)


class GitHubIssueGateway(IssueGateway):
    """Issue operations on one GitHub repository.

    Every request carries the bearer token and asks for the v3 JSON media
    type. Any status outside 200-299 raises a GatewayError subclass chosen by
    the operation; nothing is retried.
    """

    def __init__(
        self,
        credentials: GitHubCredentials,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._owner = credentials.owner
        self._repo = credentials.repo
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {credentials.token}",
                "Accept": "application/vnd.github.v3+json",
                "Content-Type": "application/json",
            }
        )

    def _issues_path(self, number: int | None = None) -> str:
        for segment in (self._owner, self._repo):
            if not _PATH_SEGMENT_RE.match(segment) or segment in (".", ".."):
                raise InvalidURLError(f"bad repository segment {segment!r}")
        path = f"/repos/{self._owner}/{self._repo}/issues"
        if number is not None:
            if isinstance(number, bool) or not isinstance(number, int) or number < 1:
                raise InvalidURLError(f"bad issue number {number!r}")
            path = f"{path}/{number}"
        return path

    def _request(
        self,
        method: str,
        path: str,
        error: Type[GatewayError],
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
        fresh: bool = False,
    ) -> requests.Response:
        url = f"{self._api_url}{path}"
        # Reads must see the latest vote counts and states
        headers = {"Cache-Control": "no-cache"} if fresh else None
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            LOG.warning("GitHub %s %s failed: %s", method, path, e)
            raise error(f"{method} {path}: {e}") from e
        if not 200 <= resp.status_code <= 299:
            LOG.warning("GitHub %s %s returned %s", method, path, resp.status_code)
            raise error(f"{method} {path} returned {resp.status_code}")
        LOG.debug("GitHub %s %s -> %s", method, path, resp.status_code)
        return resp

    @staticmethod
    def _decode(resp: requests.Response, adapter: TypeAdapter) -> Any:
        try:
            return adapter.validate_python(resp.json())
        except (ValueError, ValidationError) as e:
            raise InvalidResponseError(f"could not decode response: {e}") from e

    def _list_issues(self, params: Dict[str, Any]) -> List[Issue]:
        """GET the issues list with the given query and decode it."""
        resp = self._request("GET", self._issues_path(), InvalidResponseError, params=params, fresh=True)
        return self._decode(resp, _ISSUE_LIST)

    def list_open_issues(self) -> List[Issue]:
        """Open issues, newest first, bypassing HTTP caches."""
        issues = self._list_issues({"state": "open", "sort": "created", "direction": "desc"})
        LOG.debug("Loaded %d open issues", len(issues))
        return issues

    def list_closed_issues(self) -> List[Issue]:
        """Closed issues labelled bug or feature-request, latest update first.

        The server is asked for updated-desc order but the list is sorted
        again locally.
        """
        issues = self._list_issues({"state": "closed", "sort": "updated", "direction": "desc"})
        feedback = [i for i in issues if any(i.has_label(name) for name in _FEEDBACK_LABELS)]
        feedback.sort(key=lambda i: i.updated_at, reverse=True)
        LOG.debug("Loaded %d closed feedback issues (%d total)", len(feedback), len(issues))
        return feedback

    def get_issue(self, number: int) -> Issue:
        """Fetch one issue fresh (the vote count must not be stale)."""
        resp = self._request("GET", self._issues_path(number), InvalidResponseError, fresh=True)
        return self._decode(resp, TypeAdapter(Issue))

    def create_issue(self, title: str, body: str, labels: List[str]) -> Issue:
        """POST a new issue with title, body and labels."""
        resp = self._request(
            "POST",
            self._issues_path(),
            FailedToCreateError,
            json={"title": title, "body": body, "labels": list(labels)},
        )
        issue = self._decode(resp, TypeAdapter(Issue))
        LOG.info("Created issue #%s", issue.number)
        return issue

    def update_issue_content(self, number: int, title: str, body: str, labels: List[str]) -> Issue:
        """PATCH title, body and labels together."""
        resp = self._request(
            "PATCH",
            self._issues_path(number),
            FailedToUpdateError,
            json={"title": title, "body": body, "labels": list(labels)},
        )
        LOG.info("Updated issue #%s", number)
        return self._decode(resp, TypeAdapter(Issue))

    def update_issue_body(self, number: int, body: str) -> None:
        """PATCH the body only (used for vote updates)."""
        self._request("PATCH", self._issues_path(number), FailedToUpdateError, json={"body": body})

    def set_issue_state(self, number: int, state: IssueState) -> None:
        """PATCH the issue state to open or closed."""
        state = IssueState(state)
        self._request("PATCH", self._issues_path(number), FailedToUpdateError, json={"state": state.value})
        LOG.info("Issue #%s state -> %s", number, state.value)

    def list_comments(self, number: int) -> List[Comment]:
        """Comments on an issue, oldest first."""
        path = f"{self._issues_path(number)}/comments"
        resp = self._request("GET", path, InvalidResponseError, fresh=True)
        return self._decode(resp, _COMMENT_LIST)

    def add_comment(self, number: int, body: str) -> Comment:
        """POST a comment on an issue."""
        path = f"{self._issues_path(number)}/comments"
        resp = self._request("POST", path, FailedToCreateError, json={"body": body})
        return self._decode(resp, TypeAdapter(Comment))
