"""Shared fixtures: GitHub issue payloads and an in-memory gateway."""

import threading
from pathlib import Path
from typing import Any, Dict, List

import pytest

from ghfeedback.adapters import FailedToCreateError, FailedToUpdateError, InvalidResponseError, IssueGateway
from ghfeedback.models import Comment, Issue, IssueState
from ghfeedback.services import FeedbackSyncService
from ghfeedback.store import open_stores


def issue_payload(
    number: int = 1,
    title: str = "Issue",
    body: str | None = "Body",
    state: str = "open",
    labels: List[str] | None = None,
    created_at: str = "2025-09-25T10:00:00Z",
    updated_at: str = "2025-09-25T10:00:00Z",
) -> Dict[str, Any]:
    """Issue dict shaped like the GitHub API response."""
    return {
        "id": 1000 + number,
        "number": number,
        "title": title,
        "body": body,
        "state": state,
        "labels": [{"id": i, "name": name, "color": "d73a4a"} for i, name in enumerate(labels or [])],
        "created_at": created_at,
        "updated_at": updated_at,
        "user": {"login": "octocat", "id": 1},
        "html_url": f"https://github.com/owner/repo/issues/{number}",
    }


def make_issue(**kwargs: Any) -> Issue:
    return Issue.model_validate(issue_payload(**kwargs))


class FakeGateway(IssueGateway):
    """In-memory issue tracker recording every call."""

    def __init__(self) -> None:
        self.issues: Dict[int, Dict[str, Any]] = {}
        self.comments: Dict[int, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.fail: set[str] = set()
        self.next_number = 1
        self._lock = threading.Lock()

    def add(self, **kwargs: Any) -> Issue:
        payload = issue_payload(**kwargs)
        self.issues[payload["number"]] = payload
        self.next_number = max(self.next_number, payload["number"] + 1)
        return Issue.model_validate(payload)

    def _record(self, name: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((name, *args))

    def call_names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def list_open_issues(self) -> List[Issue]:
        self._record("list_open_issues")
        if "list_open_issues" in self.fail:
            raise InvalidResponseError("boom")
        open_issues = [p for p in self.issues.values() if p["state"] == "open"]
        open_issues.sort(key=lambda p: p["created_at"], reverse=True)
        return [Issue.model_validate(p) for p in open_issues]

    def list_closed_issues(self) -> List[Issue]:
        self._record("list_closed_issues")
        if "list_closed_issues" in self.fail:
            raise InvalidResponseError("boom")
        return [Issue.model_validate(p) for p in self.issues.values() if p["state"] == "closed"]

    def get_issue(self, number: int) -> Issue:
        self._record("get_issue", number)
        if "get_issue" in self.fail or number not in self.issues:
            raise InvalidResponseError(f"GET #{number}")
        return Issue.model_validate(self.issues[number])

    def create_issue(self, title: str, body: str, labels: List[str]) -> Issue:
        self._record("create_issue", title, body, list(labels))
        if "create_issue" in self.fail:
            raise FailedToCreateError("boom")
        with self._lock:
            number = self.next_number
            self.next_number += 1
        payload = issue_payload(number=number, title=title, body=body, labels=list(labels))
        self.issues[number] = payload
        return Issue.model_validate(payload)

    def update_issue_content(self, number: int, title: str, body: str, labels: List[str]) -> Issue:
        self._record("update_issue_content", number, title, body, list(labels))
        if "update_issue_content" in self.fail:
            raise FailedToUpdateError("boom")
        payload = self.issues[number]
        payload.update(
            title=title,
            body=body,
            labels=[{"name": n, "color": "ededed"} for n in labels],
            updated_at="2025-09-25T11:00:00Z",
        )
        return Issue.model_validate(payload)

    def update_issue_body(self, number: int, body: str) -> None:
        self._record("update_issue_body", number, body)
        if "update_issue_body" in self.fail:
            raise FailedToUpdateError("boom")
        self.issues[number]["body"] = body

    def set_issue_state(self, number: int, state: IssueState) -> None:
        self._record("set_issue_state", number, state)
        if "set_issue_state" in self.fail:
            raise FailedToUpdateError("boom")
        self.issues[number]["state"] = IssueState(state).value

    def list_comments(self, number: int) -> List[Comment]:
        self._record("list_comments", number)
        if "list_comments" in self.fail:
            raise InvalidResponseError("boom")
        return [Comment.model_validate(c) for c in self.comments.get(number, [])]

    def add_comment(self, number: int, body: str) -> Comment:
        self._record("add_comment", number, body)
        if "add_comment" in self.fail:
            raise FailedToCreateError("boom")
        data = {
            "id": 500 + len(self.comments.get(number, [])),
            "body": body,
            "user": {"login": "octocat", "id": 1},
            "created_at": "2025-09-25T12:00:00Z",
            "updated_at": "2025-09-25T12:00:00Z",
        }
        self.comments.setdefault(number, []).append(data)
        return Comment.model_validate(data)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def service(gateway: FakeGateway, tmp_path: Path) -> FeedbackSyncService:
    voted, owned = open_stores(tmp_path / ".ghfeedback")
    return FeedbackSyncService(gateway, voted, owned)
