"""Feedback list state and the operations that change it.

FeedbackSyncService owns the cached open and closed issue lists. All state
changes go through one lock, which is never held during network calls.
Observers get a FeedbackState snapshot after every change. Changes made
while a delivery is running are coalesced into the latest state.

Votes are read-modify-write on the issue body: two devices voting at the
same moment can lose one increment. Only same-device double submits are
guarded (per-issue in-flight set).
"""

import logging
import threading
from pathlib import Path
from typing import Callable, List

from ghfeedback import vote_codec
from ghfeedback.adapters import GatewayError, GitHubIssueGateway, IssueGateway
from ghfeedback.adapters.github import DEFAULT_API_URL, DEFAULT_TIMEOUT
from ghfeedback.models import (
    USER_SUBMITTED_LABEL,
    Comment,
    GitHubCredentials,
    Issue,
    IssueState,
    IssueType,
    SortOrder,
)
from ghfeedback.services.body import build_feedback_body
from ghfeedback.services.errors import AlreadyVotedError, VoteInProgressError
from ghfeedback.services.listing import filter_issues, sort_issues
from ghfeedback.services.state import FeedbackState, ListState
from ghfeedback.store import OwnedIssueStore, VotedIssueStore, open_stores
from ghfeedback.store.preferences import STATE_DIR

LOG = logging.getLogger("ghfeedback.services.feedback_sync")

StateListener = Callable[[FeedbackState], None]


class FeedbackSyncService:
    """Caches feedback issues and applies submit, edit, vote, close and reopen."""

    def __init__(
        self,
        gateway: IssueGateway,
        voted: VotedIssueStore,
        owned: OwnedIssueStore,
    ) -> None:
        self._gateway = gateway
        self._voted = voted
        self._owned = owned
        self._lock = threading.RLock()
        self._state = FeedbackState()
        self._listeners: List[StateListener] = []
        # one thread delivers at a time; others only flag a newer state
        self._delivering = False
        self._pending = False

    @classmethod
    def from_credentials(
        cls,
        credentials: GitHubCredentials,
        state_dir: Path | str = STATE_DIR,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "FeedbackSyncService":
        """Service talking to GitHub, with vote/ownership records in state_dir."""
        voted, owned = open_stores(state_dir)
        gateway = GitHubIssueGateway(credentials, api_url=api_url, timeout=timeout)
        return cls(gateway, voted, owned)

    # -- state and observers --

    @property
    def state(self) -> FeedbackState:
        """Latest state snapshot."""
        with self._lock:
            return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call listener with each new state. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, **changes: object) -> FeedbackState:
        # caller holds self._lock
        self._state = self._state.model_copy(update=changes)
        return self._state

    def _notify(self) -> None:
        """Deliver the current state to every listener.

        Updates made while a delivery is running (by a listener or another
        thread) are picked up by the delivering thread, so the last state a
        listener sees is always the service's current state.
        """
        with self._lock:
            self._pending = True
            if self._delivering:
                return
            self._delivering = True
        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._delivering = False
                        return
                    self._pending = False
                    snapshot = self._state
                    listeners = list(self._listeners)
                for listener in listeners:
                    try:
                        listener(snapshot)
                    except Exception:
                        LOG.exception("State listener %r failed", listener)
        except BaseException:
            with self._lock:
                self._delivering = False
            raise

    def _update(self, **changes: object) -> FeedbackState:
        with self._lock:
            snapshot = self._replace(**changes)
        self._notify()
        return snapshot

    # -- loading --

    def _load_list(self, kind: str, fetch: Callable[[], List[Issue]]) -> bool:
        self._update(**{f"{kind}_state": ListState.LOADING, "error_message": None})
        try:
            issues = fetch()
        except GatewayError as e:
            LOG.error("Error loading %s issues: %s", kind, e)
            self._update(
                **{
                    f"{kind}_state": ListState.FAILED,
                    f"{kind}_error": str(e),
                    "error_message": str(e),
                }
            )
            return False
        self._update(
            **{
                f"{kind}_issues": tuple(issues),
                f"{kind}_state": ListState.LOADED,
                f"{kind}_error": None,
                f"has_loaded_{kind}": True,
            }
        )
        LOG.debug("Loaded %d %s issues", len(issues), kind)
        return True

    def load_open_issues(self) -> bool:
        """Refresh the open list. On failure the previous list is kept.

        Returns True on success; the error is in ``state`` otherwise.
        """
        return self._load_list("open", self._gateway.list_open_issues)

    def load_closed_issues(self) -> bool:
        """Refresh the closed list. On failure the previous list is kept."""
        return self._load_list("closed", self._gateway.list_closed_issues)

    def reload_all(self) -> bool:
        """Reload both lists; True only if both succeeded."""
        open_ok = self.load_open_issues()
        closed_ok = self.load_closed_issues()
        return open_ok and closed_ok

    # -- submit / edit --

    def submit_feedback(
        self,
        title: str,
        description: str,
        issue_type: IssueType,
        device_info: str | None = None,
        contact_email: str | None = None,
    ) -> int:
        """Create a feedback issue and return its number.

        The new issue is put at the top of the open list without a reload and
        recorded as owned by this device.

        Raises:
            GatewayError: If GitHub rejects or cannot be reached.
        """
        labels = [issue_type.label, USER_SUBMITTED_LABEL]
        body = build_feedback_body(description, device_info, contact_email)
        issue = self._gateway.create_issue(title, body, labels)
        with self._lock:
            self._owned.mark_owned(issue.number)
            self._replace(open_issues=(issue,) + self._state.open_issues)
        self._notify()
        LOG.info("Submitted %s #%s", issue_type.label, issue.number)
        return issue.number

    def edit_feedback(
        self,
        number: int,
        title: str,
        description: str,
        issue_type: IssueType,
        device_info: str | None = None,
        contact_email: str | None = None,
    ) -> Issue:
        """Replace title, description and type, keeping the current vote count.

        The open list is reloaded afterwards; a failed reload shows up in
        ``state`` and is not raised.
        """
        current = self._gateway.get_issue(number)
        body = build_feedback_body(description, device_info, contact_email, votes=current.vote_count)
        updated = self._gateway.update_issue_content(
            number, title, body, [issue_type.label, USER_SUBMITTED_LABEL]
        )
        self.load_open_issues()
        return updated

    # -- state transitions --

    def _set_issue_state(self, number: int, state: IssueState) -> None:
        self._gateway.set_issue_state(number, state)
        self.load_open_issues()
        self.load_closed_issues()

    def close_feedback(self, number: int) -> None:
        """Close an issue and reload both lists."""
        self._set_issue_state(number, IssueState.CLOSED)

    def reopen_feedback(self, number: int) -> None:
        """Reopen an issue and reload both lists."""
        self._set_issue_state(number, IssueState.OPEN)

    # -- voting --

    def upvote(self, number: int) -> int:
        """Add this device's vote to an issue and return the new count.

        The count is read fresh from GitHub, incremented and written back.
        After a successful write the vote is recorded locally and the open
        list reloaded; a failed reload does not undo the vote.

        Raises:
            AlreadyVotedError: This device voted before (no network call).
            VoteInProgressError: A vote for this issue is still running.
            GatewayError: Read or write failed; the vote is not recorded.
        """
        with self._lock:
            if self._voted.has_voted(number):
                raise AlreadyVotedError(number)
            if number in self._state.votes_in_flight:
                raise VoteInProgressError(number)
            self._replace(votes_in_flight=self._state.votes_in_flight | {number})
        self._notify()
        try:
            issue = self._gateway.get_issue(number)
            new_count = issue.vote_count + 1
            self._gateway.update_issue_body(number, vote_codec.encode(issue.body, new_count))
            with self._lock:
                self._voted.mark_voted(number)
        except GatewayError as e:
            LOG.error("Failed to upvote #%s: %s", number, e)
            self._update(error_message=str(e))
            raise
        finally:
            with self._lock:
                self._replace(votes_in_flight=self._state.votes_in_flight - {number})
            self._notify()
        LOG.info("Voted for #%s (now %d)", number, new_count)
        self.load_open_issues()
        return new_count

    def has_voted(self, number: int) -> bool:
        """True if this device already voted for the issue."""
        return self._voted.has_voted(number)

    def owns_issue(self, number: int) -> bool:
        """True if the issue was submitted from this device."""
        return self._owned.owns_issue(number)

    def owned_issues(self) -> set[int]:
        """Numbers of all issues submitted from this device."""
        return self._owned.all_owned()

    # -- comments --

    def load_comments(self, number: int) -> List[Comment]:
        """Fetch comments for one issue. Not cached.

        Raises:
            GatewayError: On failure (also recorded as ``comments_error``).
        """
        self._update(comments_loading=True, comments_error=None)
        try:
            comments = self._gateway.list_comments(number)
        except GatewayError as e:
            LOG.error("Failed to load comments for #%s: %s", number, e)
            self._update(comments_loading=False, comments_error=f"Failed to load comments: {e}")
            raise
        self._update(comments_loading=False)
        return comments

    def add_comment(self, number: int, body: str) -> Comment:
        """Post a comment on an issue and return it."""
        comment = self._gateway.add_comment(number, body)
        LOG.info("Commented on #%s", number)
        return comment

    # -- views over the cache --

    def visible_issues(
        self,
        issue_type: IssueType = IssueType.ALL,
        order: SortOrder = SortOrder.VOTES,
    ) -> List[Issue]:
        """Cached open issues of one type, sorted."""
        return sort_issues(filter_issues(self.state.open_issues, issue_type), order)

    def visible_closed_issues(self, issue_type: IssueType = IssueType.ALL) -> List[Issue]:
        """Cached closed issues of one type, in load order (latest update first)."""
        return filter_issues(self.state.closed_issues, issue_type)
