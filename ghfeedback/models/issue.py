"""GitHub issue used as a feedback item, with derived presentation fields."""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ghfeedback import vote_codec
from ghfeedback.models.issue_type import IssueState
from ghfeedback.models.label import (
    BUG_LABEL,
    FEATURE_REQUEST_LABEL,
    TYPE_LABELS,
    USER_SUBMITTED_LABEL,
    Label,
)
from ghfeedback.models.user import User

# Updates within this many seconds of creation are not counted as edits
EDIT_GRACE_SECONDS = 60


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def parse_vote_count(body: str | None) -> int:
    """Vote count encoded in an issue body; 0 if absent or malformed."""
    return vote_codec.decode(body)


class Issue(BaseModel):
    """Feedback issue as returned by the GitHub issues API.

    ``vote_count`` is decoded from ``body`` once, when the model is built.
    Timestamps stay ISO-8601 strings; UTC strings sort chronologically.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    number: int
    title: str
    body: str | None = None
    state: IssueState
    labels: List[Label] = Field(default_factory=list)
    created_at: str
    updated_at: str
    user: User
    vote_count: int = 0

    @model_validator(mode="before")
    @classmethod
    def _decode_vote_count(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {**data, "vote_count": parse_vote_count(data.get("body"))}
        return data

    def has_label(self, name: str) -> bool:
        """Exact match on the raw label name."""
        return any(lb.name == name for lb in self.labels)

    @property
    def is_bug(self) -> bool:
        """Has the bug label."""
        return self.has_label(BUG_LABEL)

    @property
    def is_feature_request(self) -> bool:
        """Has the feature-request label."""
        return self.has_label(FEATURE_REQUEST_LABEL)

    @property
    def displayable_body(self) -> str | None:
        """Body without the vote, device-information and mobile footer sections."""
        if self.body is None:
            return None
        return vote_codec.strip_internal_sections(self.body)

    @property
    def display_labels(self) -> List[Label]:
        """Labels for display, without user-submitted."""
        return [lb.for_display() for lb in self.labels if lb.name != USER_SUBMITTED_LABEL]

    @property
    def next_label(self) -> Label | None:
        """First triage label (not bug, feature-request or user-submitted)."""
        for lb in self.labels:
            if lb.name not in TYPE_LABELS:
                return lb.for_display()
        return None

    @property
    def was_edited(self) -> bool:
        try:
            created = _parse_iso(self.created_at)
            updated = _parse_iso(self.updated_at)
        except ValueError:
            return False
        try:
            return (updated - created).total_seconds() > EDIT_GRACE_SECONDS
        except TypeError:
            # one timestamp naive, the other aware
            return False
