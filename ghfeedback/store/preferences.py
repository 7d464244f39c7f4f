"""Device-local sets of issue numbers stored as YAML under .ghfeedback/.

voted_issues.yaml: issues this device has upvoted.
owned_issues.yaml: issues this device submitted (may edit, close, reopen).

Both sets only grow. An unreadable or corrupt file reads as an empty set.
"""

import logging
import threading
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, ValidationError

STATE_DIR = ".ghfeedback"
VOTED_FILE = "voted_issues.yaml"
OWNED_FILE = "owned_issues.yaml"

LOG = logging.getLogger("ghfeedback.store.preferences")


class IssueNumbersFile(BaseModel):
    """On-disk shape of one set."""

    issues: List[int] = Field(default_factory=list, description="Issue numbers, ascending")

    model_config = {"extra": "forbid"}


class IssueNumberStore:
    """Append-only persisted set of issue numbers."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> set[int]:
        """Read the set from disk; empty when missing or invalid."""
        if not self.path.is_file():
            return set()
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
            if not data:
                return set()
            return set(IssueNumbersFile.model_validate(data).issues)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
            LOG.warning("Ignoring unreadable issue set %s: %s", self.path, e)
            return set()

    def _save(self, numbers: set[int]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = IssueNumbersFile(issues=sorted(numbers)).model_dump(mode="json")
        raw = yaml.dump(payload, default_flow_style=False, sort_keys=False)
        self.path.write_text(raw, encoding="utf-8")

    def contains(self, number: int) -> bool:
        """True if the number is in the stored set."""
        return number in self.load()

    def add(self, number: int) -> None:
        """Add a number; no-op if already present."""
        with self._lock:
            numbers = self.load()
            if number in numbers:
                return
            numbers.add(number)
            try:
                self._save(numbers)
            except OSError as e:
                LOG.warning("Could not record issue #%s in %s: %s", number, self.path, e)
                return
        LOG.debug("Recorded issue #%s in %s", number, self.path.name)


class VotedIssueStore(IssueNumberStore):
    """Issues this device has already upvoted. There is no way to unvote."""

    def has_voted(self, number: int) -> bool:
        """True if this device already voted for the issue."""
        return self.contains(number)

    def mark_voted(self, number: int) -> None:
        """Record a vote; repeated calls are no-ops."""
        self.add(number)


class OwnedIssueStore(IssueNumberStore):
    """Issues created from this device."""

    def owns_issue(self, number: int) -> bool:
        """True if the issue was submitted from this device."""
        return self.contains(number)

    def mark_owned(self, number: int) -> None:
        """Record an issue as submitted from this device."""
        self.add(number)

    def all_owned(self) -> set[int]:
        """All issue numbers submitted from this device."""
        return self.load()


def open_stores(state_dir: Path | str = STATE_DIR) -> tuple[VotedIssueStore, OwnedIssueStore]:
    """Return the voted and owned stores kept in ``state_dir``."""
    base = Path(state_dir)
    return VotedIssueStore(base / VOTED_FILE), OwnedIssueStore(base / OWNED_FILE)
