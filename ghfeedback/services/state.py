"""Observable state of the feedback lists."""

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from ghfeedback.models import Issue


class ListState(str, Enum):
    """Load lifecycle of one cached list: IDLE -> LOADING -> LOADED | FAILED."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class FeedbackState(BaseModel):
    """Immutable snapshot handed to observers.

    A FAILED list keeps the issues from its last successful load.
    """

    model_config = ConfigDict(frozen=True)

    open_issues: Tuple[Issue, ...] = ()
    closed_issues: Tuple[Issue, ...] = ()
    open_state: ListState = ListState.IDLE
    closed_state: ListState = ListState.IDLE
    open_error: str | None = None
    closed_error: str | None = None
    error_message: str | None = Field(default=None, description="Most recent error from any operation")
    has_loaded_open: bool = False
    has_loaded_closed: bool = False
    comments_loading: bool = False
    comments_error: str | None = None
    votes_in_flight: frozenset[int] = frozenset()

    @property
    def is_loading(self) -> bool:
        """True while either list is loading."""
        return ListState.LOADING in (self.open_state, self.closed_state)
