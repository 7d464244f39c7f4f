"""Voting errors raised before or instead of a network call."""


class VotingError(Exception):
    """Base for vote rejections."""

    message = "Voting failed"

    def __init__(self, issue_number: int) -> None:
        self.issue_number = issue_number
        super().__init__(self.message)


class AlreadyVotedError(VotingError):
    message = "You've already voted for this issue"


class VoteInProgressError(VotingError):
    message = "A vote for this issue is already being submitted"
