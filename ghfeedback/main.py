"""ghfeedback command line.

Browse, submit, vote on and moderate feedback issues from a terminal.
Usage: ghfeedback [-c config.yaml] list | submit | vote N | edit N | close N
| reopen N | comments N | comment N.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List

from ghfeedback.adapters import GatewayError
from ghfeedback.config import AppConfig, load_config
from ghfeedback.logging import FeedbackLogging
from ghfeedback.models import Issue, IssueType, SortOrder
from ghfeedback.services import FeedbackSyncService, VotingError

LOG = logging.getLogger("ghfeedback.main")

_TYPES = {"all": IssueType.ALL, "bugs": IssueType.BUGS, "features": IssueType.FEATURES}
_SORTS = {"votes": SortOrder.VOTES, "recent": SortOrder.MOST_RECENT}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ghfeedback",
        description="Feedback (bug reports, feature requests, votes) stored as GitHub issues",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log at DEBUG level, including HTTP traces",
    )
    sub = parser.add_subparsers(dest="command")

    p_list = sub.add_parser("list", help="List open (or closed) feedback")
    p_list.add_argument("--closed", action="store_true", help="List closed feedback")
    p_list.add_argument("--type", choices=sorted(_TYPES), default="all")
    p_list.add_argument("--sort", choices=sorted(_SORTS), default="votes")
    p_list.add_argument("--mine", action="store_true", help="Only issues submitted from this device")

    for name, help_text in (("submit", "Submit new feedback"), ("edit", "Edit feedback you submitted")):
        p = sub.add_parser(name, help=help_text)
        if name == "edit":
            p.add_argument("number", type=int)
        p.add_argument("--title", required=True)
        p.add_argument("--description", required=True)
        p.add_argument("--type", choices=["bugs", "features"], default="bugs")
        p.add_argument("--device-info", default=None)
        p.add_argument("--email", default=None, help="Contact email added to the issue")

    for name, help_text in (
        ("vote", "Upvote an issue (once per device)"),
        ("close", "Close feedback you submitted"),
        ("reopen", "Reopen feedback you submitted"),
        ("comments", "Show comments on an issue"),
    ):
        sub.add_parser(name, help=help_text).add_argument("number", type=int)

    p_comment = sub.add_parser("comment", help="Add a comment to an issue")
    p_comment.add_argument("number", type=int)
    p_comment.add_argument("--body", required=True)

    return parser.parse_args(argv)


def _format_issue(issue: Issue, service: FeedbackSyncService) -> str:
    kind = "bug" if issue.is_bug else "feature" if issue.is_feature_request else "other"
    flags = ""
    if service.has_voted(issue.number):
        flags += " [voted]"
    if service.owns_issue(issue.number):
        flags += " [mine]"
    if issue.was_edited:
        flags += " (edited)"
    extra = issue.next_label
    badge = f" <{extra.name}>" if extra else ""
    return f"#{issue.number:<5} {issue.vote_count:>4} votes  {kind:<8} {issue.title}{badge}{flags}"


def _require_owner(service: FeedbackSyncService, number: int) -> None:
    """Refuse changes to issues not submitted from this device."""
    if not service.owns_issue(number):
        raise PermissionError(f"Issue #{number} was not submitted from this device")


def _cmd_list(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    issue_type = _TYPES[args.type]
    if args.closed:
        ok = service.load_closed_issues()
        issues = service.visible_closed_issues(issue_type)
    else:
        ok = service.load_open_issues()
        issues = service.visible_issues(issue_type, _SORTS[args.sort])
    if not ok:
        print(f"Error: {service.state.error_message}", file=sys.stderr)
        return 1
    if args.mine:
        owned = service.owned_issues()
        issues = [i for i in issues if i.number in owned]
    for issue in issues:
        print(_format_issue(issue, service))
    if not issues:
        print("No feedback found.")
    return 0


def _cmd_submit(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    number = service.submit_feedback(
        args.title,
        args.description,
        _TYPES[args.type],
        device_info=args.device_info,
        contact_email=args.email,
    )
    print(f"Submitted #{number}")
    return 0


def _cmd_edit(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    _require_owner(service, args.number)
    issue = service.edit_feedback(
        args.number,
        args.title,
        args.description,
        _TYPES[args.type],
        device_info=args.device_info,
        contact_email=args.email,
    )
    print(f"Updated #{issue.number}")
    return 0


def _cmd_vote(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    count = service.upvote(args.number)
    print(f"Voted for #{args.number} ({count} votes)")
    return 0


def _cmd_close(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    _require_owner(service, args.number)
    service.close_feedback(args.number)
    print(f"Closed #{args.number}")
    return 0


def _cmd_reopen(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    _require_owner(service, args.number)
    service.reopen_feedback(args.number)
    print(f"Reopened #{args.number}")
    return 0


def _cmd_comments(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    comments = service.load_comments(args.number)
    for c in comments:
        print(f"{c.user.login} ({c.created_at}):\n{c.body}\n")
    if not comments:
        print("No comments yet.")
    return 0


def _cmd_comment(service: FeedbackSyncService, args: argparse.Namespace) -> int:
    comment = service.add_comment(args.number, args.body)
    print(f"Added comment {comment.id}")
    return 0


COMMANDS: Dict[str, Callable[[FeedbackSyncService, argparse.Namespace], int]] = {
    "list": _cmd_list,
    "submit": _cmd_submit,
    "edit": _cmd_edit,
    "vote": _cmd_vote,
    "close": _cmd_close,
    "reopen": _cmd_reopen,
    "comments": _cmd_comments,
    "comment": _cmd_comment,
}


def build_service(config: AppConfig) -> FeedbackSyncService:
    """Feedback service for the configured repository."""
    return FeedbackSyncService.from_credentials(
        config.credentials(),
        state_dir=config.store.state_dir,
        api_url=config.github.api_url,
        timeout=config.github.timeout,
    )


def main(argv: List[str] | None = None) -> int:
    """Entry point: load config, then dispatch the subcommand."""
    args = parse_args(argv)
    config = load_config(args.config)
    FeedbackLogging(config.logging, verbose=args.verbose).setup()

    try:
        config.credentials()
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    if args.check:
        print("Config OK:", f"{config.github.owner}/{config.github.repo}")
        return 0
    if not args.command:
        print("No command given; see --help", file=sys.stderr)
        return 1

    service = build_service(config)
    try:
        return COMMANDS[args.command](service, args)
    except (GatewayError, VotingError, PermissionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
