"""Command-line surface: flags to ``Invocation`` plus settings overrides.

Command flags may appear in any order; execution order comes from
``spacectl.domain.commands.EXECUTION_ORDER`` alone.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, TextIO, Tuple

from ..domain.commands import CommandKind, CommandPlan
from ..domain.errors import UsageError
from ..domain.selection import SelectionRequest
from ..usecases.command_base import CommandOptions
from .runner import Invocation

PROG = "spacectl"

# flag dest -> command kind, for the flags that take no argument
_SWITCHES = (
    ("build", CommandKind.BUILD),
    ("shutdown", CommandKind.SHUTDOWN),
    ("delete_live_activity", CommandKind.DELETE_LIVE_ACTIVITY),
    ("delete_activity", CommandKind.DELETE_ACTIVITY),
    ("upload", CommandKind.UPLOAD),
    ("upgrade", CommandKind.UPGRADE),
    ("deploy", CommandKind.DEPLOY),
    ("group_remove", CommandKind.GROUP_REMOVE),
    ("group_delete", CommandKind.GROUP_DELETE),
    ("group_create", CommandKind.GROUP_CREATE),
    ("group_add", CommandKind.GROUP_ADD),
    ("activate", CommandKind.ACTIVATE),
    ("list", CommandKind.LIST),
)


@dataclass(frozen=True)
class ParsedCommandLine:
    invocation: Invocation
    overrides: Dict[str, Any]
    config_file: Optional[str] = None
    debug: bool = False


class CliParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad usage as ``UsageError`` instead of exiting."""

    def __init__(self, *args: Any, stderr: Optional[TextIO] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._stderr = stderr

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(self._stderr or sys.stderr)
        raise UsageError(message, hint=f"Run '{self.prog} --help' for the list of flags.")


def build_parser(*, stderr: Optional[TextIO] = None) -> CliParser:
    parser = CliParser(
        prog=PROG,
        description="Build, upload and manage live activities on an interactive spaces master.",
        allow_abbrev=False,
        stderr=stderr,
    )

    conn = parser.add_argument_group("connection")
    conn.add_argument("--host", help="Master host name (default: localhost).")
    conn.add_argument("--port", type=int, help="Master WebSocket port (default: 8090).")
    conn.add_argument("--config-file", metavar="PATH", help="JSON settings file (default: ~/.spacectl.json).")
    conn.add_argument("--debug", action="store_true", help="Log at DEBUG level.")

    sel = parser.add_argument_group("selection")
    sel.add_argument("--live-activity", action="append", default=[], metavar="REF",
                     help="Select a live activity by id, UUID or name. Repeatable.")
    sel.add_argument("--activity", action="append", default=[], metavar="NAME",
                     help="Select every live activity of an activity. Repeatable.")
    sel.add_argument("--all", action="store_true", dest="select_all",
                     help="Select every live activity in the fleet.")

    targets = parser.add_argument_group("command targets")
    targets.add_argument("--version", metavar="VERSION",
                         help="Activity version for --create and --upgrade.")
    targets.add_argument("--group", action="append", default=[], metavar="NAME",
                         help="Live activity group for the group commands.")
    targets.add_argument("--controller", action="append", default=[], metavar="NAME",
                         help="Controller hosting a live activity created with --create.")

    cmds = parser.add_argument_group("commands")
    cmds.add_argument("--build", action="store_true", help="Build discovered projects with the workbench.")
    cmds.add_argument("--shutdown", action="store_true", help="Shut down the selected live activities.")
    cmds.add_argument("--delete-live-activity", action="store_true",
                      help="Delete the selected live activities.")
    cmds.add_argument("--delete-activity", action="store_true",
                      help="Delete the selected activities and their live activities.")
    cmds.add_argument("--upload", action="store_true", help="Upload built bundles of discovered projects.")
    cmds.add_argument("--create", metavar="NAME",
                      help="Create a live activity of the selected activity on --controller.")
    cmds.add_argument("--upgrade", action="store_true",
                      help="Recreate the selected live activities at --version or the project's version.")
    cmds.add_argument("--deploy", action="store_true", help="Deploy the selected live activities.")
    cmds.add_argument("--config", metavar="PATH", dest="config_source",
                      help="Configure the selected live activities from 'key = value' lines; '-' reads stdin.")
    cmds.add_argument("--group-remove", action="store_true", help="Remove the selection from --group.")
    cmds.add_argument("--group-delete", action="store_true", help="Delete --group.")
    cmds.add_argument("--group-create", action="store_true", help="Create --group holding the selection.")
    cmds.add_argument("--group-add", action="store_true", help="Add the selection to --group.")
    cmds.add_argument("--activate", action="store_true", help="Activate the selected live activities.")
    cmds.add_argument("--reactivate", action="store_true",
                      help="Shut down, then activate only what was running before.")
    cmds.add_argument("--list", action="store_true", help="Print the selected live activities.")

    parser.add_argument("paths", nargs="*", metavar="PATH",
                        help="Directories searched for project.xml descriptors.")
    return parser


def plan_from_args(args: argparse.Namespace) -> CommandPlan:
    plan = CommandPlan()
    for dest, kind in _SWITCHES:
        if getattr(args, dest):
            plan.request(kind)
    if args.create is not None:
        plan.request(CommandKind.CREATE, name=args.create)
    if args.config_source is not None:
        plan.request(CommandKind.CONFIGURE, source=args.config_source)
    # reactivate replaces a plain --activate
    if args.reactivate:
        plan.reactivate()
    plan.expand()
    return plan


def settings_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    return {"host": args.host, "port": args.port}


def parse_invocation(
    argv: Optional[Sequence[str]] = None,
    *,
    stderr: Optional[TextIO] = None,
) -> ParsedCommandLine:
    """Parse ``argv`` into an ``Invocation`` and the settings-related flags.

    Raises:
        UsageError: Unknown flag, bad value, or no command requested.
    """
    parser = build_parser(stderr=stderr)
    args = parser.parse_intermixed_args(list(sys.argv[1:] if argv is None else argv))
    plan = plan_from_args(args)
    if not len(plan):
        parser.print_usage(stderr or sys.stderr)
        raise UsageError("no command requested", hint=f"Run '{PROG} --help' for the list of commands.")

    invocation = Invocation(
        plan=plan,
        selection_request=SelectionRequest(
            live_activities=tuple(args.live_activity),
            activities=tuple(args.activity),
            select_all=args.select_all,
        ),
        options=CommandOptions(
            groups=_unique(args.group),
            controllers=_unique(args.controller),
            version=(args.version or "").strip() or None,
        ),
        paths=tuple(args.paths),
    )
    return ParsedCommandLine(
        invocation=invocation,
        overrides=settings_overrides(args),
        config_file=args.config_file,
        debug=args.debug,
    )


def _unique(values: Sequence[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for value in values:
        text = str(value).strip()
        if text and text not in seen:
            seen.append(text)
    return tuple(seen)


__all__ = ["CliParser", "ParsedCommandLine", "build_parser", "parse_invocation", "plan_from_args"]
