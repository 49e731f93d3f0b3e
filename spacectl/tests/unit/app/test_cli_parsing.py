from __future__ import annotations

import io

import pytest

from spacectl.app.cli import parse_invocation
from spacectl.domain.commands import CommandKind
from spacectl.domain.errors import UsageError


def _kinds(argv):
    return parse_invocation(argv, stderr=io.StringIO()).invocation.plan.kinds()


def test_flag_order_does_not_change_execution_order() -> None:
    expected = (CommandKind.BUILD, CommandKind.SHUTDOWN, CommandKind.DEPLOY)

    assert _kinds(["--deploy", "--build", "proj"]) == expected
    assert _kinds(["--build", "--deploy", "proj"]) == expected


def test_selection_targets_and_paths_are_collected() -> None:
    parsed = parse_invocation(
        [
            "--activity", "foo",
            "--live-activity", "12",
            "--controller", "C1",
            "--create", "bar",
            "--version", "2.0",
            "src/a",
            "--group", "wall",
            "src/b",
            "--host", "master.local",
            "--port", "9000",
        ],
        stderr=io.StringIO(),
    )

    inv = parsed.invocation
    assert inv.selection_request.activities == ("foo",)
    assert inv.selection_request.live_activities == ("12",)
    assert inv.options.controllers == ("C1",)
    assert inv.options.groups == ("wall",)
    assert inv.options.version == "2.0"
    assert inv.paths == ("src/a", "src/b")
    assert inv.plan.get(CommandKind.CREATE).params == {"name": "bar"}
    assert parsed.overrides == {"host": "master.local", "port": 9000}


def test_reactivate_overrides_activate() -> None:
    plan = parse_invocation(["--activate", "--reactivate", "--all"], stderr=io.StringIO()).invocation.plan

    assert plan.kinds() == (CommandKind.CAPTURE_FLEET_STATE, CommandKind.SHUTDOWN, CommandKind.ACTIVATE)
    assert plan.get(CommandKind.ACTIVATE).params == {"only_previously_active": True}


def test_config_dash_reads_stdin() -> None:
    plan = parse_invocation(["--config", "-", "--all"], stderr=io.StringIO()).invocation.plan

    assert plan.get(CommandKind.CONFIGURE).params == {"source": "-"}


def test_no_command_prints_usage_and_raises() -> None:
    stderr = io.StringIO()

    with pytest.raises(UsageError):
        parse_invocation(["--all"], stderr=stderr)

    assert stderr.getvalue().startswith("usage: spacectl")


def test_unknown_flag_raises_usage_error() -> None:
    with pytest.raises(UsageError) as exc_info:
        parse_invocation(["--deploy", "--bogus"], stderr=io.StringIO())

    assert exc_info.value.code == "USAGE"
    assert "--bogus" in exc_info.value.message


def test_bad_port_raises_usage_error() -> None:
    with pytest.raises(UsageError):
        parse_invocation(["--list", "--port", "abc"], stderr=io.StringIO())
