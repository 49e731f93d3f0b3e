from __future__ import annotations

from typing import Dict, List, Sequence

from spacectl.domain.commands import CommandKind
from spacectl.domain.entities import LiveActivity
from spacectl.usecases.command_base import FleetCommand, InvocationContext

COLUMNS = ("ID", "NAME", "ACTIVITY", "VERSION", "CONTROLLER", "STATE")


class ListLiveActivities(FleetCommand):
    """Print the selected live activities with their current state.

    Runs last, so the fleet is read again to show the effect of the commands
    that ran before it.
    """

    kind = CommandKind.LIST

    def execute(self, ctx: InvocationContext) -> None:
        fresh: Dict[str, LiveActivity] = {
            live.id: live for live in ctx.require_master().list_live_activities()
        }
        rows: List[LiveActivity] = []
        for live in ctx.targets():
            rows.append(fresh.get(live.id, live))
        if not rows:
            ctx.out.write("No live activities selected.\n")
            return
        ctx.out.write(format_table(rows))


def format_table(rows: Sequence[LiveActivity]) -> str:
    cells = [COLUMNS] + [
        (
            live.id,
            live.name,
            live.activity,
            live.activity_version or "-",
            live.controller,
            live.state,
        )
        for live in rows
    ]
    widths = [max(len(str(row[i])) for row in cells) for i in range(len(COLUMNS))]
    lines = ["  ".join(str(value).ljust(widths[i]) for i, value in enumerate(row)).rstrip() for row in cells]
    return "\n".join(lines) + "\n"


__all__ = ["ListLiveActivities", "format_table"]
