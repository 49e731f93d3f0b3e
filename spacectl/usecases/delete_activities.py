from __future__ import annotations

from spacectl.domain.commands import CommandKind
from spacectl.usecases.command_base import FleetCommand, InvocationContext


class DeleteActivities(FleetCommand):
    """Remove the selected activities from the master's repository.

    Their live activities are shut down and deleted first by the implied
    shutdown and delete-live-activity commands, which run earlier in the
    execution order.
    """

    kind = CommandKind.DELETE_ACTIVITY

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        for activity in ctx.selection.activities:
            master.delete_activity(activity)
            instances = ctx.selection.known_activities.get(activity, frozenset())
            self._log.info(
                "Deleted activity %s (%d live activities in the fleet snapshot)",
                activity,
                len(instances),
            )
