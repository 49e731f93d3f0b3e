from __future__ import annotations

from spacectl.domain.commands import CommandKind
from spacectl.usecases.command_base import FleetCommand, InvocationContext


class CaptureFleetState(FleetCommand):
    """Record every live activity's runtime state before anything is shut down.

    Controllers report status asynchronously, so the master is first asked to
    refresh the whole fleet and given ``settle_delay_s`` to receive the
    updates before the list is read back.
    """

    kind = CommandKind.CAPTURE_FLEET_STATE

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        master.probe_fleet_status()
        if ctx.settle_delay_s > 0:
            ctx.sleep(ctx.settle_delay_s)
        fleet = master.list_live_activities()
        ctx.captured_states = {live.id: live.state for live in fleet}
        active = sum(1 for live in fleet if live.is_active)
        self._log.info("Captured state of %d live activities (%d active)", len(fleet), active)
