from __future__ import annotations

from spacectl.domain.commands import CommandKind
from spacectl.domain.entities import is_active_state
from spacectl.domain.ports import UseCaseError
from spacectl.usecases.command_base import FleetCommand, InvocationContext


class ActivateLiveActivities(FleetCommand):
    """Activate the target live activities.

    When requested through reactivate (``only_previously_active``), only the
    instances captured in an active-family state before shutdown are brought
    back; everything else stays down.
    """

    kind = CommandKind.ACTIVATE

    @property
    def only_previously_active(self) -> bool:
        return bool(self.request.params.get("only_previously_active"))

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        if self.only_previously_active and ctx.captured_states is None:
            raise UseCaseError("STATE_NOT_CAPTURED", "Fleet state was not captured before shutdown.")

        skipped = 0
        for live in ctx.selection.live_activities:
            if self.only_previously_active and not is_active_state(ctx.captured_states.get(live.id)):
                skipped += 1
                continue
            target = ctx.current(live)
            master.activate_live_activity(target.id)
            self._log.info("Activated %s (%s)", target.name, target.id)
        if skipped:
            self._log.info("Left %d previously inactive live activities down", skipped)
