from __future__ import annotations

from typing import Tuple

from spacectl.domain.commands import CommandKind
from spacectl.usecases.command_base import FleetCommand, InvocationContext


def candidate_activities(ctx: InvocationContext) -> Tuple[str, ...]:
    """Activities a create can target.

    The selected activities when there are any; otherwise the explicitly named
    ones, so a freshly uploaded activity without live activities can still be
    instantiated.
    """
    if ctx.selection.activities:
        return ctx.selection.activities
    return ctx.selection_request.activities


class CreateLiveActivity(FleetCommand):
    """Create one live activity of the single selected activity on one controller."""

    kind = CommandKind.CREATE

    @property
    def live_activity_name(self) -> str:
        return str(self.request.params.get("name") or "").strip()

    def validate(self, ctx: InvocationContext) -> None:
        if not self.live_activity_name:
            raise self.fail("a name for the new live activity is required")

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        (activity,) = candidate_activities(ctx)
        created = master.create_live_activity(
            self.live_activity_name,
            activity,
            ctx.controller,
            version=ctx.options.version,
        )
        self._log.info(
            "Created live activity %s (%s) of %s on %s",
            created.name,
            created.id,
            activity,
            ctx.controller,
        )


__all__ = ["CreateLiveActivity", "candidate_activities"]
