"""One-RPC-per-target lifecycle commands: shutdown, delete and deploy."""

from __future__ import annotations

from spacectl.domain.commands import CommandKind
from spacectl.usecases.command_base import FleetCommand, InvocationContext


class ShutdownLiveActivities(FleetCommand):
    kind = CommandKind.SHUTDOWN

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        for live in ctx.targets():
            master.shutdown_live_activity(live.id)
            self._log.info("Shut down %s (%s)", live.name, live.id)


class DeleteLiveActivities(FleetCommand):
    kind = CommandKind.DELETE_LIVE_ACTIVITY

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        for live in ctx.targets():
            master.delete_live_activity(live.id)
            self._log.info("Deleted live activity %s (%s)", live.name, live.id)


class DeployLiveActivities(FleetCommand):
    kind = CommandKind.DEPLOY

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        for live in ctx.targets():
            master.deploy_live_activity(live.id)
            self._log.info("Deployed %s to %s", live.name, live.controller)


__all__ = ["DeleteLiveActivities", "DeployLiveActivities", "ShutdownLiveActivities"]
