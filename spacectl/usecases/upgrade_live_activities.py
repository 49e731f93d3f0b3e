from __future__ import annotations

from typing import Optional

from spacectl.domain.commands import CommandKind
from spacectl.domain.entities import LiveActivity
from spacectl.usecases.command_base import FleetCommand, InvocationContext
from spacectl.usecases.discover_projects import folders_by_activity


class UpgradeLiveActivities(FleetCommand):
    """Rebind selected live activities to a new activity version.

    The master cannot change the activity behind a live activity, so each
    outdated instance is deleted and recreated with the same name on the same
    controller. Later commands in the invocation address the replacement.
    The target version is ``--version`` when given, else the version of the
    discovered project folder for that activity.
    """

    kind = CommandKind.UPGRADE

    def validate(self, ctx: InvocationContext) -> None:
        missing = sorted(
            {
                live.activity
                for live in ctx.selection.live_activities
                if _target_version(ctx, live) is None
            }
        )
        if missing:
            raise self.fail(
                "no target version for " + ", ".join(missing) + "; pass --version or a project path"
            )

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        for live in ctx.selection.live_activities:
            version = _target_version(ctx, live)
            if live.activity_version == version:
                self._log.info("%s already runs %s %s", live.name, live.activity, version)
                continue
            master.delete_live_activity(live.id)
            replacement = master.create_live_activity(
                live.name, live.activity, live.controller, version=version
            )
            ctx.replaced[live.id] = replacement
            self._log.info(
                "Upgraded %s to %s %s (id %s -> %s)",
                live.name,
                live.activity,
                version,
                live.id,
                replacement.id,
            )


def _target_version(ctx: InvocationContext, live: LiveActivity) -> Optional[str]:
    if ctx.options.version:
        return ctx.options.version
    folder = folders_by_activity(ctx.folders).get(live.activity)
    return folder.version if folder is not None else None


__all__ = ["UpgradeLiveActivities"]
