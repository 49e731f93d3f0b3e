"""Group membership commands. Each issues a single RPC naming the one ``--group``."""

from __future__ import annotations

from spacectl.domain.commands import CommandKind
from spacectl.usecases.command_base import FleetCommand, InvocationContext


class RemoveFromGroup(FleetCommand):
    kind = CommandKind.GROUP_REMOVE

    def execute(self, ctx: InvocationContext) -> None:
        ids = [live.id for live in ctx.targets()]
        ctx.require_master().group_remove(ctx.group, ids)
        self._log.info("Removed %d live activities from group %s", len(ids), ctx.group)


class DeleteGroup(FleetCommand):
    kind = CommandKind.GROUP_DELETE

    def execute(self, ctx: InvocationContext) -> None:
        ctx.require_master().group_delete(ctx.group)
        self._log.info("Deleted group %s", ctx.group)


class CreateGroup(FleetCommand):
    """Create the group, seeded with the selected live activities (possibly none)."""

    kind = CommandKind.GROUP_CREATE

    def execute(self, ctx: InvocationContext) -> None:
        ids = [live.id for live in ctx.targets()]
        ctx.require_master().group_create(ctx.group, ids)
        self._log.info("Created group %s with %d live activities", ctx.group, len(ids))


class AddToGroup(FleetCommand):
    kind = CommandKind.GROUP_ADD

    def execute(self, ctx: InvocationContext) -> None:
        ids = [live.id for live in ctx.targets()]
        ctx.require_master().group_add(ctx.group, ids)
        self._log.info("Added %d live activities to group %s", len(ids), ctx.group)


__all__ = ["AddToGroup", "CreateGroup", "DeleteGroup", "RemoveFromGroup"]
