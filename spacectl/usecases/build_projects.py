from __future__ import annotations

from spacectl.domain.commands import CommandKind
from spacectl.domain.ports import UseCaseError
from spacectl.usecases.command_base import FleetCommand, InvocationContext


class BuildProjects(FleetCommand):
    """Build every discovered project folder with the workbench."""

    kind = CommandKind.BUILD

    def execute(self, ctx: InvocationContext) -> None:
        if ctx.builder is None:
            raise UseCaseError("NO_BUILDER", "No workbench builder configured.")
        for folder in ctx.folders:
            ctx.builder.build(folder)
            self._log.info("Built %s", folder.activity)
