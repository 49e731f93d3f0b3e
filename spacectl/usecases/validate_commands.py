"""Fail-fast prerequisite checks for every requested command.

`ValidateCommands` runs once per invocation, after the selection has been
resolved and before anything is prepared or sent to the master.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from spacectl.domain.commands import CommandKind, Requirements
from spacectl.usecases.command_base import FleetCommand, InvocationContext
from spacectl.usecases.create_live_activity import candidate_activities


class ValidateCommands:
    """Use case: check the shared requirements, then each command's own checks."""

    def __call__(self, commands: Sequence[FleetCommand], ctx: InvocationContext) -> None:
        """Validate ``commands`` in the order given.

        Args:
            commands: Commands of the invocation, already in execution order.
            ctx: Context carrying the resolved selection and command targets.

        Raises:
            CommandValidationError: On the first unmet requirement.
        """
        for command in commands:
            check_requirements(command, ctx)
            command.validate(ctx)


def check_requirements(command: FleetCommand, ctx: InvocationContext) -> None:
    req: Requirements = command.requirements
    selection = ctx.selection

    if req.fleet and ctx.master is None:
        raise command.fail("needs a connection to the master")
    if req.files and not ctx.folders:
        raise command.fail("no project folders found; pass one or more paths")
    if req.fleet:
        stray = unresolved_references(command, ctx)
        if stray:
            raise command.fail("no match for " + ", ".join(stray))
    if req.exactly_one_activity:
        candidates = candidate_activities(ctx)
        if len(candidates) != 1:
            raise command.fail(
                f"exactly one activity must be selected (got {len(candidates)})"
            )
    if req.activities and not selection.activities:
        raise command.fail("no activities selected")
    if req.live_activities and not selection.live_activities:
        raise command.fail("no live activities selected")
    if req.exactly_one_group and len(ctx.options.groups) != 1:
        raise command.fail(
            f"exactly one --group is required (got {len(ctx.options.groups)})"
        )
    if req.exactly_one_controller and len(ctx.options.controllers) != 1:
        raise command.fail(
            f"exactly one --controller is required (got {len(ctx.options.controllers)})"
        )



def unresolved_references(command: FleetCommand, ctx: InvocationContext) -> Tuple[str, ...]:
    """Explicit references that matched nothing and that ``command`` would miss.

    Create may name an activity that has no live activities yet; that name is
    its target rather than a stale reference.
    """
    unmatched = ctx.selection.unmatched
    if command.kind is CommandKind.CREATE and not ctx.selection.activities:
        named = set(ctx.selection_request.activities)
        unmatched = tuple(ref for ref in unmatched if ref not in named)
    return unmatched


__all__ = ["ValidateCommands", "check_requirements", "unresolved_references"]
