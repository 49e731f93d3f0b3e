"""Shared plumbing for fleet commands: the invocation context and the command base class.

Every command runs in three phases driven by ``spacectl.app.runner.Runner``:
``validate`` (against the resolved selection), ``prep`` (local work only) and
``execute`` (RPCs through the master port). The context carries everything a
command reads; the only state commands write back is recorded in the
context's runtime fields so later commands in the same invocation can see it.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, List, Optional, TextIO, Tuple

from spacectl.domain.commands import CommandKind, CommandRequest, Requirements
from spacectl.domain.entities import LiveActivity, ProjectFolder
from spacectl.domain.errors import CommandValidationError
from spacectl.domain.ports import BuilderPort, MasterPort, UploadPort, UseCaseError
from spacectl.domain.selection import Selection, SelectionRequest


@dataclass(frozen=True)
class CommandOptions:
    """Command targets given on the command line that are not selection references."""

    groups: Tuple[str, ...] = ()
    controllers: Tuple[str, ...] = ()
    version: Optional[str] = None


@dataclass
class InvocationContext:
    """Inputs and cross-command records for one invocation."""

    selection: Selection = field(default_factory=Selection)
    selection_request: SelectionRequest = field(default_factory=SelectionRequest)
    folders: Tuple[ProjectFolder, ...] = ()
    options: CommandOptions = field(default_factory=CommandOptions)
    master: Optional[MasterPort] = None
    uploader: Optional[UploadPort] = None
    builder: Optional[BuilderPort] = None
    settle_delay_s: float = 0.0
    sleep: Callable[[float], None] = time.sleep
    out: TextIO = field(default_factory=lambda: sys.stdout)
    stdin: TextIO = field(default_factory=lambda: sys.stdin)

    # Written by commands during execute.
    captured_states: Optional[Dict[str, str]] = None
    """Live activity id -> runtime state before shutdown (reactivate)."""
    replaced: Dict[str, LiveActivity] = field(default_factory=dict)
    """Original live activity id -> replacement created by upgrade."""

    def current(self, live: LiveActivity) -> LiveActivity:
        """Return the instance that now stands for ``live`` in this invocation."""
        return self.replaced.get(live.id, live)

    def targets(self) -> List[LiveActivity]:
        return [self.current(live) for live in self.selection.live_activities]

    def require_master(self) -> MasterPort:
        if self.master is None:
            raise UseCaseError("NO_MASTER", "No connection to the master is open.")
        return self.master

    @property
    def group(self) -> str:
        return self.options.groups[0]

    @property
    def controller(self) -> str:
        return self.options.controllers[0]


class FleetCommand:
    """Base class for one requested command kind."""

    kind: ClassVar[CommandKind]

    def __init__(self, request: CommandRequest) -> None:
        if request.kind is not self.kind:
            raise ValueError(f"{type(self).__name__} cannot run {request.kind}")
        self.request = request
        self._log = logging.getLogger(__name__)

    @property
    def requirements(self) -> Requirements:
        return self.request.requirements

    @property
    def name(self) -> str:
        return self.kind.value

    def validate(self, ctx: InvocationContext) -> None:
        """Command-specific checks run after the shared requirement checks."""

    def prep(self) -> None:
        """Local preparation; must not talk to the master."""

    def execute(self, ctx: InvocationContext) -> None:
        raise NotImplementedError

    def fail(self, message: str) -> CommandValidationError:
        return CommandValidationError(self.name, message)


__all__ = ["CommandOptions", "FleetCommand", "InvocationContext"]
