"""Invocation runner: discovery, fleet snapshot, validation, prep, execution.

One ``Runner.run`` call is one CLI invocation. The master connection is
opened only when a requested command needs the fleet, the fleet snapshot is
taken exactly once, and the channel is closed on every exit path.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, TextIO, Tuple

from ..adapters.activity_upload_rest import ActivityUploadRestAdapter
from ..adapters.api_errors import ApiError
from ..adapters.builder_subprocess import SubprocessBuilder
from ..adapters.master_channel import MasterChannel
from ..adapters.master_rpc import MasterRpcAdapter
from ..adapters.project_fs import ProjectFsAdapter
from ..domain.commands import CommandPlan
from ..domain.ports import BuilderPort, DiscoveryPort, MasterPort, UploadPort
from ..domain.selection import SelectionRequest, resolve_selection
from ..usecases.command_base import CommandOptions, InvocationContext
from ..usecases.discover_projects import DiscoverProjects
from ..usecases.error_mapping import map_api_error
from ..usecases.registry import build_commands
from ..usecases.validate_commands import ValidateCommands
from .settings import SettingsConfig


@dataclass
class Invocation:
    """Everything parsed from one command line."""

    plan: CommandPlan
    selection_request: SelectionRequest = field(default_factory=SelectionRequest)
    options: CommandOptions = field(default_factory=CommandOptions)
    paths: Tuple[str, ...] = ()


def default_channel(settings: SettingsConfig) -> MasterChannel:
    return MasterChannel(
        settings.websocket_url,
        open_timeout_s=settings.open_timeout_s,
        response_timeout_s=settings.response_timeout_s,
    )


class Runner:
    """Wire adapters into the use cases and drive one invocation."""

    def __init__(
        self,
        settings: SettingsConfig,
        *,
        discovery: Optional[DiscoveryPort] = None,
        channel_factory: Callable[[SettingsConfig], MasterChannel] = default_channel,
        master_factory: Callable[[MasterChannel], MasterPort] = MasterRpcAdapter,
        uploader: Optional[UploadPort] = None,
        builder: Optional[BuilderPort] = None,
        out: Optional[TextIO] = None,
        stdin: Optional[TextIO] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings
        self.discover = DiscoverProjects(discovery or ProjectFsAdapter())
        self.validate = ValidateCommands()
        self._channel_factory = channel_factory
        self._master_factory = master_factory
        self._uploader = uploader
        self._builder = builder
        self._out = out
        self._stdin = stdin
        self._sleep = sleep
        self._log = logging.getLogger(__name__)

    def run(self, invocation: Invocation) -> InvocationContext:
        """Run every command of ``invocation`` and return the final context.

        Raises:
            UseCaseError: Any fatal failure, with adapter errors already mapped.
        """
        folders = self.discover(invocation.paths)
        commands = build_commands(invocation.plan)
        self._log.debug("Execution order: %s", ", ".join(c.name for c in commands))

        ctx = InvocationContext(
            selection_request=invocation.selection_request,
            folders=tuple(folders),
            options=invocation.options,
            uploader=self._uploader_for(commands),
            builder=self._builder_for(commands),
            settle_delay_s=self.settings.settle_delay_s,
            sleep=self._sleep,
            out=self._out or sys.stdout,
            stdin=self._stdin or sys.stdin,
        )

        channel: Optional[MasterChannel] = None
        try:
            if invocation.plan.needs_fleet:
                channel = self._channel_factory(self.settings)
                channel.connect()
                ctx.master = self._master_factory(channel)
                snapshot = ctx.master.list_live_activities()
                ctx.selection = resolve_selection(
                    snapshot, invocation.selection_request, folders
                )
                self._log.info(
                    "Selected %d of %d live activities",
                    len(ctx.selection.live_activities),
                    len(snapshot),
                )
                if ctx.selection.inferred:
                    self._log.info("Selection inferred from discovered project folders")

            self.validate(commands, ctx)
            for command in commands:
                command.prep()
            for command in commands:
                self._log.debug("Executing %s", command.name)
                command.execute(ctx)
        except ApiError as exc:
            raise map_api_error(exc, default_code="RUN_FAILED") from exc
        finally:
            if channel is not None:
                channel.close()
        return ctx

    def _uploader_for(self, commands: Sequence) -> Optional[UploadPort]:
        if self._uploader is not None or not any(c.requirements.files for c in commands):
            return self._uploader
        return ActivityUploadRestAdapter(
            self.settings.resolved_upload_url,
            request_timeout_s=self.settings.request_timeout_s,
            retries=self.settings.retries,
        )

    def _builder_for(self, commands: Sequence) -> Optional[BuilderPort]:
        if self._builder is not None or not any(c.requirements.files for c in commands):
            return self._builder
        return SubprocessBuilder(self.settings.workbench)


__all__ = ["Invocation", "Runner", "default_channel"]
