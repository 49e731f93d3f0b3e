from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, TextIO

from spacectl.domain.commands import CommandKind, CommandRequest
from spacectl.domain.config_text import parse_configuration
from spacectl.domain.errors import ConfigurationError
from spacectl.usecases.command_base import FleetCommand, InvocationContext

STDIN_SOURCE = "-"


class ConfigureLiveActivities(FleetCommand):
    """Push one ``key = value`` configuration to every target live activity.

    ``source`` is a file path, or ``-`` for standard input.
    """

    kind = CommandKind.CONFIGURE

    def __init__(self, request: CommandRequest) -> None:
        super().__init__(request)
        self._stdin: Optional[TextIO] = None
        self.config: Optional[Dict[str, str]] = None

    @property
    def source(self) -> str:
        return str(self.request.params.get("source") or "").strip()

    def validate(self, ctx: InvocationContext) -> None:
        if not self.source:
            raise self.fail("a configuration file (or '-' for stdin) is required")
        self._stdin = ctx.stdin
        if self.source != STDIN_SOURCE and not Path(self.source).is_file():
            raise self.fail(f"configuration file not found: {self.source}")

    def prep(self) -> None:
        if self.source == STDIN_SOURCE:
            text = self._stdin.read() if self._stdin is not None else ""
        else:
            try:
                text = Path(self.source).read_text(encoding="utf-8")
            except OSError as exc:
                raise ConfigurationError(f"Cannot read {self.source}: {exc}") from exc
        try:
            self.config = parse_configuration(text)
        except ValueError as exc:
            raise ConfigurationError(f"{self.source}: {exc}") from exc
        self._log.debug("Parsed %d configuration entries from %s", len(self.config), self.source)

    def execute(self, ctx: InvocationContext) -> None:
        master = ctx.require_master()
        if self.config is None:
            self.prep()
        for live in ctx.targets():
            master.configure_live_activity(live.id, self.config)
            self._log.info("Configured %s (%d keys)", live.name, len(self.config))


__all__ = ["ConfigureLiveActivities", "STDIN_SOURCE"]
