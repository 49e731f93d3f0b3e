"""Builder adapter that shells out to the workbench for one project folder."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from typing import List, Sequence

from spacectl.domain.entities import ProjectFolder
from spacectl.domain.ports import BuilderPort, UseCaseError


class SubprocessBuilder(BuilderPort):
    """Run ``<workbench command> <project folder> build`` and check its exit code."""

    def __init__(self, command: str | Sequence[str]) -> None:
        argv = shlex.split(command) if isinstance(command, str) else list(command)
        if not argv:
            raise ValueError("SubprocessBuilder requires a workbench command")
        self.argv: List[str] = argv
        self._log = logging.getLogger(__name__)

    def build(self, folder: ProjectFolder) -> None:
        args = [*self.argv, str(folder.path), "build"]
        if shutil.which(args[0]) is None:
            raise UseCaseError(
                "BUILDER_MISSING",
                f"Workbench executable not found in PATH: {args[0]}",
            )
        self._log.info("Building %s in %s", folder.activity, folder.path)
        result = subprocess.run(args, capture_output=True, text=True)
        if result.stdout:
            self._log.debug("%s build output:\n%s", folder.activity, result.stdout.rstrip())
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip().splitlines()
            tail = detail[-1] if detail else f"exit code {result.returncode}"
            raise UseCaseError("BUILD_FAILED", f"Build of {folder.activity} failed: {tail}")


__all__ = ["SubprocessBuilder"]
