"""Use case for uploading built activity bundles to the master."""

from __future__ import annotations

from pathlib import Path

from spacectl.domain.commands import CommandKind
from spacectl.domain.entities import ProjectFolder
from spacectl.domain.ports import UseCaseError
from spacectl.usecases.command_base import FleetCommand, InvocationContext


def archive_path(folder: ProjectFolder) -> Path:
    """Location of the workbench output for ``folder``."""
    return folder.path / "build" / folder.archive_name()


class UploadActivities(FleetCommand):
    """Upload ``build/<activity>-<version>.zip`` of every discovered project."""

    kind = CommandKind.UPLOAD

    def execute(self, ctx: InvocationContext) -> None:
        if ctx.uploader is None:
            raise UseCaseError("NO_UPLOADER", "No upload endpoint configured.")
        for folder in ctx.folders:
            path = archive_path(folder)
            if not path.is_file():
                raise UseCaseError(
                    "ARCHIVE_MISSING",
                    f"Built bundle for {folder.activity} not found: {path}",
                    hint="Add --build to build the project first.",
                )
            ctx.uploader.upload_activity(str(path))
            self._log.info("Uploaded %s", path.name)


__all__ = ["UploadActivities", "archive_path"]
