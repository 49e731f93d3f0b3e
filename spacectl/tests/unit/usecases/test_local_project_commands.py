from __future__ import annotations

import pytest

from spacectl.domain.commands import CommandKind
from spacectl.domain.entities import ProjectFolder
from spacectl.domain.ports import UseCaseError
from spacectl.usecases.upload_activities import archive_path
from spacectl.tests.unit.usecases.helpers import (
    FakeMaster,
    RecordingBuilder,
    RecordingUploader,
    make_context,
    plan_of,
    run_plan,
)


def _project(tmp_path, name: str, version: str, *, built: bool) -> ProjectFolder:
    folder = ProjectFolder(path=tmp_path / name, activity=name, version=version)
    if built:
        bundle = archive_path(folder)
        bundle.parent.mkdir(parents=True)
        bundle.write_bytes(b"PK")
    return folder


def test_build_then_upload_every_project(tmp_path) -> None:
    folders = [
        _project(tmp_path, "lobby.display", "1.0.0", built=True),
        _project(tmp_path, "kiosk.app", "0.2.0", built=True),
    ]
    uploader, builder = RecordingUploader(), RecordingBuilder()
    ctx = make_context(FakeMaster([]), folders=folders, uploader=uploader, builder=builder)
    ctx.master = None

    run_plan(plan_of(CommandKind.UPLOAD, CommandKind.BUILD), ctx)

    assert builder.built == ["lobby.display", "kiosk.app"]
    assert uploader.uploaded == [
        str(tmp_path / "lobby.display" / "build" / "lobby.display-1.0.0.zip"),
        str(tmp_path / "kiosk.app" / "build" / "kiosk.app-0.2.0.zip"),
    ]


def test_upload_without_built_bundle_suggests_build(tmp_path) -> None:
    folders = [_project(tmp_path, "lobby.display", "1.0.0", built=False)]
    ctx = make_context(FakeMaster([]), folders=folders, uploader=RecordingUploader())

    with pytest.raises(UseCaseError) as exc_info:
        run_plan(plan_of(CommandKind.UPLOAD), ctx)

    assert exc_info.value.code == "ARCHIVE_MISSING"
    assert "--build" in exc_info.value.hint
