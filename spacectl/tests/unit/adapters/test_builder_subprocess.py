from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from spacectl.adapters import builder_subprocess
from spacectl.adapters.builder_subprocess import SubprocessBuilder
from spacectl.domain.entities import ProjectFolder
from spacectl.domain.ports import UseCaseError

FOLDER = ProjectFolder(path=Path("/src/lobby"), activity="lobby.display", version="1.0.0")


def test_build_runs_workbench_with_folder_and_build_verb(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(builder_subprocess.shutil, "which", lambda exe: f"/usr/bin/{exe}")

    def fake_run(args, **kwargs):
        calls.append(args)
        return subprocess.CompletedProcess(args, 0, stdout="ok\n", stderr="")

    monkeypatch.setattr(builder_subprocess.subprocess, "run", fake_run)

    SubprocessBuilder("isworkbench --quiet").build(FOLDER)

    assert calls == [["isworkbench", "--quiet", str(FOLDER.path), "build"]]


def test_non_zero_exit_raises_build_failed(monkeypatch) -> None:
    monkeypatch.setattr(builder_subprocess.shutil, "which", lambda exe: exe)
    monkeypatch.setattr(
        builder_subprocess.subprocess,
        "run",
        lambda args, **kw: subprocess.CompletedProcess(args, 2, stdout="", stderr="compile\nerror: missing class\n"),
    )

    with pytest.raises(UseCaseError) as exc_info:
        SubprocessBuilder(["wb"]).build(FOLDER)

    assert exc_info.value.code == "BUILD_FAILED"
    assert "missing class" in exc_info.value.message


def test_missing_executable_is_reported(monkeypatch) -> None:
    monkeypatch.setattr(builder_subprocess.shutil, "which", lambda exe: None)

    with pytest.raises(UseCaseError) as exc_info:
        SubprocessBuilder("wb").build(FOLDER)

    assert exc_info.value.code == "BUILDER_MISSING"


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError):
        SubprocessBuilder("")
