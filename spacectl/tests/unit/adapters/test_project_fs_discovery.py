from __future__ import annotations

import pytest

from spacectl.adapters.project_fs import ProjectFsAdapter
from spacectl.domain.errors import DiscoveryError


def _descriptor(folder, name: str, version: str = "1.0.0", kind: str = "activity") -> None:
    folder.mkdir(parents=True, exist_ok=True)
    (folder / "project.xml").write_text(
        f'<project type="{kind}" builder="java">'
        f"<name>{name} display</name>"
        f"<identifyingName>{name}</identifyingName>"
        f"<version>{version}</version>"
        "</project>",
        encoding="utf-8",
    )


def test_discovers_projects_and_reads_descriptor(tmp_path) -> None:
    _descriptor(tmp_path / "lobby", "lobby.display", "1.2.0")
    _descriptor(tmp_path / "nested" / "kiosk", "kiosk.app", "0.3.1", kind="library")

    folders = ProjectFsAdapter().discover([str(tmp_path)])

    by_name = {f.activity: f for f in folders}
    assert set(by_name) == {"lobby.display", "kiosk.app"}
    assert by_name["lobby.display"].version == "1.2.0"
    assert by_name["lobby.display"].path == tmp_path / "lobby"
    assert by_name["kiosk.app"].project_type == "library"


def test_skips_version_control_directories(tmp_path) -> None:
    _descriptor(tmp_path / ".git" / "hidden", "hidden.app")
    _descriptor(tmp_path / "CVS" / "old", "old.app")
    _descriptor(tmp_path / "real", "real.app")

    folders = ProjectFsAdapter().discover([str(tmp_path)])

    assert [f.activity for f in folders] == ["real.app"]


def test_does_not_descend_below_a_project(tmp_path) -> None:
    _descriptor(tmp_path / "outer", "outer.app")
    _descriptor(tmp_path / "outer" / "resources" / "inner", "inner.app")

    folders = ProjectFsAdapter().discover([str(tmp_path)])

    assert [f.activity for f in folders] == ["outer.app"]


def test_same_project_reached_twice_is_reported_once(tmp_path) -> None:
    _descriptor(tmp_path / "lobby", "lobby.display")

    folders = ProjectFsAdapter().discover([str(tmp_path), str(tmp_path / "lobby")])

    assert len(folders) == 1


def test_descriptor_without_identifying_name_is_ignored(tmp_path) -> None:
    (tmp_path / "broken").mkdir()
    (tmp_path / "broken" / "project.xml").write_text("<project><version>1</version></project>")

    assert ProjectFsAdapter().discover([str(tmp_path)]) == []


def test_namespaced_descriptor_is_read(tmp_path) -> None:
    (tmp_path / "ns").mkdir()
    (tmp_path / "ns" / "project.xml").write_text(
        '<project xmlns="http://example.org/project">'
        "<identifyingName>ns.app</identifyingName></project>"
    )

    (folder,) = ProjectFsAdapter().discover([str(tmp_path)])

    assert folder.activity == "ns.app"
    assert folder.version is None


def test_unparseable_descriptor_raises(tmp_path) -> None:
    (tmp_path / "bad").mkdir()
    (tmp_path / "bad" / "project.xml").write_text("<project>")

    with pytest.raises(DiscoveryError):
        ProjectFsAdapter().discover([str(tmp_path)])


def test_missing_path_raises_with_flag_hint(tmp_path) -> None:
    with pytest.raises(DiscoveryError) as exc_info:
        ProjectFsAdapter().discover(["--deploy"])

    assert exc_info.value.code == "PATH_NOT_FOUND"
    assert "flag" in exc_info.value.hint

    with pytest.raises(DiscoveryError) as plain:
        ProjectFsAdapter().discover([str(tmp_path / "absent")])
    assert plain.value.hint is None
