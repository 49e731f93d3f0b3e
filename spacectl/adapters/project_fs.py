"""Filesystem discovery adapter for activity project folders.

A project folder is any directory holding a ``project.xml`` descriptor. The
walk descends from each search path, skips version-control metadata
directories, and stops descending once a descriptor is found.

Dependencies:
    - ``xml.etree.ElementTree`` for reading descriptors.

Call context:
    - Invoked by ``spacectl.usecases.discover_projects.DiscoverProjects``.
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, List, Optional

from spacectl.domain.entities import ProjectFolder
from spacectl.domain.errors import DiscoveryError
from spacectl.domain.ports import DiscoveryPort

DESCRIPTOR_NAME = "project.xml"
SKIPPED_DIRS = frozenset({".git", ".svn", ".hg", "CVS", ".bzr"})


class ProjectFsAdapter(DiscoveryPort):
    """Walk directories and read project descriptors."""

    def __init__(self, descriptor_name: str = DESCRIPTOR_NAME) -> None:
        self.descriptor_name = descriptor_name
        self._log = logging.getLogger(__name__)

    def discover(self, paths: Iterable[str]) -> List[ProjectFolder]:
        folders: List[ProjectFolder] = []
        seen: set[Path] = set()
        for raw in paths:
            root = Path(raw).expanduser()
            if not root.exists():
                raise DiscoveryError(f"Search path does not exist: {raw}", hint=_flag_hint(raw))
            for folder in self._walk(root):
                resolved = folder.path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                folders.append(folder)
        self._log.debug("Discovered %d project folder(s)", len(folders))
        return folders

    def _walk(self, root: Path) -> Iterable[ProjectFolder]:
        if root.is_file():
            if root.name == self.descriptor_name:
                folder = self.read_descriptor(root)
                if folder is not None:
                    yield folder
            return
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRS)
            if self.descriptor_name not in filenames:
                continue
            folder = self.read_descriptor(Path(dirpath) / self.descriptor_name)
            if folder is not None:
                yield folder
            dirnames[:] = []

    def read_descriptor(self, descriptor: Path) -> Optional[ProjectFolder]:
        """Parse one descriptor; return None when it names no activity."""
        try:
            root = ET.parse(descriptor).getroot()
        except (ET.ParseError, OSError) as exc:
            raise DiscoveryError(f"Cannot read project descriptor {descriptor}: {exc}") from exc

        identifying_name = _child_text(root, "identifyingName")
        if not identifying_name:
            self._log.warning("Ignoring %s: no identifyingName", descriptor)
            return None
        return ProjectFolder(
            path=descriptor.parent,
            activity=identifying_name,
            version=_child_text(root, "version"),
            project_type=(root.get("type") or "activity").strip() or "activity",
        )


def _child_text(root: ET.Element, tag: str) -> Optional[str]:
    node = root.find(tag)
    if node is None:
        # descriptors written with a default namespace
        node = root.find(f"{{*}}{tag}")
    if node is None or node.text is None:
        return None
    text = node.text.strip()
    return text or None


def _flag_hint(raw: str) -> Optional[str]:
    if raw.startswith("-"):
        return (
            f"'{raw}' looks like a flag; check that the option before it "
            "was given its argument."
        )
    return None


__all__ = ["DESCRIPTOR_NAME", "ProjectFsAdapter"]
