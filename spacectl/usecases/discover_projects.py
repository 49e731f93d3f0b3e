"""Project discovery use case built on `DiscoveryPort`."""

from __future__ import annotations

from typing import Dict, List, Sequence

from spacectl.domain.entities import ProjectFolder
from spacectl.domain.ports import DiscoveryPort


class DiscoverProjects:
    """Use case: find every project folder below the given search paths."""

    def __init__(self, port: DiscoveryPort):
        self._port = port

    def __call__(self, paths: Sequence[str]) -> List[ProjectFolder]:
        """Walk ``paths`` and return the project folders found, in walk order.

        Raises:
            DiscoveryError: A search path does not exist.
        """
        if not paths:
            return []
        return list(self._port.discover(paths))


def folders_by_activity(folders: Sequence[ProjectFolder]) -> Dict[str, ProjectFolder]:
    """Map activity name to its folder; the first folder wins on duplicates."""
    mapping: Dict[str, ProjectFolder] = {}
    for folder in folders:
        mapping.setdefault(folder.activity, folder)
    return mapping


__all__ = ["DiscoverProjects", "folders_by_activity"]
