"""Domain value objects shared across adapters, use-cases, and the runner."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


ACTIVE_FAMILY_STATES = frozenset(
    {
        "running",
        "active",
        "starting",
        "activating",
        "startup_attempt",
        "activate_attempt",
    }
)
"""Runtime states that count as "was running" when reactivating."""


def normalize_state(raw: Optional[str]) -> str:
    """Return a lower-case runtime state token, ``unknown`` when missing.

    The master reports states either as bare tokens (``RUNNING``) or as
    dotted description keys (``space.activity.state.running``); only the last
    component is kept.
    """
    text = str(raw or "").strip()
    if not text:
        return "unknown"
    token = text.rsplit(".", 1)[-1]
    return token.strip().lower().replace(" ", "_").replace("-", "_") or "unknown"


def is_active_state(state: Optional[str]) -> bool:
    return normalize_state(state) in ACTIVE_FAMILY_STATES


@dataclass(frozen=True)
class LiveActivity:
    """Deployed instance of an activity on one controller, as last reported by the master."""

    id: str
    """Master-assigned identifier used to address the live activity in RPCs."""
    uuid: str
    """Globally unique identifier of the live activity."""
    name: str
    """Operator-facing display name."""
    activity: str
    """Identifying name of the activity this instance implements."""
    controller: str
    """Name of the controller hosting the instance."""
    state: str = "unknown"
    """Normalized runtime state reported by the controller."""
    activity_version: Optional[str] = None
    """Version of the implemented activity, when the master reports it."""

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("LiveActivity.id must be a non-empty string.")
        object.__setattr__(self, "id", self.id.strip())
        object.__setattr__(self, "state", normalize_state(self.state))

    def matches(self, reference: str) -> bool:
        """Return True when ``reference`` names this instance by id, UUID, or name."""
        ref = str(reference or "").strip()
        if not ref:
            return False
        return ref in (self.id, self.uuid, self.name)

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_FAMILY_STATES


@dataclass(frozen=True)
class ProjectFolder:
    """Project directory discovered on disk together with its descriptor data."""

    path: Path
    activity: str
    """Identifying name from the project descriptor."""
    version: Optional[str] = None
    project_type: str = "activity"

    def __post_init__(self) -> None:
        if not isinstance(self.activity, str) or not self.activity.strip():
            raise ValueError("ProjectFolder.activity must be a non-empty string.")
        object.__setattr__(self, "activity", self.activity.strip())
        object.__setattr__(self, "path", Path(self.path))

    def archive_name(self) -> str:
        """File name of the built activity bundle inside ``build/``."""
        if self.version:
            return f"{self.activity}-{self.version}.zip"
        return f"{self.activity}.zip"


__all__ = [
    "ACTIVE_FAMILY_STATES",
    "LiveActivity",
    "ProjectFolder",
    "is_active_state",
    "normalize_state",
]
