from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from .entities import LiveActivity, ProjectFolder

LiveActivityId = str
GroupRef = str
ControllerRef = str


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, hint: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint


# ---- Ports (Hexagonal boundaries) ----
class MasterPort(Protocol):
    """Live activity, group and controller operations against the master.
    Every call blocks until the master answers or the channel closes.
    """

    def list_live_activities(self) -> List[LiveActivity]: ...
    def probe_fleet_status(self) -> None: ...
    def create_live_activity(
        self,
        name: str,
        activity: str,
        controller: ControllerRef,
        *,
        version: Optional[str] = None,
    ) -> LiveActivity: ...
    def delete_live_activity(self, live_activity_id: LiveActivityId) -> None: ...
    def shutdown_live_activity(self, live_activity_id: LiveActivityId) -> None: ...
    def deploy_live_activity(self, live_activity_id: LiveActivityId) -> None: ...
    def configure_live_activity(
        self, live_activity_id: LiveActivityId, config: Mapping[str, str]
    ) -> None: ...
    def activate_live_activity(self, live_activity_id: LiveActivityId) -> None: ...
    def delete_activity(self, activity: str) -> None: ...
    def group_create(self, group: GroupRef, live_activity_ids: Iterable[LiveActivityId]) -> None: ...
    def group_add(self, group: GroupRef, live_activity_ids: Iterable[LiveActivityId]) -> None: ...
    def group_remove(self, group: GroupRef, live_activity_ids: Iterable[LiveActivityId]) -> None: ...
    def group_delete(self, group: GroupRef) -> None: ...


class UploadPort(Protocol):
    """Push built activity bundles to the master's repository."""

    def upload_activity(self, archive_path: str) -> Dict[str, Any]: ...


class BuilderPort(Protocol):
    """Run the external project builder for one project folder."""

    def build(self, folder: ProjectFolder) -> None: ...


class DiscoveryPort(Protocol):
    """Walk search paths and return the project folders found below them."""

    def discover(self, paths: Iterable[str]) -> List[ProjectFolder]: ...
