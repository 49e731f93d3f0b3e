"""Dispatch table from command kind to the class that runs it."""

from __future__ import annotations

from typing import Dict, List, Type

from spacectl.domain.commands import CommandKind, CommandPlan, CommandRequest
from spacectl.usecases.activate_live_activities import ActivateLiveActivities
from spacectl.usecases.build_projects import BuildProjects
from spacectl.usecases.capture_fleet_state import CaptureFleetState
from spacectl.usecases.command_base import FleetCommand
from spacectl.usecases.configure_live_activities import ConfigureLiveActivities
from spacectl.usecases.create_live_activity import CreateLiveActivity
from spacectl.usecases.delete_activities import DeleteActivities
from spacectl.usecases.list_live_activities import ListLiveActivities
from spacectl.usecases.live_activity_lifecycle import (
    DeleteLiveActivities,
    DeployLiveActivities,
    ShutdownLiveActivities,
)
from spacectl.usecases.manage_groups import (
    AddToGroup,
    CreateGroup,
    DeleteGroup,
    RemoveFromGroup,
)
from spacectl.usecases.upgrade_live_activities import UpgradeLiveActivities
from spacectl.usecases.upload_activities import UploadActivities

COMMANDS: Dict[CommandKind, Type[FleetCommand]] = {
    CommandKind.BUILD: BuildProjects,
    CommandKind.CAPTURE_FLEET_STATE: CaptureFleetState,
    CommandKind.SHUTDOWN: ShutdownLiveActivities,
    CommandKind.DELETE_LIVE_ACTIVITY: DeleteLiveActivities,
    CommandKind.DELETE_ACTIVITY: DeleteActivities,
    CommandKind.UPLOAD: UploadActivities,
    CommandKind.CREATE: CreateLiveActivity,
    CommandKind.UPGRADE: UpgradeLiveActivities,
    CommandKind.DEPLOY: DeployLiveActivities,
    CommandKind.CONFIGURE: ConfigureLiveActivities,
    CommandKind.GROUP_REMOVE: RemoveFromGroup,
    CommandKind.GROUP_DELETE: DeleteGroup,
    CommandKind.GROUP_CREATE: CreateGroup,
    CommandKind.GROUP_ADD: AddToGroup,
    CommandKind.ACTIVATE: ActivateLiveActivities,
    CommandKind.LIST: ListLiveActivities,
}


def build_command(request: CommandRequest) -> FleetCommand:
    return COMMANDS[request.kind](request)


def build_commands(plan: CommandPlan) -> List[FleetCommand]:
    """Instantiate every request of ``plan`` in execution order."""
    return [build_command(request) for request in plan]


__all__ = ["COMMANDS", "build_command", "build_commands"]
