"""Hand-written port doubles shared by the use case tests."""

from __future__ import annotations

import io
import itertools
from dataclasses import replace
from typing import Dict, List, Optional

from spacectl.domain.commands import CommandKind, CommandPlan
from spacectl.domain.entities import LiveActivity
from spacectl.domain.selection import SelectionRequest, resolve_selection
from spacectl.usecases.command_base import CommandOptions, InvocationContext
from spacectl.usecases.registry import build_commands
from spacectl.usecases.validate_commands import ValidateCommands


def live(live_id: str, name: str, activity: str, *, state: str = "ready", version: Optional[str] = None,
         controller: str = "ctrl-1") -> LiveActivity:
    return LiveActivity(
        id=live_id,
        uuid=f"uuid-{live_id}",
        name=name,
        activity=activity,
        controller=controller,
        state=state,
        activity_version=version,
    )


class FakeMaster:
    """Records every call; keeps a mutable fleet so re-reads see earlier effects."""

    def __init__(self, fleet: List[LiveActivity], *, probed_states: Optional[Dict[str, str]] = None) -> None:
        self.fleet: Dict[str, LiveActivity] = {item.id: item for item in fleet}
        self.calls: List[tuple] = []
        self._probed_states = probed_states or {}
        self._ids = itertools.count(100)

    def list_live_activities(self) -> List[LiveActivity]:
        self.calls.append(("list",))
        return list(self.fleet.values())

    def probe_fleet_status(self) -> None:
        self.calls.append(("probe",))
        for live_id, state in self._probed_states.items():
            self.fleet[live_id] = replace(self.fleet[live_id], state=state)

    def create_live_activity(self, name, activity, controller, *, version=None) -> LiveActivity:
        self.calls.append(("create", name, activity, controller, version))
        created = live(str(next(self._ids)), name, activity, controller=controller, version=version)
        self.fleet[created.id] = created
        return created

    def delete_live_activity(self, live_activity_id) -> None:
        self.calls.append(("delete", live_activity_id))
        self.fleet.pop(live_activity_id, None)

    def shutdown_live_activity(self, live_activity_id) -> None:
        self.calls.append(("shutdown", live_activity_id))
        self._set_state(live_activity_id, "ready")

    def deploy_live_activity(self, live_activity_id) -> None:
        self.calls.append(("deploy", live_activity_id))

    def configure_live_activity(self, live_activity_id, config) -> None:
        self.calls.append(("configure", live_activity_id, dict(config)))

    def activate_live_activity(self, live_activity_id) -> None:
        self.calls.append(("activate", live_activity_id))
        self._set_state(live_activity_id, "running")

    def delete_activity(self, activity) -> None:
        self.calls.append(("delete-activity", activity))

    def group_create(self, group, live_activity_ids) -> None:
        self.calls.append(("group-create", group, list(live_activity_ids)))

    def group_add(self, group, live_activity_ids) -> None:
        self.calls.append(("group-add", group, list(live_activity_ids)))

    def group_remove(self, group, live_activity_ids) -> None:
        self.calls.append(("group-remove", group, list(live_activity_ids)))

    def group_delete(self, group) -> None:
        self.calls.append(("group-delete", group))

    def rpc_calls(self) -> List[tuple]:
        """Calls other than fleet reads."""
        return [call for call in self.calls if call[0] not in ("list", "probe")]

    def _set_state(self, live_activity_id: str, state: str) -> None:
        if live_activity_id in self.fleet:
            self.fleet[live_activity_id] = replace(self.fleet[live_activity_id], state=state)


class RecordingUploader:
    def __init__(self) -> None:
        self.uploaded: List[str] = []

    def upload_activity(self, archive_path: str) -> dict:
        self.uploaded.append(archive_path)
        return {}


class RecordingBuilder:
    def __init__(self) -> None:
        self.built: List[str] = []

    def build(self, folder) -> None:
        self.built.append(folder.activity)


def make_context(
    master: FakeMaster,
    request: Optional[SelectionRequest] = None,
    *,
    folders=(),
    options: Optional[CommandOptions] = None,
    stdin: str = "",
    **kwargs,
) -> InvocationContext:
    """Resolve the selection against the fake fleet the way the runner does."""
    request = request or SelectionRequest()
    selection = resolve_selection(master.list_live_activities(), request, folders)
    master.calls.clear()
    return InvocationContext(
        selection=selection,
        selection_request=request,
        folders=tuple(folders),
        options=options or CommandOptions(),
        master=master,
        sleep=lambda seconds: None,
        out=io.StringIO(),
        stdin=io.StringIO(stdin),
        **kwargs,
    )


def plan_of(*kinds: CommandKind, **params_by_kind) -> CommandPlan:
    plan = CommandPlan()
    for kind in kinds:
        plan.request(kind, **params_by_kind.get(kind.name.lower(), {}))
    plan.expand()
    return plan


def run_plan(plan: CommandPlan, ctx: InvocationContext) -> None:
    commands = build_commands(plan)
    ValidateCommands()(commands, ctx)
    for command in commands:
        command.prep()
    for command in commands:
        command.execute(ctx)
