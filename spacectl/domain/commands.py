"""Closed set of command kinds, their prerequisites and their execution order."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Tuple


class CommandKind(str, Enum):
    """Every operation the CLI can run. Declaration order is execution order."""

    BUILD = "build"
    CAPTURE_FLEET_STATE = "capture-fleet-state"
    SHUTDOWN = "shutdown"
    DELETE_LIVE_ACTIVITY = "delete-live-activity"
    DELETE_ACTIVITY = "delete-activity"
    UPLOAD = "upload"
    CREATE = "create"
    UPGRADE = "upgrade"
    DEPLOY = "deploy"
    CONFIGURE = "configure"
    GROUP_REMOVE = "group-remove"
    GROUP_DELETE = "group-delete"
    GROUP_CREATE = "group-create"
    GROUP_ADD = "group-add"
    ACTIVATE = "activate"
    LIST = "list"

    def __str__(self) -> str:
        return self.value


EXECUTION_ORDER: Tuple[CommandKind, ...] = tuple(CommandKind)


@dataclass(frozen=True)
class Requirements:
    """Prerequisites a command declares against the resolved selection."""

    fleet: bool = False
    files: bool = False
    exactly_one_activity: bool = False
    activities: bool = False
    live_activities: bool = False
    exactly_one_group: bool = False
    exactly_one_controller: bool = False


_FLEET = Requirements(fleet=True)
_FLEET_LIVE = Requirements(fleet=True, live_activities=True)
_FLEET_GROUP = Requirements(fleet=True, exactly_one_group=True)
_FLEET_LIVE_GROUP = Requirements(fleet=True, live_activities=True, exactly_one_group=True)

REQUIREMENTS: Mapping[CommandKind, Requirements] = {
    CommandKind.BUILD: Requirements(files=True),
    CommandKind.CAPTURE_FLEET_STATE: _FLEET,
    CommandKind.SHUTDOWN: _FLEET_LIVE,
    CommandKind.DELETE_LIVE_ACTIVITY: _FLEET_LIVE,
    CommandKind.DELETE_ACTIVITY: Requirements(fleet=True, activities=True),
    CommandKind.UPLOAD: Requirements(files=True),
    CommandKind.CREATE: Requirements(
        fleet=True, exactly_one_activity=True, exactly_one_controller=True
    ),
    CommandKind.UPGRADE: _FLEET_LIVE,
    CommandKind.DEPLOY: _FLEET_LIVE,
    CommandKind.CONFIGURE: _FLEET_LIVE,
    CommandKind.GROUP_REMOVE: _FLEET_LIVE_GROUP,
    CommandKind.GROUP_DELETE: _FLEET_GROUP,
    CommandKind.GROUP_CREATE: _FLEET_GROUP,
    CommandKind.GROUP_ADD: _FLEET_LIVE_GROUP,
    CommandKind.ACTIVATE: _FLEET_LIVE,
    CommandKind.LIST: _FLEET,
}

IMPLIED: Mapping[CommandKind, Tuple[CommandKind, ...]] = {
    CommandKind.DEPLOY: (CommandKind.SHUTDOWN,),
    CommandKind.DELETE_ACTIVITY: (CommandKind.SHUTDOWN, CommandKind.DELETE_LIVE_ACTIVITY),
    CommandKind.UPGRADE: (CommandKind.SHUTDOWN, CommandKind.DEPLOY),
}


@dataclass
class CommandRequest:
    """One requested command kind with its parameters."""

    kind: CommandKind
    params: Dict[str, Any] = field(default_factory=dict)
    implied: bool = False
    """True when the request was only added by expansion."""

    @property
    def requirements(self) -> Requirements:
        return REQUIREMENTS[self.kind]


class CommandPlan:
    """At most one request per command kind, iterated in execution order."""

    def __init__(self) -> None:
        self._requests: Dict[CommandKind, CommandRequest] = {}

    def request(self, kind: CommandKind, **params: Any) -> CommandRequest:
        """Add ``kind``; a repeated request replaces the earlier one."""
        req = CommandRequest(kind=CommandKind(kind), params=dict(params))
        self._requests[req.kind] = req
        return req

    def reactivate(self) -> None:
        """Shut down, then bring back only what was running before."""
        self.request(CommandKind.CAPTURE_FLEET_STATE)
        self.request(CommandKind.SHUTDOWN)
        self.request(CommandKind.ACTIVATE, only_previously_active=True)

    def expand(self) -> None:
        """Insert the kinds implied by the requested ones, transitively."""
        pending: List[CommandKind] = list(self._requests)
        while pending:
            kind = pending.pop()
            for implied in IMPLIED.get(kind, ()):
                if implied in self._requests:
                    continue
                self._requests[implied] = CommandRequest(kind=implied, implied=True)
                pending.append(implied)

    def get(self, kind: CommandKind) -> CommandRequest | None:
        return self._requests.get(kind)

    def kinds(self) -> Tuple[CommandKind, ...]:
        return tuple(kind for kind in EXECUTION_ORDER if kind in self._requests)

    def __iter__(self) -> Iterator[CommandRequest]:
        for kind in self.kinds():
            yield self._requests[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self._requests

    def __len__(self) -> int:
        return len(self._requests)

    @property
    def needs_fleet(self) -> bool:
        return any(req.requirements.fleet for req in self._requests.values())


__all__ = [
    "CommandKind",
    "CommandPlan",
    "CommandRequest",
    "EXECUTION_ORDER",
    "IMPLIED",
    "REQUIREMENTS",
    "Requirements",
]
