"""Master RPC adapter implementing ``MasterPort`` over ``MasterChannel``."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from spacectl.adapters.api_errors import MasterRequestError, failure_reason
from spacectl.adapters.master_channel import MasterChannel
from spacectl.domain.entities import LiveActivity
from spacectl.domain.ports import ControllerRef, GroupRef, LiveActivityId, MasterPort


LIVE_ACTIVITY_ALL = "/liveactivity/all"
LIVE_ACTIVITY_CREATE = "/liveactivity/create"
LIVE_ACTIVITY_DELETE = "/liveactivity/delete"
LIVE_ACTIVITY_SHUTDOWN = "/liveactivity/shutdown"
LIVE_ACTIVITY_DEPLOY = "/liveactivity/deploy"
LIVE_ACTIVITY_CONFIGURE = "/liveactivity/configure"
LIVE_ACTIVITY_ACTIVATE = "/liveactivity/activate"
ACTIVITY_DELETE = "/activity/delete"
GROUP_CREATE = "/liveactivitygroup/create"
GROUP_ADD = "/liveactivitygroup/add"
GROUP_REMOVE = "/liveactivitygroup/remove"
GROUP_DELETE = "/liveactivitygroup/delete"
CONTROLLER_ALL_STATUS = "/spacecontroller/all/status"


class MasterRpcAdapter(MasterPort):
    """Blocking RPC calls against the master; one correlated request per call."""

    def __init__(self, channel: MasterChannel) -> None:
        self.channel = channel
        self._log = logging.getLogger(__name__)

    def list_live_activities(self) -> List[LiveActivity]:
        result = self._call(LIVE_ACTIVITY_ALL, {})
        records = _unwrap_list(result)
        fleet: List[LiveActivity] = []
        for record in records:
            try:
                fleet.append(parse_live_activity(record))
            except (TypeError, ValueError) as exc:
                self._log.warning("Skipping unparseable live activity record: %s", exc)
        self._log.debug("Fleet snapshot holds %d live activities", len(fleet))
        return fleet

    def probe_fleet_status(self) -> None:
        self._call(CONTROLLER_ALL_STATUS, {})

    def create_live_activity(
        self,
        name: str,
        activity: str,
        controller: ControllerRef,
        *,
        version: Optional[str] = None,
    ) -> LiveActivity:
        payload: Dict[str, Any] = {
            "name": name,
            "activity": activity,
            "controller": controller,
        }
        if version:
            payload["version"] = version
        result = self._call(LIVE_ACTIVITY_CREATE, payload)
        record = _unwrap_mapping(result)
        record.setdefault("name", name)
        record.setdefault("activity", activity)
        record.setdefault("controller", controller)
        if version:
            record.setdefault("version", version)
        try:
            return parse_live_activity(record)
        except (TypeError, ValueError) as exc:
            raise MasterRequestError(
                f"{LIVE_ACTIVITY_CREATE}: {exc}", payload=result, context=LIVE_ACTIVITY_CREATE
            ) from exc

    def delete_live_activity(self, live_activity_id: LiveActivityId) -> None:
        self._call(LIVE_ACTIVITY_DELETE, {"id": live_activity_id})

    def shutdown_live_activity(self, live_activity_id: LiveActivityId) -> None:
        self._call(LIVE_ACTIVITY_SHUTDOWN, {"id": live_activity_id})

    def deploy_live_activity(self, live_activity_id: LiveActivityId) -> None:
        self._call(LIVE_ACTIVITY_DEPLOY, {"id": live_activity_id})

    def configure_live_activity(
        self, live_activity_id: LiveActivityId, config: Mapping[str, str]
    ) -> None:
        self._call(LIVE_ACTIVITY_CONFIGURE, {"id": live_activity_id, "config": dict(config)})

    def activate_live_activity(self, live_activity_id: LiveActivityId) -> None:
        self._call(LIVE_ACTIVITY_ACTIVATE, {"id": live_activity_id})

    def delete_activity(self, activity: str) -> None:
        self._call(ACTIVITY_DELETE, {"identifyingName": activity})

    def group_create(self, group: GroupRef, live_activity_ids: Iterable[LiveActivityId]) -> None:
        self._call(GROUP_CREATE, {"name": group, "liveActivityIds": list(live_activity_ids)})

    def group_add(self, group: GroupRef, live_activity_ids: Iterable[LiveActivityId]) -> None:
        self._call(GROUP_ADD, {"group": group, "liveActivityIds": list(live_activity_ids)})

    def group_remove(self, group: GroupRef, live_activity_ids: Iterable[LiveActivityId]) -> None:
        self._call(GROUP_REMOVE, {"group": group, "liveActivityIds": list(live_activity_ids)})

    def group_delete(self, group: GroupRef) -> None:
        self._call(GROUP_DELETE, {"group": group})

    # ------------------------------------------------------------------
    def _call(self, message_type: str, data: Mapping[str, Any]) -> Any:
        result = self.channel.request(message_type, dict(data))
        reason = failure_reason(result)
        if reason:
            raise MasterRequestError(
                f"{message_type}: {reason}",
                payload=result,
                context=message_type,
            )
        return result


def parse_live_activity(record: Any) -> LiveActivity:
    """Normalize one live activity record from the master.

    Accepts the flat shape ``{"id", "name", "activity": "x", "controller": "c"}``
    as well as the nested shape where ``activity`` and ``controller`` are
    objects and the state lives under ``active.runtimeState``.
    """
    if not isinstance(record, Mapping):
        raise TypeError(f"expected object, got {type(record).__name__}")

    activity = record.get("activity")
    activity_version = record.get("version")
    if isinstance(activity, Mapping):
        activity_version = activity.get("version", activity_version)
        activity = activity.get("identifyingName") or activity.get("name")

    controller = record.get("controller")
    if isinstance(controller, Mapping):
        controller = controller.get("name") or controller.get("uuid") or controller.get("id")

    state = record.get("state") or record.get("runtimeState")
    active = record.get("active")
    if isinstance(active, Mapping):
        state = active.get("runtimeState") or active.get("state") or state

    live_id = str(record.get("id") or "").strip()
    if not live_id:
        raise ValueError("live activity record is missing 'id'")
    return LiveActivity(
        id=live_id,
        uuid=str(record.get("uuid") or ""),
        name=str(record.get("name") or ""),
        activity=str(activity or ""),
        controller=str(controller or ""),
        state=str(state or ""),
        activity_version=str(activity_version) if activity_version else None,
    )


def _unwrap_list(result: Any) -> List[Any]:
    if isinstance(result, Mapping):
        result = result.get("data", [])
    if not isinstance(result, list):
        raise MasterRequestError(
            f"{LIVE_ACTIVITY_ALL}: expected list response",
            payload=result,
            context=LIVE_ACTIVITY_ALL,
        )
    return result


def _unwrap_mapping(result: Any) -> Dict[str, Any]:
    if isinstance(result, Mapping):
        data = result.get("data")
        if isinstance(data, Mapping):
            return dict(data)
        return dict(result)
    return {}


__all__ = ["MasterRpcAdapter", "parse_live_activity"]
