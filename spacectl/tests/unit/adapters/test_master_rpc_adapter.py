from __future__ import annotations

import pytest

from spacectl.adapters.api_errors import MasterRequestError
from spacectl.adapters.master_rpc import MasterRpcAdapter, parse_live_activity


class _ChannelStub:
    def __init__(self, results=None):
        self.results = dict(results or {})
        self.calls = []

    def request(self, message_type, data=None):
        self.calls.append((message_type, data))
        return self.results.get(message_type, {"result": "success"})


def test_list_parses_flat_and_nested_records() -> None:
    channel = _ChannelStub(
        {
            "/liveactivity/all": {
                "result": "success",
                "data": [
                    {
                        "id": "1",
                        "uuid": "u1",
                        "name": "lobby",
                        "activity": {"identifyingName": "lobby.display", "version": "1.0.0"},
                        "controller": {"name": "ctrl-a"},
                        "active": {"runtimeState": "space.activity.state.running"},
                    },
                    {
                        "id": 2,
                        "name": "kiosk",
                        "activity": "kiosk.app",
                        "controller": "ctrl-b",
                        "state": "READY",
                    },
                    {"name": "no id here"},
                ],
            }
        }
    )

    fleet = MasterRpcAdapter(channel).list_live_activities()

    assert [live.id for live in fleet] == ["1", "2"]
    lobby, kiosk = fleet
    assert lobby.activity == "lobby.display"
    assert lobby.activity_version == "1.0.0"
    assert lobby.controller == "ctrl-a"
    assert lobby.state == "running"
    assert lobby.is_active
    assert kiosk.state == "ready"
    assert channel.calls == [("/liveactivity/all", {})]


def test_list_accepts_bare_list_result() -> None:
    channel = _ChannelStub(
        {"/liveactivity/all": [{"id": "9", "name": "x", "activity": "a", "controller": "c"}]}
    )

    assert [live.id for live in MasterRpcAdapter(channel).list_live_activities()] == ["9"]


def test_failure_result_raises_request_error() -> None:
    channel = _ChannelStub(
        {"/liveactivity/deploy": {"result": "failure", "reason": "controller offline"}}
    )

    with pytest.raises(MasterRequestError) as exc_info:
        MasterRpcAdapter(channel).deploy_live_activity("4")

    assert "controller offline" in str(exc_info.value)


def test_error_key_raises_request_error() -> None:
    channel = _ChannelStub({"/activity/delete": {"error": "unknown activity"}})

    with pytest.raises(MasterRequestError):
        MasterRpcAdapter(channel).delete_activity("ghost.app")


def test_create_sends_version_and_returns_new_instance() -> None:
    channel = _ChannelStub({"/liveactivity/create": {"data": {"id": "77", "uuid": "u77"}}})

    created = MasterRpcAdapter(channel).create_live_activity(
        "hall", "hall.display", "ctrl-a", version="2.0.0"
    )

    assert channel.calls == [
        (
            "/liveactivity/create",
            {"name": "hall", "activity": "hall.display", "controller": "ctrl-a", "version": "2.0.0"},
        )
    ]
    assert created.id == "77"
    assert created.name == "hall"
    assert created.activity_version == "2.0.0"


def test_create_without_id_in_answer_is_an_error() -> None:
    channel = _ChannelStub({"/liveactivity/create": {"result": "success"}})

    with pytest.raises(MasterRequestError):
        MasterRpcAdapter(channel).create_live_activity("hall", "hall.display", "ctrl-a")


def test_group_and_configure_payloads() -> None:
    channel = _ChannelStub()
    master = MasterRpcAdapter(channel)

    master.group_create("wall", [])
    master.group_add("wall", ["1", "2"])
    master.group_remove("wall", ("1",))
    master.group_delete("wall")
    master.configure_live_activity("3", {"a.b": "1"})

    assert channel.calls == [
        ("/liveactivitygroup/create", {"name": "wall", "liveActivityIds": []}),
        ("/liveactivitygroup/add", {"group": "wall", "liveActivityIds": ["1", "2"]}),
        ("/liveactivitygroup/remove", {"group": "wall", "liveActivityIds": ["1"]}),
        ("/liveactivitygroup/delete", {"group": "wall"}),
        ("/liveactivity/configure", {"id": "3", "config": {"a.b": "1"}}),
    ]


def test_parse_live_activity_rejects_non_objects() -> None:
    with pytest.raises(TypeError):
        parse_live_activity(["not", "a", "record"])
