from __future__ import annotations

import pytest
from requests import exceptions as req_exc

from spacectl.adapters.activity_upload_rest import ActivityUploadRestAdapter
from spacectl.adapters.api_errors import ApiClientError, ApiServerError, ApiTimeoutError


class _Response:
    def __init__(self, status_code: int, payload=None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _SessionStub:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def post(self, url, *, files, headers, timeout):
        name, handle, content_type = files["file"]
        self.calls.append({"url": url, "name": name, "body": handle.read(), "type": content_type, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _adapter(outcomes, retries: int = 2) -> ActivityUploadRestAdapter:
    adapter = ActivityUploadRestAdapter("http://master:8080/upload", request_timeout_s=5, retries=retries)
    adapter.session.session = _SessionStub(outcomes)
    return adapter


def test_upload_posts_multipart_file(tmp_path) -> None:
    archive = tmp_path / "lobby.display-1.0.0.zip"
    archive.write_bytes(b"PK\x03\x04")
    adapter = _adapter([_Response(200, {"result": "success"})])

    result = adapter.upload_activity(str(archive))

    call = adapter.session.session.calls[0]
    assert call["url"] == "http://master:8080/upload"
    assert call["name"] == "lobby.display-1.0.0.zip"
    assert call["body"] == b"PK\x03\x04"
    assert call["type"] == "application/zip"
    assert call["timeout"] == 5
    assert result == {"result": "success"}


def test_upload_retries_on_connection_errors_and_rewinds_file(tmp_path) -> None:
    archive = tmp_path / "a.zip"
    archive.write_bytes(b"data")
    adapter = _adapter([req_exc.ConnectionError("reset"), _Response(201)])

    assert adapter.upload_activity(str(archive)) == {}
    assert [c["body"] for c in adapter.session.session.calls] == [b"data", b"data"]


def test_upload_gives_up_after_retries(tmp_path) -> None:
    archive = tmp_path / "a.zip"
    archive.write_bytes(b"data")
    adapter = _adapter([req_exc.Timeout(), req_exc.Timeout()], retries=1)

    with pytest.raises(ApiTimeoutError):
        adapter.upload_activity(str(archive))


def test_client_and_server_errors_are_typed(tmp_path) -> None:
    archive = tmp_path / "a.zip"
    archive.write_bytes(b"data")

    with pytest.raises(ApiClientError) as client:
        _adapter([_Response(404, {"detail": "no such endpoint"})]).upload_activity(str(archive))
    assert client.value.status == 404
    assert client.value.hint == "no such endpoint"

    with pytest.raises(ApiServerError):
        _adapter([_Response(500, text="boom")]).upload_activity(str(archive))


def test_upload_requires_url() -> None:
    with pytest.raises(ValueError):
        ActivityUploadRestAdapter("  ")
