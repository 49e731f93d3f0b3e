"""HTTP adapter that uploads built activity bundles to the master."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import requests

from spacectl.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    first_string,
    parse_error_payload,
)
from spacectl.adapters.http_client import HttpConfig, RetryingSession
from spacectl.domain.ports import UploadPort


class ActivityUploadRestAdapter(UploadPort):
    """POST activity ZIP bundles as multipart form data to the master's upload URL."""

    def __init__(
        self,
        upload_url: str,
        *,
        request_timeout_s: int = 30,
        retries: int = 2,
    ) -> None:
        if not str(upload_url or "").strip():
            raise ValueError("ActivityUploadRestAdapter requires an upload URL")
        self.upload_url = upload_url.strip()
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(self.cfg)

    def upload_activity(self, archive_path: str) -> Dict[str, Any]:
        """Upload one bundle and return the master's JSON answer (may be empty)."""
        path = Path(archive_path)
        ctx = f"upload[{path.name}]"
        with path.open("rb") as handle:
            files = {"file": (path.name, handle, "application/zip")}
            resp = self.session.post_multipart(self.upload_url, files=files)
        self._ensure_ok(resp, ctx)
        try:
            payload = resp.json()
        except ValueError:
            return {}
        return dict(payload) if isinstance(payload, dict) else {}

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses."""
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        hint = first_string(payload)
        if 400 <= status < 500:
            raise ApiClientError(message, status=status, hint=hint, payload=payload, context=ctx)
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise ApiError(message, status=status, payload=payload, context=ctx)


__all__ = ["ActivityUploadRestAdapter"]
