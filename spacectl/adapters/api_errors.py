from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for master transport and HTTP adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the master's upload endpoint."""


class ApiServerError(ApiError):
    """HTTP 5xx from the master's upload endpoint."""


class ApiTimeoutError(ApiError):
    """HTTP timeout or connectivity failure."""


class MasterConnectionError(ApiError):
    """The duplex channel to the master could not be opened."""


class MasterClosedError(ApiError):
    """The channel closed while a caller was waiting for its response."""


class MasterTimeoutError(ApiError):
    """No response arrived within the configured response timeout."""


class MasterRequestError(ApiError):
    """The master answered a request with a failure result."""


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of an HTTP error body without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = first_string(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def failure_reason(result: Any) -> Optional[str]:
    """Return the failure text of a master result, or None when it succeeded.

    The master reports failures either as ``{"error": ...}`` or as
    ``{"result": "failure", "reason": ...}``.
    """
    if not isinstance(result, dict):
        return None
    if result.get("error"):
        return first_string(result.get("error")) or "request failed"
    outcome = str(result.get("result") or "").strip().lower()
    if outcome in {"failure", "error"}:
        return first_string({k: result.get(k) for k in ("reason", "message", "detail")}) or outcome
    return None


def first_string(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        text = payload.strip()
        return text or None
    if isinstance(payload, dict):
        for key in ("detail", "message", "reason", "error", "title"):
            candidate = first_string(payload.get(key))
            if candidate:
                return candidate
    if isinstance(payload, list):
        for item in payload:
            candidate = first_string(item)
            if candidate:
                return candidate
    return None
