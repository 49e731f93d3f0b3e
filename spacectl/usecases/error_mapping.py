"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from spacectl.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    MasterClosedError,
    MasterConnectionError,
    MasterRequestError,
    MasterTimeoutError,
    first_string,
)
from spacectl.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by an adapter or a command.
        default_code: Code used for exceptions with no specific mapping.
        default_message: Message used when ``exc`` carries none.

    Returns:
        UseCaseError: ``exc`` itself when it already is one.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, MasterConnectionError):
        return UseCaseError(
            "MASTER_UNREACHABLE",
            str(exc),
            hint="Check --host/--port and that the master is running.",
        )
    if isinstance(exc, MasterClosedError):
        return UseCaseError("CONNECTION_LOST", str(exc) or "Connection to the master was lost.")
    if isinstance(exc, MasterTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", str(exc) or "The master did not answer in time.")
    if isinstance(exc, MasterRequestError):
        return UseCaseError("REQUEST_FAILED", str(exc), hint=exc.hint)
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Upload timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint or first_string(exc.payload)
        if status in (401, 403):
            return UseCaseError("AUTH_FAILED", "Upload rejected: not authorized.")
        if status == 404:
            return UseCaseError(
                "UPLOAD_ENDPOINT_NOT_FOUND",
                "Upload endpoint not found (HTTP 404).",
                hint="Set upload_url in the settings file or SPACECTL_UPLOAD_URL.",
            )
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, hint))
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Master error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
