"""Shared HTTP transport for the master's web endpoints.

The duplex channel carries every fleet RPC; only bulk transfers (activity
bundle uploads) go over plain HTTP. This module wraps ``requests.Session``
with the timeout and retry policy those transfers share.

Dependencies:
    - ``requests`` for network I/O.
    - ``spacectl.adapters.api_errors.ApiTimeoutError`` for typed failures.

Call context:
    - Constructed by ``spacectl/adapters/activity_upload_rest.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from spacectl.adapters.api_errors import ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout and retry configuration for HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds per attempt.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 30
    retries: int = 2


class RetryingSession:
    """Thin ``requests`` wrapper that retries on timeout/connectivity failures.

    Callers decide how to map non-2xx responses into errors.
    """

    def __init__(self, cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.cfg = cfg

    def post_multipart(
        self,
        url: str,
        *,
        files: Dict[str, Any],
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a multipart POST, rewinding file handles before each attempt.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
        """
        context = f"POST {url}"
        last_err: ApiTimeoutError | None = None
        for _ in range(self.cfg.retries + 1):
            try:
                for value in files.values():
                    handle = value[1] if isinstance(value, tuple) and len(value) >= 2 else value
                    if hasattr(handle, "seek"):
                        handle.seek(0)
                return self.session.post(
                    url,
                    files=files,
                    headers={"Accept": "application/json"},
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err


__all__ = ["HttpConfig", "RetryingSession"]
