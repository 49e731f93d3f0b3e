"""Persistent duplex channel to the master with request/response correlation.

The channel owns one WebSocket connection and one background receiver thread.
Callers send JSON envelopes ``{"requestId", "type", "data"}``; when a
response is expected the channel allocates a monotonically increasing
correlation id and the caller parks in ``wait_for_response`` until the
receiver delivers an inbound ``{"requestId", "result"}`` frame with the same
id, or until the channel closes.

Dependencies:
    - ``websockets`` (sync client) for the transport.
    - ``pydantic`` for envelope encoding and validation.

Call context:
    - Opened by ``spacectl.app.runner.Runner`` when any requested command
      needs the fleet, wrapped by ``spacectl.adapters.master_rpc``.
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from websockets.exceptions import ConnectionClosed
from websockets.sync.client import connect as ws_connect

from spacectl.adapters.api_errors import (
    MasterClosedError,
    MasterConnectionError,
    MasterTimeoutError,
)


Connector = Callable[[str], Any]


class OutboundFrame(BaseModel):
    """Request envelope; an empty ``requestId`` means no response is expected."""

    model_config = ConfigDict(populate_by_name=True)

    request_id: str = Field("", alias="requestId")
    type: str
    data: Any = None


class InboundFrame(BaseModel):
    """Response envelope delivered by the master."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    request_id: str = Field("", alias="requestId")
    result: Any = None

    @field_validator("request_id", mode="before")
    @classmethod
    def _coerce_request_id(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()


@dataclass(frozen=True)
class Response:
    """Payload delivered for one correlation id."""

    request_id: str
    result: Any


class MasterChannel:
    """WebSocket channel plus correlator for blocking request/response calls.

    Shared state (pending ids, delivered responses, open/closing flags) is
    guarded by a single condition variable. Waiters are woken with
    ``notify_all`` and each re-checks for its own id.
    """

    def __init__(
        self,
        url: str,
        *,
        connector: Optional[Connector] = None,
        open_timeout_s: Optional[float] = 10.0,
        response_timeout_s: Optional[float] = None,
    ) -> None:
        """Create an unconnected channel.

        Args:
            url: ``ws://`` or ``wss://`` endpoint of the master.
            connector: Callable returning an open connection exposing
                ``send``, ``recv`` and ``close``. Defaults to the
                ``websockets`` sync client.
            open_timeout_s: Handshake timeout handed to the default connector.
            response_timeout_s: Upper bound for ``wait_for_response``; ``None``
                waits until delivery or closure.
        """
        self.url = url
        self._connector = connector or partial(ws_connect, open_timeout=open_timeout_s)
        self.response_timeout_s = response_timeout_s
        self._log = logging.getLogger(__name__)

        self._cond = threading.Condition()
        self._pending: Set[str] = set()
        self._responses: Dict[str, Any] = {}
        self._open = False
        self._closing = False
        self._connection: Any = None
        self._ids = itertools.count(1)
        self._send_lock = threading.Lock()

        self._opened = threading.Event()
        self._open_error: Optional[BaseException] = None
        self._receiver: Optional[threading.Thread] = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    @property
    def is_open(self) -> bool:
        with self._cond:
            return self._open

    def connect(self) -> None:
        """Open the connection and block until the transport reports it open.

        Raises:
            MasterConnectionError: The handshake failed.
        """
        if self._receiver is not None:
            raise RuntimeError("MasterChannel.connect() called twice")
        self._receiver = threading.Thread(
            target=self._run, name="master-receiver", daemon=True
        )
        self._receiver.start()
        self._opened.wait()
        if self._open_error is not None:
            raise MasterConnectionError(
                f"Cannot connect to master at {self.url}: {self._open_error}",
                context=self.url,
            ) from self._open_error
        self._log.info("Connected to master at %s", self.url)

    def close(self) -> None:
        """Close the channel. Safe to call more than once."""
        with self._cond:
            if self._closing:
                return
            self._closing = True
            self._open = False
            connection = self._connection
            self._cond.notify_all()
        if connection is not None:
            try:
                connection.close()
            except (ConnectionClosed, OSError) as exc:
                self._log.debug("Ignoring error while closing master channel: %s", exc)
        receiver = self._receiver
        if receiver is not None and receiver is not threading.current_thread():
            receiver.join(timeout=5.0)

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #
    def send(
        self,
        message_type: str,
        data: Any = None,
        *,
        expect_response: bool = False,
    ) -> Optional[str]:
        """Send one envelope; return its correlation id when a response is expected.

        Raises:
            MasterClosedError: The channel is not open or the write failed.
        """
        with self._cond:
            if not self._open:
                raise MasterClosedError(
                    f"Master channel is closed; cannot send {message_type}",
                    context=message_type,
                )
            request_id = str(next(self._ids)) if expect_response else ""
            if request_id:
                self._pending.add(request_id)
            connection = self._connection

        frame = OutboundFrame(request_id=request_id, type=message_type, data=data)
        self._log.debug("-> %s id=%s", message_type, request_id or "-")
        try:
            with self._send_lock:
                connection.send(frame.model_dump_json(by_alias=True))
        except (ConnectionClosed, OSError) as exc:
            with self._cond:
                self._pending.discard(request_id)
            raise MasterClosedError(
                f"Master channel failed while sending {message_type}: {exc}",
                context=message_type,
            ) from exc
        return request_id or None

    def wait_for_response(self, request_id: str) -> Optional[Response]:
        """Block until ``request_id`` is answered.

        Returns:
            The delivered ``Response``, or ``None`` when the channel closed
            first. ``None`` always means connection loss.

        Raises:
            MasterTimeoutError: ``response_timeout_s`` elapsed.
        """
        timeout = self.response_timeout_s
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while request_id not in self._responses:
                if not self._open:
                    self._pending.discard(request_id)
                    return None
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self._pending.discard(request_id)
                    raise MasterTimeoutError(
                        f"No response for request {request_id} within {timeout}s",
                        context=request_id,
                    )
                self._cond.wait(remaining)
            return Response(request_id=request_id, result=self._responses.pop(request_id))

    def request(self, message_type: str, data: Any = None) -> Any:
        """Send ``message_type`` and return the correlated result payload.

        Raises:
            MasterClosedError: The channel closed before the response arrived.
        """
        request_id = self.send(message_type, data, expect_response=True)
        response = self.wait_for_response(request_id)
        if response is None:
            raise MasterClosedError(
                f"Connection to master lost while waiting for {message_type}",
                context=message_type,
            )
        return response.result

    # ------------------------------------------------------------------ #
    # Receiver thread
    # ------------------------------------------------------------------ #
    def _run(self) -> None:
        try:
            connection = self._connector(self.url)
        except Exception as exc:
            self._open_error = exc
            self._opened.set()
            return

        with self._cond:
            self._connection = connection
            self._open = not self._closing
            abandoned = self._closing
        self._opened.set()
        if abandoned:
            connection.close()
            return

        try:
            while True:
                try:
                    raw = connection.recv()
                except ConnectionClosed as exc:
                    self._log_closure(f"connection closed ({exc})")
                    break
                except OSError as exc:
                    self._log_closure(f"socket error ({exc})")
                    break
                self._deliver(raw)
        finally:
            with self._cond:
                self._open = False
                self._cond.notify_all()

    def _deliver(self, raw: Any) -> None:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        try:
            frame = InboundFrame.model_validate_json(raw)
        except ValidationError as exc:
            self._log.warning("Dropping malformed frame from master: %s", exc.errors()[:1])
            return
        if not frame.request_id:
            self._log.debug("<- unsolicited frame ignored")
            return
        with self._cond:
            if frame.request_id not in self._pending:
                self._log.debug("<- id=%s has no waiter; dropped", frame.request_id)
                return
            self._pending.discard(frame.request_id)
            self._responses[frame.request_id] = frame.result
            self._cond.notify_all()
        self._log.debug("<- id=%s delivered", frame.request_id)

    def _log_closure(self, reason: str) -> None:
        with self._cond:
            intentional = self._closing
        if intentional:
            self._log.debug("Master channel shut down: %s", reason)
        else:
            self._log.warning("Master channel closed unexpectedly: %s", reason)


__all__ = ["InboundFrame", "MasterChannel", "OutboundFrame", "Response"]
