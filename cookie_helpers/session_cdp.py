"""Low-level CDP websocket connection."""

from __future__ import annotations

import json
import socket
import time
from contextlib import suppress
from typing import Any

import websocket

from .http_client import HttpClientError


class CdpConnection:
    """Request/response CDP session over one websocket."""

    def __init__(self, ws_url: str, timeout: float = 10.0):
        try:
            self.ws = websocket.create_connection(ws_url, timeout=timeout, suppress_origin=True)
        except (OSError, websocket.WebSocketException) as exc:
            raise HttpClientError(f"CDP connect failed: {exc}") from exc
        self.ws_url = ws_url
        self.timeout = timeout
        self._next_id = 1
        # Events that arrive while waiting for a response are kept for wait_for_event().
        self._event_queue: list[dict[str, Any]] = []
        self._max_event_queue = 500
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _push_event(self, event: dict[str, Any]) -> None:
        self._event_queue.append(event)
        if len(self._event_queue) > self._max_event_queue:
            del self._event_queue[: len(self._event_queue) - self._max_event_queue]

    def pop_event(self, event_name: str) -> dict[str, Any] | None:
        """Pop the oldest queued event params for the given event name."""
        for i, ev in enumerate(self._event_queue):
            if ev.get("method") == event_name:
                self._event_queue.pop(i)
                params = ev.get("params")
                return params if isinstance(params, dict) else {}
        return None

    def clear_events(self) -> None:
        self._event_queue.clear()

    def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send CDP command and wait for response."""
        if self._closed:
            raise HttpClientError("CDP connection is closed")
        msg_id = self._next_id
        self._next_id += 1

        msg: dict[str, Any] = {"id": msg_id, "method": method}
        if params:
            msg["params"] = params

        try:
            self.ws.settimeout(min(2.0, max(0.5, float(self.timeout))))
            self.ws.send(json.dumps(msg))
        except Exception as exc:  # noqa: BLE001
            self.close()
            raise HttpClientError(str(exc)) from exc

        return self._recv_until(msg_id)

    def _recv_raw(self, remaining: float) -> dict[str, Any] | None:
        """Receive one decoded frame, or None when nothing arrived in time."""
        try:
            # recv() blocks indefinitely without a socket timeout.
            self.ws.settimeout(min(0.5, remaining))
            raw = self.ws.recv()
        except websocket.WebSocketTimeoutException:
            return None
        except Exception as exc:  # noqa: BLE001
            if isinstance(exc, TimeoutError) or "timed out" in str(exc).lower():
                return None
            # A broken transport never recovers; mark it closed so callers reconnect.
            self.close()
            raise HttpClientError(str(exc)) from exc

        try:
            data = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            return None
        return data if isinstance(data, dict) else None

    def _recv_until(self, expected_id: int) -> dict[str, Any]:
        """Wait for response with specific ID."""
        deadline = time.monotonic() + self.timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise HttpClientError("CDP response timed out")

            data = self._recv_raw(remaining)
            if data is None:
                continue

            if isinstance(data.get("method"), str) and "id" not in data:
                self._push_event(data)
                continue

            if data.get("id") == expected_id:
                if "error" in data:
                    raise HttpClientError(str(data["error"]))
                result = data.get("result")
                return result if isinstance(result, dict) else {}

    def wait_for_event(self, event_name: str, timeout: float = 10.0) -> dict[str, Any] | None:
        """Wait for specific CDP event."""
        queued = self.pop_event(event_name)
        if queued is not None:
            return queued

        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            data = self._recv_raw(remaining)
            if data is None:
                continue
            if isinstance(data.get("method"), str) and "id" not in data:
                if data.get("method") == event_name:
                    params = data.get("params")
                    return params if isinstance(params, dict) else {}
                self._push_event(data)

    def close(self) -> None:
        """Close the websocket; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        # A raw socket shutdown cannot hang on a dead browser the way a close handshake can.
        sock = getattr(self.ws, "sock", None)
        if sock is not None:
            with suppress(Exception):
                sock.shutdown(socket.SHUT_RDWR)
            with suppress(Exception):
                sock.close()


__all__ = ["CdpConnection"]
