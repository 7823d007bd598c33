"""DevTools endpoint readiness and page attachment.

- wait_ready: poll /json/version until the browser answers
- DevtoolsLink: list page targets, open per-page channels, read cookies
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from contextlib import suppress
from typing import Any

from .errors import DevtoolsUnreachable
from .http_client import HttpClientError, endpoint_ready, http_get_json
from .page_channel import PageChannel
from .session_cdp import CdpConnection
from .types import Cookie, PageInfo

logger = logging.getLogger("cookie_helpers.devtools")

READY_POLL_INTERVAL = 0.2


def endpoint_base(port: int) -> str:
    return f"http://127.0.0.1:{int(port)}"


def wait_ready(
    port: int,
    timeout: float = 20.0,
    *,
    interval: float = READY_POLL_INTERVAL,
    is_alive: Callable[[], bool] | None = None,
    profile: str = "",
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Block until ``/json/version`` on *port* answers, or raise DevtoolsUnreachable."""
    url = f"{endpoint_base(port)}/json/version"
    deadline = clock() + max(0.0, float(timeout))
    while True:
        if endpoint_ready(url, timeout=1.0):
            logger.debug("DevTools ready on port %d", port)
            return
        if is_alive is not None and not is_alive():
            raise DevtoolsUnreachable(
                profile=profile,
                reason=f"Browser exited before DevTools came up on 127.0.0.1:{port}",
                suggestion="Close other browser windows using the same profile and retry",
                details={"port": port},
            )
        if clock() >= deadline:
            raise DevtoolsUnreachable(
                profile=profile,
                reason=f"DevTools not reachable on 127.0.0.1:{port}",
                suggestion="Check the browser path (COOKIE_HELPER_BROWSER) and that the port is free",
                details={"port": port, "timeout": timeout},
            )
        sleep(interval)


class DevtoolsLink:
    """Protocol connection to one running browser.

    Owns every PageChannel it opens; close() releases them all. The link is
    useless once the browser process is gone.
    """

    def __init__(
        self,
        port: int,
        *,
        timeout: float = 10.0,
        connection_factory: Callable[[str, float], Any] = CdpConnection,
        version: dict[str, Any] | None = None,
    ) -> None:
        self.port = int(port)
        self.timeout = float(timeout)
        self.version = version or {}
        self._connection_factory = connection_factory
        self._channels: dict[str, PageChannel] = {}
        self._closed = False

    @classmethod
    def connect(cls, port: int, *, timeout: float = 10.0) -> DevtoolsLink:
        """Attach to the browser listening on *port*."""
        version = http_get_json(f"{endpoint_base(port)}/json/version", timeout=2.0)
        if not isinstance(version, dict):
            raise HttpClientError("Unexpected /json/version payload")
        logger.info("Attached to %s on port %d", version.get("Browser", "browser"), port)
        return cls(port, timeout=timeout, version=version)

    @property
    def closed(self) -> bool:
        return self._closed

    def _targets(self) -> list[dict[str, Any]]:
        payload = http_get_json(f"{endpoint_base(self.port)}/json/list", timeout=2.0)
        return [t for t in payload if isinstance(t, dict)] if isinstance(payload, list) else []

    def list_pages(self) -> list[PageInfo]:
        """Return open page targets, dropping channels whose page went away."""
        if self._closed:
            raise HttpClientError("DevTools link is closed")
        pages = [PageInfo.from_target(t) for t in self._targets() if t.get("type") == "page"]
        live = {p.id for p in pages}
        for target_id in list(self._channels):
            if target_id not in live:
                self._channels.pop(target_id).close()
        return pages

    def open_channel(self, page: PageInfo) -> PageChannel:
        """Return the (cached) command channel for *page*."""
        if self._closed:
            raise HttpClientError("DevTools link is closed")
        channel = self._channels.get(page.id)
        if channel is not None and not channel.closed:
            channel.url = page.url
            return channel
        if not page.ws_url:
            raise HttpClientError(f"Page {page.id} has no debugger URL (already attached?)")
        conn = self._connection_factory(page.ws_url, self.timeout)
        channel = PageChannel(conn, page.id, page.url)
        self._channels[page.id] = channel
        return channel

    def drop_channel(self, page: PageInfo) -> None:
        channel = self._channels.pop(page.id, None)
        if channel is not None:
            channel.close()

    def all_cookies(self, channel: PageChannel) -> list[Cookie]:
        return [Cookie.from_cdp(c) for c in channel.get_all_cookies() if isinstance(c, dict)]

    def storage_cookies(self, channel: PageChannel) -> list[Cookie]:
        return [Cookie.from_cdp(c) for c in channel.get_storage_cookies() if isinstance(c, dict)]

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for channel in self._channels.values():
            with suppress(Exception):
                channel.close()
        self._channels.clear()


__all__ = ["DevtoolsLink", "endpoint_base", "wait_ready"]
