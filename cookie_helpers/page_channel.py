"""Per-page debug channel."""

from __future__ import annotations

from contextlib import suppress
from typing import Any

from .http_client import HttpClientError


class PageChannel:
    """
    Command channel bound to one page target.

    Wraps a CdpConnection with the handful of page operations the
    extractor needs.
    """

    def __init__(self, connection: Any, target_id: str, url: str = ""):
        self.conn = connection
        self.target_id = target_id
        self.url = url
        self._page_enabled = False
        self._runtime_enabled = False

    def close(self) -> None:
        with suppress(Exception):
            self.conn.close()

    @property
    def closed(self) -> bool:
        return bool(getattr(self.conn, "closed", False))

    def enable_page(self) -> None:
        if not self._page_enabled:
            self.conn.send("Page.enable", {})
            self._page_enabled = True

    def enable_runtime(self) -> None:
        if not self._runtime_enabled:
            self.conn.send("Runtime.enable", {})
            self._runtime_enabled = True

    # ─────────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────────

    def navigate(self, url: str, wait_load: bool = True, timeout: float = 20.0) -> str:
        """Navigate to URL, optionally waiting for DOMContentLoaded."""
        self.enable_page()
        clear = getattr(self.conn, "clear_events", None)
        if callable(clear):
            clear()
        result = self.conn.send("Page.navigate", {"url": url})
        error_text = result.get("errorText") if isinstance(result, dict) else None
        if error_text:
            raise HttpClientError(f"Navigation to {url} failed: {error_text}")
        if wait_load:
            self.conn.wait_for_event("Page.domContentEventFired", timeout)
        self.url = url
        return url

    # ─────────────────────────────────────────────────────────────────────────
    # JavaScript
    # ─────────────────────────────────────────────────────────────────────────

    def eval_js(self, expression: str) -> Any:
        """Evaluate an expression in the page and return its JSON value."""
        self.enable_runtime()
        result = self.conn.send(
            "Runtime.evaluate",
            {
                "expression": expression,
                "returnByValue": True,
                "awaitPromise": True,
            },
        )
        if result.get("exceptionDetails"):
            details = result["exceptionDetails"]
            text = details.get("text") if isinstance(details, dict) else None
            raise HttpClientError(f"Evaluation failed: {text or 'exception'}")
        if "result" not in result:
            return None
        value = result["result"]
        # undefined comes back without a "value" field; map it and null to None.
        if isinstance(value, dict) and value.get("type") == "undefined":
            return None
        if isinstance(value, dict) and value.get("type") == "object" and value.get("subtype") == "null":
            return None
        return value.get("value", value) if isinstance(value, dict) else value

    # ─────────────────────────────────────────────────────────────────────────
    # Cookies
    # ─────────────────────────────────────────────────────────────────────────

    def get_all_cookies(self) -> list[dict[str, Any]]:
        """Full browser cookie jar, HTTP-only cookies included."""
        result = self.conn.send("Network.getAllCookies", {})
        cookies = result.get("cookies")
        return cookies if isinstance(cookies, list) else []

    def get_storage_cookies(self) -> list[dict[str, Any]]:
        """Cookie jar read through the Storage domain."""
        result = self.conn.send("Storage.getCookies", {})
        cookies = result.get("cookies")
        return cookies if isinstance(cookies, list) else []


__all__ = ["PageChannel"]
