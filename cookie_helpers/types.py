"""Value types shared across the extraction engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Cookie:
    name: str
    value: str
    domain: str = ""
    path: str = "/"
    http_only: bool = False
    secure: bool = False

    @classmethod
    def from_cdp(cls, raw: dict[str, Any]) -> Cookie:
        """Build a Cookie from a CDP ``Network.Cookie`` object."""
        return cls(
            name=str(raw.get("name") or ""),
            value=str(raw.get("value") or ""),
            domain=str(raw.get("domain") or ""),
            path=str(raw.get("path") or "/"),
            http_only=bool(raw.get("httpOnly", False)),
            secure=bool(raw.get("secure", False)),
        )


@dataclass(frozen=True)
class PageInfo:
    """One page target as listed by ``/json/list``."""

    id: str
    url: str
    title: str = ""
    ws_url: str = ""

    @classmethod
    def from_target(cls, raw: dict[str, Any]) -> PageInfo:
        return cls(
            id=str(raw.get("id") or ""),
            url=str(raw.get("url") or ""),
            title=str(raw.get("title") or ""),
            ws_url=str(raw.get("webSocketDebuggerUrl") or ""),
        )


@dataclass(frozen=True)
class Rendered:
    """A credential payload ready for the terminal and the clipboard."""

    display: str
    clipboard: str


__all__ = ["Cookie", "PageInfo", "Rendered"]
