"""Storage-derived tokens.

Some services keep the API token in page localStorage rather than a cookie.
The raw value is read in the page; parsing happens here so it can be
tested without a browser.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Protocol


class StorageStrategy(Protocol):
    key: str
    url_pattern: str

    def matches(self, url: str) -> bool: ...

    def extract(self, channel: Any) -> StorageHit | None: ...


@dataclass(frozen=True)
class StorageHit:
    value: str
    source: str


def parse_storage_token(
    raw: str | None,
    *,
    container: str,
    field: str,
    prefix: str,
    pattern: re.Pattern[str],
) -> StorageHit | None:
    """Find a token in a localStorage value.

    Structured first: parse *raw* as JSON and walk ``raw[container][*][field]``
    for a value starting with *prefix*. If that fails or finds nothing, fall
    back to *pattern* over the raw text.
    """
    if not raw:
        return None
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        parsed = None
    if isinstance(parsed, dict):
        entries = parsed.get(container)
        if isinstance(entries, dict):
            for entry_id, entry in entries.items():
                token = entry.get(field) if isinstance(entry, dict) else None
                if isinstance(token, str) and token.startswith(prefix):
                    return StorageHit(token, f"{container}.{entry_id}")

    match = pattern.search(raw)
    if match:
        return StorageHit(match.group(0), "regex")
    return None


@dataclass(frozen=True)
class LocalStorageToken:
    """Token stored as JSON under one localStorage key."""

    key: str
    storage_key: str
    container: str
    field: str
    prefix: str
    url_pattern: str

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(re.escape(self.prefix) + r"[A-Za-z0-9-]+")

    def matches(self, url: str) -> bool:
        return self.url_pattern in (url or "")

    def read_raw(self, channel: Any) -> str | None:
        value = channel.eval_js(f"window.localStorage.getItem({json.dumps(self.storage_key)})")
        return value if isinstance(value, str) else None

    def extract(self, channel: Any) -> StorageHit | None:
        return parse_storage_token(
            self.read_raw(channel),
            container=self.container,
            field=self.field,
            prefix=self.prefix,
            pattern=self.pattern,
        )


__all__ = ["LocalStorageToken", "StorageHit", "StorageStrategy", "parse_storage_token"]
