"""Keep credential material out of log lines.

Login flows bounce through URLs carrying OAuth codes and tokens; page URLs
are logged only after passing through redact_url().
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SENSITIVE_SUBSTRINGS = (
    "token",
    "secret",
    "password",
    "passwd",
    "code",
    "state",
    "session",
    "cookie",
    "jwt",
    "bearer",
    "api_key",
    "apikey",
    "sig",
)

_SENSITIVE_EXACT = {"auth", "t", "d"}


def is_sensitive_key(key: str) -> bool:
    k = (key or "").strip().lower()
    if not k:
        return False
    if k in _SENSITIVE_EXACT:
        return True
    return any(s in k for s in _SENSITIVE_SUBSTRINGS)


def _redact_pairs(raw: str) -> tuple[str, bool]:
    pairs = parse_qsl(raw, keep_blank_values=True)
    changed = False
    out: list[tuple[str, str]] = []
    for k, v in pairs:
        if v and is_sensitive_key(k):
            out.append((k, "<redacted>"))
            changed = True
        else:
            out.append((k, v))
    return (urlencode(out), changed) if changed else (raw, False)


def redact_url(url: str) -> str:
    """Redact sensitive query/fragment params and userinfo; other URLs pass unchanged."""
    if not isinstance(url, str) or not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    netloc = parts.netloc
    changed = False
    if "@" in netloc:
        netloc = netloc.split("@", 1)[1]
        changed = True

    query, query_changed = _redact_pairs(parts.query) if parts.query else ("", False)
    fragment = parts.fragment
    fragment_changed = False
    if fragment and "=" in fragment:
        fragment, fragment_changed = _redact_pairs(fragment)

    if not (changed or query_changed or fragment_changed):
        return url
    return urlunsplit((parts.scheme, netloc, parts.path, query, fragment))


def mask_secret(value: str, *, keep: int = 4) -> str:
    """Short, non-reversible hint of a secret: a prefix plus the length."""
    if not value:
        return "<empty>"
    if len(value) <= keep * 2:
        return f"<{len(value)} chars>"
    return f"{value[:keep]}...<{len(value)} chars>"


__all__ = ["is_sensitive_key", "mask_secret", "redact_url"]
