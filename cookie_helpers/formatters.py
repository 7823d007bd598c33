"""Render a satisfied credential mapping into what the bridge bot expects.

Formatters only package values; they never derive or alter them.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping, Sequence

from .types import Rendered

Formatter = Callable[[Mapping[str, str]], Rendered]


def json_mapping(keys: Sequence[str] | None = None, *, lowercase: bool = True) -> Formatter:
    """Compact, key-sorted JSON object of the mapping."""

    def render(values: Mapping[str, str]) -> Rendered:
        names = list(keys) if keys is not None else list(values)
        out = {}
        for name in names:
            if name in values:
                out[name.lower() if lowercase else name] = values[name]
        text = json.dumps(out, sort_keys=True, separators=(",", ":"))
        return Rendered(display=text, clipboard=text)

    return render


def command(template: str) -> Formatter:
    """Single command line, e.g. ``"login {ct0} {auth_token}"``."""

    def render(values: Mapping[str, str]) -> Rendered:
        text = template.format_map(dict(values))
        return Rendered(display=text, clipboard=text)

    return render


def curl_header(url: str, names: Sequence[str]) -> Formatter:
    """Ready-to-run cURL request carrying the cookies as one header."""

    def render(values: Mapping[str, str]) -> Rendered:
        cookie = "; ".join(f"{n}={values[n]}" for n in names if n in values)
        text = f"curl '{url}' -H 'cookie: {cookie}'"
        return Rendered(display=text, clipboard=text)

    return render


__all__ = ["Formatter", "command", "curl_header", "json_mapping"]
