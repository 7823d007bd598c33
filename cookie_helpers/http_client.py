from __future__ import annotations

import json
import urllib.parse
from typing import Any
from urllib.error import URLError
from urllib.request import Request, urlopen

_LOCAL_HOSTS = {"127.0.0.1", "localhost", "::1"}


class HttpClientError(Exception):
    pass


def _build_request(url: str) -> Request:
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme != "http":
        raise HttpClientError("Only http is supported for the local debug endpoint")
    if (parsed.hostname or "") not in _LOCAL_HOSTS:
        raise HttpClientError(f"Host {parsed.hostname} is not a loopback address")
    return Request(url, headers={"User-Agent": "cookie-helpers/1.0"})


def endpoint_ready(url: str, timeout: float = 1.0) -> bool:
    """Return True if *url* answers with a 2xx status."""
    req = _build_request(url)
    try:
        with urlopen(req, timeout=timeout) as resp:
            return 200 <= resp.status < 300
    except (OSError, TimeoutError, URLError):
        return False


def http_get_json(url: str, timeout: float = 2.0) -> Any:
    """Fetch and decode a JSON document from the local debug endpoint."""
    req = _build_request(url)
    try:
        with urlopen(req, timeout=timeout) as resp:
            return json.loads(resp.read().decode())
    except (OSError, TimeoutError, URLError) as exc:
        raise HttpClientError(str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise HttpClientError(f"Invalid JSON from {url}: {exc}") from exc
