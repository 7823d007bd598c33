from __future__ import annotations

import os
import platform
import shutil
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_BINARY_CANDIDATES: list[str] = [
    # Interactive login needs the user's real Chrome first; Chromium builds follow.
    "/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",
    "/Applications/Chromium.app/Contents/MacOS/Chromium",
    "/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge",
    "/usr/bin/google-chrome",
    "/usr/bin/google-chrome-stable",
    "/opt/google/chrome/chrome",
    "/usr/bin/chromium",
    "/usr/bin/chromium-browser",
    "/usr/local/bin/chromium",
    "C:\\Program Files\\Google\\Chrome\\Application\\chrome.exe",
    "C:\\Program Files (x86)\\Google\\Chrome\\Application\\chrome.exe",
    # Snap builds ignore --user-data-dir outside $HOME; keep them last.
    "/snap/bin/chromium",
]

DEFAULT_LOGIN_TIMEOUT = 300.0
DEFAULT_POLL_INTERVAL = 0.5
DEFAULT_READY_TIMEOUT = 20.0
DEFAULT_CDP_TIMEOUT = 10.0


def expand_path(raw: str) -> str:
    return str(Path(raw).expanduser())


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_port(name: str) -> int | None:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return None
    try:
        port = int(raw)
    except ValueError:
        return None
    if 0 < port < 65536:
        return port
    return None


def _env_flag(name: str) -> bool:
    return (os.environ.get(name) or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HelperConfig:
    binary_path: str
    port_override: int | None = None
    login_timeout: float = DEFAULT_LOGIN_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    ready_timeout: float = DEFAULT_READY_TIMEOUT
    cdp_timeout: float = DEFAULT_CDP_TIMEOUT
    extra_flags: list[str] = field(default_factory=list)
    clipboard: bool = True

    @classmethod
    def detect_binary(cls) -> str:
        env_path = os.environ.get("COOKIE_HELPER_BROWSER")
        if env_path:
            return expand_path(env_path)
        for candidate in DEFAULT_BINARY_CANDIDATES:
            path = Path(candidate)
            if path.exists() and os.access(str(path), os.X_OK):
                return str(path)
        if platform.system() != "Windows":
            for name in ("google-chrome", "chromium", "chromium-browser"):
                found = shutil.which(name)
                if found:
                    return found
        # Last resort: rely on PATH lookup at launch time
        return "google-chrome"

    @classmethod
    def from_env(cls) -> HelperConfig:
        flags_raw = os.environ.get("COOKIE_HELPER_FLAGS", "")
        extra_flags = [flag.strip() for flag in flags_raw.split(",") if flag.strip()]
        return cls(
            binary_path=cls.detect_binary(),
            port_override=_env_port("COOKIE_HELPER_PORT"),
            login_timeout=_env_float("COOKIE_HELPER_TIMEOUT", DEFAULT_LOGIN_TIMEOUT),
            poll_interval=_env_float("COOKIE_HELPER_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            ready_timeout=_env_float("COOKIE_HELPER_READY_TIMEOUT", DEFAULT_READY_TIMEOUT),
            cdp_timeout=_env_float("COOKIE_HELPER_CDP_TIMEOUT", DEFAULT_CDP_TIMEOUT),
            extra_flags=extra_flags,
            clipboard=not _env_flag("COOKIE_HELPER_NO_CLIPBOARD"),
        )

    def port_for(self, default_port: int) -> int:
        """Return the debug port to use for a profile pinned to *default_port*."""
        if self.port_override is not None:
            return self.port_override
        return default_port
