from __future__ import annotations

import contextlib
import logging
import shutil
import subprocess
import tempfile
import time
from collections.abc import Iterator
from typing import TYPE_CHECKING

from .config import HelperConfig
from .errors import BrowserLaunchError

if TYPE_CHECKING:
    from .profiles import CredentialProfile

logger = logging.getLogger("cookie_helpers.launcher")


class BrowserLauncher:
    """Owns one browser child process and its throw-away profile directory."""

    def __init__(self, config: HelperConfig | None = None) -> None:
        self.config = config or HelperConfig.from_env()
        self.process: subprocess.Popen | None = None
        self.profile_dir: str | None = None
        self.port: int | None = None
        self._stopped = False

    def build_launch_command(self, profile: CredentialProfile, profile_dir: str) -> list[str]:
        port = self.config.port_for(profile.port)
        flags = [
            f"--remote-debugging-port={port}",
            f"--user-data-dir={profile_dir}",
            "--remote-allow-origins=*",
            "--no-first-run",
            "--no-default-browser-check",
            *self.config.extra_flags,
        ]
        return [self.config.binary_path, *flags, profile.entry_urls[0]]

    def start(self, profile: CredentialProfile) -> subprocess.Popen:
        """Create a fresh profile dir and launch the browser at the first entry URL."""
        if self.process is not None:
            raise RuntimeError("BrowserLauncher.start() called twice")
        self.profile_dir = tempfile.mkdtemp(prefix=f"{profile.name}-")
        self.port = self.config.port_for(profile.port)
        cmd = self.build_launch_command(profile, self.profile_dir)
        logger.info("Launching %s on debug port %d", self.config.binary_path, self.port)
        try:
            self.process = subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except OSError as exc:
            shutil.rmtree(self.profile_dir, ignore_errors=True)
            self.profile_dir = None
            raise BrowserLaunchError(
                profile=profile.name,
                reason=f"Could not start browser {self.config.binary_path}: {exc}",
                suggestion="Set COOKIE_HELPER_BROWSER to a Chrome/Chromium executable",
                details={"command": cmd},
            ) from exc
        return self.process

    def is_alive(self) -> bool:
        proc = self.process
        if proc is None:
            return False
        try:
            return proc.poll() is None
        except Exception:
            return False

    def stop(self, *, timeout: float = 5.0) -> bool:
        """Best-effort stop and cleanup. Returns False when already stopped."""
        if self._stopped:
            return False
        self._stopped = True

        proc = self.process
        if proc is not None:
            with contextlib.suppress(Exception):
                if proc.poll() is None:
                    proc.terminate()
            deadline = time.monotonic() + max(0.1, float(timeout))
            exited = False
            while time.monotonic() < deadline:
                try:
                    if proc.poll() is not None:
                        exited = True
                        break
                except Exception:
                    break
                time.sleep(0.05)
            if not exited:
                # Escalate to kill.
                with contextlib.suppress(Exception):
                    proc.kill()
                with contextlib.suppress(Exception):
                    proc.wait(timeout=2.0)

        if self.profile_dir:
            shutil.rmtree(self.profile_dir, ignore_errors=True)
            logger.debug("Removed browser profile %s", self.profile_dir)
        return True


@contextlib.contextmanager
def launched_browser(profile: CredentialProfile, config: HelperConfig | None = None) -> Iterator[BrowserLauncher]:
    """Start the browser for *profile* and always tear it down on exit."""
    launcher = BrowserLauncher(config)
    try:
        launcher.start(profile)
        yield launcher
    finally:
        launcher.stop()


__all__ = ["BrowserLauncher", "launched_browser"]
