"""Best-effort copy to the OS clipboard via whatever utility is installed."""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger("cookie_helpers.clipboard")

CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


def copy_to_clipboard(text: str, *, timeout: float = 5.0) -> bool:
    """Return True when one of the clipboard utilities accepted *text*."""
    for cmd in CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]) is None:
            continue
        try:
            subprocess.run(cmd, input=text.encode(), check=True, timeout=timeout, capture_output=True)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("Clipboard via %s failed: %s", cmd[0], exc)
            continue
        return True
    return False
