"""Run-level errors.

Only these cross the extraction boundary; per-page read failures and
auxiliary navigation failures are absorbed inside the extractor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class ExtractionError(Exception):
    """Structured failure with a hint for the person at the keyboard."""

    profile: str
    reason: str
    suggestion: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.suggestion:
            return f"[{self.profile}] {self.reason}. {self.suggestion}"
        return f"[{self.profile}] {self.reason}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": True,
            "kind": type(self).__name__,
            "profile": self.profile,
            "reason": self.reason,
            "suggestion": self.suggestion,
            "details": self.details,
        }


class BrowserLaunchError(ExtractionError):
    """The browser binary could not be started."""


class DevtoolsUnreachable(ExtractionError):
    """The debug endpoint never answered within the readiness window."""


@dataclass(eq=False)
class ExtractionTimeout(ExtractionError):
    """Required credentials were still incomplete at the deadline."""

    missing_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["missing_names"] = list(self.missing_names)
        return out


__all__ = [
    "BrowserLaunchError",
    "DevtoolsUnreachable",
    "ExtractionError",
    "ExtractionTimeout",
]
