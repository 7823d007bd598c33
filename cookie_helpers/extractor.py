"""Polling extractor.

Explicit state machine: ``POLLING -> SATISFIED`` or ``POLLING -> TIMED_OUT``.
Each tick inspects every open page once; per-page read failures and
auxiliary navigation failures are absorbed and retried on the next tick.
Only ExtractionTimeout leaves run().
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .errors import ExtractionTimeout
from .http_client import HttpClientError
from .profiles import COOKIE_SOURCE_STORAGE, CredentialProfile
from .redaction import mask_secret, redact_url
from .types import Cookie, PageInfo

logger = logging.getLogger("cookie_helpers.extractor")

PROGRESS_EVERY_TICKS = 10
NAVIGATION_TIMEOUT = 20.0

# Transport faults plus the odd malformed payload from a page mid-navigation.
_PAGE_ERRORS = (HttpClientError, OSError, ValueError, KeyError, TypeError, AttributeError)


class ExtractionPhase(enum.Enum):
    POLLING = "polling"
    SATISFIED = "satisfied"
    TIMED_OUT = "timed_out"


@dataclass
class ExtractionState:
    """Run-scoped accumulator. One per Extractor, never shared."""

    started_at: float
    deadline: float
    collected: dict[str, str] = field(default_factory=dict)
    phase: ExtractionPhase = ExtractionPhase.POLLING
    ticks: int = 0
    token_source: str | None = None

    @property
    def satisfied(self) -> bool:
        return self.phase is ExtractionPhase.SATISFIED


class Extractor:
    """Poll a DevtoolsLink until *profile*'s required credentials are all present."""

    def __init__(
        self,
        profile: CredentialProfile,
        link: Any,
        *,
        timeout: float = 300.0,
        interval: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.profile = profile
        self.link = link
        self.interval = max(0.0, float(interval))
        self._clock = clock
        self._sleep = sleep
        now = clock()
        self.state = ExtractionState(started_at=now, deadline=now + max(0.0, float(timeout)))
        self._seen_urls: dict[str, str] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # State queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def phase(self) -> ExtractionPhase:
        return self.state.phase

    def missing(self) -> list[str]:
        """Required names without a value, in profile order."""
        return [n for n in self.profile.required if not self.state.collected.get(n)]

    def _missing_cookie_names(self) -> list[str]:
        collected = self.state.collected
        return [n for n in self.profile.cookie_names if not collected.get(n)]

    def _storage_pending(self) -> bool:
        storage = self.profile.storage
        return storage is not None and not self.state.collected.get(storage.key)

    def result(self) -> dict[str, str]:
        """Collected values in profile order: required first, then found optional ones."""
        collected = self.state.collected
        return {n: collected[n] for n in (*self.profile.required, *self.profile.optional) if collected.get(n)}

    # ─────────────────────────────────────────────────────────────────────────
    # Tick steps
    # ─────────────────────────────────────────────────────────────────────────

    def _visit_auxiliary_urls(self, pages: list[PageInfo]) -> None:
        if not self.profile.auxiliary_urls or not pages:
            return
        try:
            channel = self.link.open_channel(pages[0])
        except _PAGE_ERRORS as exc:
            logger.debug("Primary page unavailable for navigation: %s", exc)
            return
        for url in self.profile.auxiliary_urls:
            remaining = self.state.deadline - self._clock()
            if remaining <= 0:
                return
            try:
                channel.navigate(url, timeout=min(NAVIGATION_TIMEOUT, remaining))
            except _PAGE_ERRORS as exc:
                logger.debug("Navigation to %s failed: %s", url, exc)
                if getattr(channel, "closed", False):
                    self.link.drop_channel(pages[0])
                    return

    def _read_cookies(self, page: PageInfo) -> list[Cookie]:
        channel = self.link.open_channel(page)
        if self.profile.cookie_source == COOKIE_SOURCE_STORAGE:
            return self.link.storage_cookies(channel)
        return self.link.all_cookies(channel)

    def _select(self, snapshot: list[Cookie]) -> None:
        by_name: dict[str, list[Cookie]] = {}
        for cookie in snapshot:
            by_name.setdefault(cookie.name, []).append(cookie)
        for name in self.profile.cookie_names:
            candidates = by_name.get(name)
            if not candidates:
                continue
            winner = self.profile.select(name, candidates)
            if winner is None or not winner.value:
                continue
            if name not in self.state.collected:
                logger.info("Found %s (%s)", name, winner.domain or "?")
            self.state.collected[name] = winner.value

    def _read_storage(self, page: PageInfo) -> None:
        storage = self.profile.storage
        if storage is None or not storage.matches(page.url):
            return
        hit = storage.extract(self.link.open_channel(page))
        if hit is None or not hit.value:
            return
        # First hit wins; later pages never replace it.
        self.state.collected.setdefault(storage.key, hit.value)
        self.state.token_source = hit.source
        logger.info("Found %s (from %s): %s", storage.key, hit.source, mask_secret(hit.value))

    def _note_url(self, page: PageInfo) -> None:
        if not page.url or self._seen_urls.get(page.id) == page.url:
            return
        self._seen_urls[page.id] = page.url
        if any(d in page.url for d in self.profile.site_domains):
            logger.info("Page: %s", redact_url(page.url)[:80])

    def tick(self) -> ExtractionPhase:
        """Run one full inspection pass. A no-op once the run is terminal."""
        if self.state.phase is not ExtractionPhase.POLLING:
            return self.state.phase
        self.state.ticks += 1

        try:
            pages = self.link.list_pages()
        except _PAGE_ERRORS as exc:
            logger.debug("Listing pages failed: %s", exc)
            pages = []

        self._visit_auxiliary_urls(pages)

        snapshot: list[Cookie] = []
        for page in pages:
            self._note_url(page)
            if self._missing_cookie_names():
                try:
                    snapshot.extend(self._read_cookies(page))
                except _PAGE_ERRORS as exc:
                    logger.debug("Cookie read on page %s failed: %s", page.id, exc)
                    self.link.drop_channel(page)
                else:
                    self._select(snapshot)
            if self._storage_pending():
                try:
                    self._read_storage(page)
                except _PAGE_ERRORS as exc:
                    logger.debug("Storage read on page %s failed: %s", page.id, exc)
                    self.link.drop_channel(page)

        if not self.missing():
            self.state.phase = ExtractionPhase.SATISFIED
            logger.info("All required credentials found after %d tick(s)", self.state.ticks)
        elif self.state.ticks % PROGRESS_EVERY_TICKS == 0:
            elapsed = self._clock() - self.state.started_at
            logger.info("Still waiting (%ds): missing %s", int(elapsed), ", ".join(self.missing()))
        return self.state.phase

    def _expire(self) -> None:
        self.state.phase = ExtractionPhase.TIMED_OUT
        missing = self.missing()
        raise ExtractionTimeout(
            profile=self.profile.name,
            reason=f"Timed out waiting for credentials; missing: {', '.join(missing)}",
            suggestion="Make sure you completed login in the browser window",
            details={"present": sorted(self.state.collected)},
            missing_names=missing,
        )

    def run(self) -> dict[str, str]:
        """Poll until satisfied; raise ExtractionTimeout at the deadline."""
        if self.state.phase is ExtractionPhase.TIMED_OUT:
            self._expire()
        while self.state.phase is ExtractionPhase.POLLING:
            if self.tick() is ExtractionPhase.SATISFIED:
                break
            if self._clock() >= self.state.deadline:
                self._expire()
            self._sleep(self.interval)
        return self.result()


__all__ = ["ExtractionPhase", "ExtractionState", "Extractor"]
