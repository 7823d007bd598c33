from __future__ import annotations

import contextlib
from typing import Any

import pytest

from cookie_helpers import runner
from cookie_helpers.config import HelperConfig
from cookie_helpers.errors import DevtoolsUnreachable, ExtractionTimeout
from cookie_helpers.http_client import HttpClientError
from cookie_helpers.profiles import META, TWITTER
from cookie_helpers.types import Cookie, PageInfo

PAGE = PageInfo(id="p1", url="https://x.com/home", ws_url="ws://127.0.0.1:9226/devtools/page/p1")


class DummyLauncher:
    def __init__(self) -> None:
        self.port = 9226
        self.stopped = False

    def is_alive(self) -> bool:
        return True


class DummyLink:
    def __init__(self, cookies: list[Cookie]) -> None:
        self.cookies = cookies
        self.closed = False

    def list_pages(self) -> list[PageInfo]:
        return [PAGE]

    def open_channel(self, page: PageInfo) -> Any:
        return object()

    def all_cookies(self, channel: Any) -> list[Cookie]:  # noqa: ARG002
        return self.cookies

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def harness(monkeypatch) -> dict[str, Any]:  # noqa: ANN001
    state: dict[str, Any] = {"launcher": DummyLauncher(), "ready": []}

    @contextlib.contextmanager
    def fake_launched(profile, config):  # noqa: ANN001, ARG001
        try:
            yield state["launcher"]
        finally:
            state["launcher"].stopped = True

    def fake_ready(port: int, timeout: float, **kwargs: Any) -> None:
        state["ready"].append((port, timeout, kwargs.get("profile")))

    monkeypatch.setattr(runner, "launched_browser", fake_launched)
    monkeypatch.setattr(runner, "wait_ready", fake_ready)
    return state


def _patch_connect(monkeypatch, link: Any) -> None:  # noqa: ANN001
    def connect(port: int, *, timeout: float = 10.0) -> Any:  # noqa: ARG001
        if isinstance(link, Exception):
            raise link
        return link

    monkeypatch.setattr(runner.DevtoolsLink, "connect", staticmethod(connect))


def test_run_profile_renders_and_tears_down(monkeypatch, harness: dict[str, Any]) -> None:  # noqa: ANN001
    link = DummyLink([Cookie("ct0", "c", ".x.com"), Cookie("auth_token", "a", ".x.com")])
    _patch_connect(monkeypatch, link)

    rendered = runner.run_profile(TWITTER, HelperConfig(binary_path="chrome", ready_timeout=5.0))

    assert rendered.display == "login c a"
    assert harness["ready"] == [(9226, 5.0, "twitter")]
    assert link.closed
    assert harness["launcher"].stopped


def test_timeout_still_tears_down(monkeypatch, harness: dict[str, Any]) -> None:  # noqa: ANN001
    link = DummyLink([Cookie("c_user", "1", ".facebook.com")])
    _patch_connect(monkeypatch, link)
    config = HelperConfig(binary_path="chrome", login_timeout=0.01, poll_interval=0.001)

    with pytest.raises(ExtractionTimeout) as excinfo:
        runner.extract_credentials(META, config)

    assert excinfo.value.missing_names == ["xs", "datr"]
    assert link.closed
    assert harness["launcher"].stopped


def test_attach_failure_is_unreachable(monkeypatch, harness: dict[str, Any]) -> None:  # noqa: ANN001
    _patch_connect(monkeypatch, HttpClientError("connection reset"))

    with pytest.raises(DevtoolsUnreachable, match="connection reset"):
        runner.extract_credentials(TWITTER, HelperConfig(binary_path="chrome"))
    assert harness["launcher"].stopped
