from __future__ import annotations

from cookie_helpers.errors import BrowserLaunchError, DevtoolsUnreachable, ExtractionError, ExtractionTimeout


def test_str_carries_profile_reason_and_suggestion() -> None:
    err = DevtoolsUnreachable(profile="gvoice", reason="DevTools not reachable on 127.0.0.1:9223", suggestion="Retry")
    assert str(err) == "[gvoice] DevTools not reachable on 127.0.0.1:9223. Retry"
    assert str(BrowserLaunchError(profile="meta", reason="no binary")) == "[meta] no binary"


def test_all_run_errors_share_a_base() -> None:
    for cls in (BrowserLaunchError, DevtoolsUnreachable, ExtractionTimeout):
        assert issubclass(cls, ExtractionError)


def test_timeout_to_dict_lists_missing_names() -> None:
    err = ExtractionTimeout(profile="twitter", reason="Timed out", missing_names=["auth_token"])
    payload = err.to_dict()
    assert payload["kind"] == "ExtractionTimeout"
    assert payload["missing_names"] == ["auth_token"]
    assert payload["profile"] == "twitter"


def test_errors_are_hashable() -> None:
    err = ExtractionTimeout(profile="x", reason="y")
    assert {err: 1}[err] == 1
