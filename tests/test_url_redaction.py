from __future__ import annotations

from cookie_helpers.redaction import is_sensitive_key, mask_secret, redact_url


def test_redact_url_keeps_normal_query() -> None:
    url = "https://example.com/search?q=hello&sort=asc"
    assert redact_url(url) == url


def test_redact_url_redacts_sensitive_query_param_but_keeps_others() -> None:
    out = redact_url("https://accounts.google.com/signin?continue=x&code=abc123")
    assert "continue=x" in out
    assert "abc123" not in out
    assert "redacted" in out


def test_redact_url_redacts_oauth_fragment() -> None:
    out = redact_url("https://example.com/callback#access_token=abc&lang=en")
    assert "lang=en" in out
    assert "access_token=abc" not in out
    assert "redacted" in out


def test_redact_url_drops_userinfo() -> None:
    out = redact_url("https://user:pw@example.com/path")
    assert "pw" not in out
    assert out == "https://example.com/path"


def test_redact_url_passes_through_non_urls() -> None:
    assert redact_url("") == ""
    assert redact_url("about:blank") == "about:blank"


def test_sensitive_keys() -> None:
    assert is_sensitive_key("token")
    assert is_sensitive_key("X-Session-Id")
    assert is_sensitive_key("d")
    assert not is_sensitive_key("author")
    assert not is_sensitive_key("q")
    assert not is_sensitive_key("")


def test_mask_secret_never_shows_whole_value() -> None:
    assert mask_secret("") == "<empty>"
    assert mask_secret("short") == "<5 chars>"
    masked = mask_secret("xoxc-1234567890")
    assert masked == "xoxc...<15 chars>"
    assert "1234567890" not in masked
