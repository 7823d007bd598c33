from __future__ import annotations

import pytest

from cookie_helpers.formatters import json_mapping
from cookie_helpers.profiles import (
    COOKIE_SOURCE_STORAGE,
    GOOGLE_CHAT,
    GOOGLE_VOICE,
    META,
    PROFILES,
    SLACK,
    TWITTER,
    CredentialProfile,
    get_profile,
)
from cookie_helpers.selection import first_match


def test_registry_has_every_service_on_distinct_ports() -> None:
    assert sorted(PROFILES) == ["googlechat", "gvoice", "meta", "slack", "twitter"]
    ports = [p.port for p in PROFILES.values()]
    assert sorted(ports) == [9222, 9223, 9224, 9225, 9226]


def test_required_names() -> None:
    assert GOOGLE_CHAT.required == ("COMPASS", "SSID", "SID", "OSID", "HSID")
    assert GOOGLE_VOICE.required == ("SID", "HSID", "SSID", "OSID", "APISID", "SAPISID")
    assert GOOGLE_VOICE.optional == ("__Secure-1PSIDTS",)
    assert SLACK.required == ("token", "d")
    assert META.required == ("c_user", "xs", "datr")
    assert TWITTER.required == ("ct0", "auth_token")


def test_cookie_names_exclude_storage_key() -> None:
    assert SLACK.cookie_names == ("d",)
    assert GOOGLE_VOICE.cookie_names[-1] == "__Secure-1PSIDTS"


def test_auxiliary_urls_only_for_multi_url_profiles() -> None:
    assert GOOGLE_VOICE.auxiliary_urls == GOOGLE_VOICE.entry_urls
    assert GOOGLE_VOICE.cookie_source == COOKIE_SOURCE_STORAGE
    for profile in (GOOGLE_CHAT, SLACK, META, TWITTER):
        assert profile.auxiliary_urls == ()


def test_rendered_payloads() -> None:
    assert GOOGLE_CHAT.render({"COMPASS": "c", "SSID": "s", "SID": "i", "OSID": "o", "HSID": "h"}).display == (
        '{"compass":"c","hsid":"h","osid":"o","sid":"i","ssid":"s"}'
    )
    assert SLACK.render({"token": "xoxc-1", "d": "xoxd-2"}).display == "login token xoxc-1 xoxd-2"
    assert TWITTER.render({"ct0": "a", "auth_token": "b"}).display == "login a b"
    assert META.render({"c_user": "1", "xs": "2", "datr": "3"}).display.startswith("curl 'https://www.facebook.com/'")


def test_get_profile_is_case_insensitive() -> None:
    assert get_profile(" Slack ") is SLACK


def test_get_profile_unknown_lists_choices() -> None:
    with pytest.raises(KeyError, match="googlechat, gvoice, meta, slack, twitter"):
        get_profile("myspace")


@pytest.mark.parametrize(
    "overrides",
    [
        {"entry_urls": ()},
        {"required": ()},
        {"cookie_source": "disk"},
    ],
)
def test_invalid_profiles_are_rejected(overrides: dict) -> None:
    kwargs = {
        "name": "x",
        "title": "X",
        "entry_urls": ("https://example.com",),
        "required": ("a",),
        "port": 9300,
        "select": first_match(),
        "formatter": json_mapping(),
    }
    kwargs.update(overrides)
    with pytest.raises(ValueError):
        CredentialProfile(**kwargs)
