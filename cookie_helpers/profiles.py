"""Credential profiles, one per supported service.

Adding a service means adding one CredentialProfile to PROFILES; the
extraction engine itself never changes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .formatters import Formatter, command, curl_header, json_mapping
from .selection import DomainLadder, SelectionRule, first_match, per_name, prefer_path, value_prefix
from .storage import LocalStorageToken, StorageStrategy
from .types import Rendered

COOKIE_SOURCE_NETWORK = "network"
COOKIE_SOURCE_STORAGE = "storage"


@dataclass(frozen=True)
class CredentialProfile:
    name: str
    title: str
    entry_urls: tuple[str, ...]
    required: tuple[str, ...]
    port: int
    select: SelectionRule
    formatter: Formatter
    optional: tuple[str, ...] = ()
    storage: StorageStrategy | None = None
    cookie_source: str = COOKIE_SOURCE_NETWORK
    site_domains: tuple[str, ...] = ()
    bot: str = ""
    instructions: tuple[str, ...] = ()
    next_steps: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.entry_urls:
            raise ValueError(f"profile {self.name!r} needs at least one entry URL")
        if not self.required:
            raise ValueError(f"profile {self.name!r} needs at least one required credential")
        if self.cookie_source not in {COOKIE_SOURCE_NETWORK, COOKIE_SOURCE_STORAGE}:
            raise ValueError(f"profile {self.name!r}: unknown cookie source {self.cookie_source!r}")

    @property
    def auxiliary_urls(self) -> tuple[str, ...]:
        """Entry URLs to revisit each tick; empty for single-URL profiles."""
        return self.entry_urls if len(self.entry_urls) > 1 else ()

    @property
    def cookie_names(self) -> tuple[str, ...]:
        """Required then optional names that come from the cookie jar."""
        skip = self.storage.key if self.storage is not None else None
        return tuple(n for n in (*self.required, *self.optional) if n != skip)

    def render(self, values: Mapping[str, str]) -> Rendered:
        return self.formatter(values)


GOOGLE_CHAT = CredentialProfile(
    name="googlechat",
    title="Google Chat Cookie Extractor",
    entry_urls=("https://chat.google.com",),
    required=("COMPASS", "SSID", "SID", "OSID", "HSID"),
    port=9222,
    select=per_name({"COMPASS": prefer_path("/")}),
    formatter=json_mapping(),
    site_domains=("google.com",),
    bot="@googlechatbot",
    instructions=(
        "A Chrome window will open to chat.google.com",
        "Log in with your Google Workspace account",
        "Cookies will be extracted and copied to clipboard",
    ),
    next_steps=("Send `login-cookie` followed by this JSON:",),
)

GOOGLE_VOICE = CredentialProfile(
    name="gvoice",
    title="Google Voice Cookie Extractor",
    entry_urls=(
        "https://voice.google.com",
        "https://accounts.google.com",
        "https://myaccount.google.com",
    ),
    required=("SID", "HSID", "SSID", "OSID", "APISID", "SAPISID"),
    optional=("__Secure-1PSIDTS",),
    port=9223,
    select=DomainLadder("google.com", preferred_hosts=("voice.google.com", "accounts.google.com")),
    formatter=json_mapping(),
    cookie_source=COOKIE_SOURCE_STORAGE,
    site_domains=("google.com",),
    bot="@gvoicebot",
    instructions=(
        "A Chrome window will open to voice.google.com",
        "Log in with your Google account",
        "Cookies will be extracted and copied to clipboard",
    ),
    next_steps=("Send `login-cookie` followed by this JSON:",),
)

SLACK = CredentialProfile(
    name="slack",
    title="Slack Token Extractor",
    entry_urls=("https://slack.com/signin",),
    required=("token", "d"),
    port=9224,
    select=per_name({"d": value_prefix("xoxd-")}),
    storage=LocalStorageToken(
        key="token",
        storage_key="localConfig_v2",
        container="teams",
        field="token",
        prefix="xoxc-",
        url_pattern="app.slack.com/client/",
    ),
    formatter=command("login token {token} {d}"),
    site_domains=("slack.com",),
    bot="@slackbot",
    instructions=(
        "A Chrome window will open to Slack",
        "Log in to your Slack workspace",
        "Make sure you're IN a workspace (seeing channels/messages)",
        "Token and cookie will be extracted automatically",
    ),
)

META = CredentialProfile(
    name="meta",
    title="Meta (Facebook/Instagram) Cookie Extractor",
    entry_urls=("https://www.facebook.com",),
    required=("c_user", "xs", "datr"),
    port=9225,
    select=first_match("facebook.com"),
    formatter=curl_header("https://www.facebook.com/", ("c_user", "xs", "datr")),
    site_domains=("facebook.com",),
    bot="@metabot",
    instructions=(
        "A Chrome window will open to Facebook",
        "Log in with your Facebook account",
        "Cookies will be extracted and copied to clipboard",
    ),
    next_steps=("Send `login-cookies`, then paste this cURL command when prompted:",),
)

TWITTER = CredentialProfile(
    name="twitter",
    title="Twitter/X Cookie Extractor",
    entry_urls=("https://twitter.com/login",),
    required=("ct0", "auth_token"),
    port=9226,
    # Sessions may live on either twitter.com or x.com.
    select=first_match("twitter.com", "x.com"),
    formatter=command("login {ct0} {auth_token}"),
    site_domains=("twitter.com", "x.com"),
    bot="@twitterbot",
    instructions=(
        "A Chrome window will open to Twitter",
        "Log in with your Twitter account",
        "Cookies will be extracted and copied to clipboard",
    ),
)

PROFILES: dict[str, CredentialProfile] = {
    p.name: p for p in (GOOGLE_CHAT, GOOGLE_VOICE, SLACK, META, TWITTER)
}


def get_profile(name: str) -> CredentialProfile:
    key = (name or "").strip().lower()
    try:
        return PROFILES[key]
    except KeyError:
        raise KeyError(f"Unknown profile {name!r}; choose from {', '.join(sorted(PROFILES))}") from None


__all__ = [
    "COOKIE_SOURCE_NETWORK",
    "COOKIE_SOURCE_STORAGE",
    "CredentialProfile",
    "PROFILES",
    "get_profile",
]
