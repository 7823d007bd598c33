"""One bounded extraction run: launch, attach, poll, render, tear down."""

from __future__ import annotations

import logging
from contextlib import closing

from .config import HelperConfig
from .devtools import DevtoolsLink, wait_ready
from .errors import DevtoolsUnreachable
from .extractor import Extractor
from .http_client import HttpClientError
from .launcher import launched_browser
from .profiles import CredentialProfile
from .types import Rendered

logger = logging.getLogger("cookie_helpers.runner")


def extract_credentials(profile: CredentialProfile, config: HelperConfig | None = None) -> dict[str, str]:
    """Drive one interactive login for *profile* and return the collected credentials.

    The browser is torn down on every exit path.
    """
    config = config or HelperConfig.from_env()
    with launched_browser(profile, config) as launcher:
        port = launcher.port if launcher.port is not None else config.port_for(profile.port)
        wait_ready(port, config.ready_timeout, is_alive=launcher.is_alive, profile=profile.name)
        try:
            link = DevtoolsLink.connect(port, timeout=config.cdp_timeout)
        except HttpClientError as exc:
            raise DevtoolsUnreachable(
                profile=profile.name,
                reason=f"DevTools answered but could not be attached: {exc}",
                details={"port": port},
            ) from exc
        with closing(link):
            logger.info("Waiting for login (%d second timeout)...", int(config.login_timeout))
            extractor = Extractor(
                profile,
                link,
                timeout=config.login_timeout,
                interval=config.poll_interval,
            )
            return extractor.run()


def run_profile(profile: CredentialProfile, config: HelperConfig | None = None) -> Rendered:
    """Extract and render *profile*'s credentials."""
    values = extract_credentials(profile, config)
    return profile.render(values)


__all__ = ["extract_credentials", "run_profile"]
