"""
Bridge login credential extraction over the Chrome DevTools Protocol.

Each module provides focused functionality:
- profiles: per-service credential profiles (URLs, names, rules, output)
- selection: tie-break rules for duplicate same-named cookies
- storage: localStorage token strategies
- launcher: isolated browser process + temp profile lifecycle
- devtools / page_channel / session_cdp: DevTools connectivity
- extractor: the polling state machine
- formatters / clipboard: output packaging
- runner / main: one-shot run and CLI
"""

from .config import HelperConfig
from .errors import BrowserLaunchError, DevtoolsUnreachable, ExtractionError, ExtractionTimeout
from .extractor import ExtractionPhase, ExtractionState, Extractor
from .profiles import PROFILES, CredentialProfile, get_profile
from .runner import extract_credentials, run_profile
from .types import Cookie, PageInfo, Rendered

__all__ = [
    "BrowserLaunchError",
    "Cookie",
    "CredentialProfile",
    "DevtoolsUnreachable",
    "ExtractionError",
    "ExtractionPhase",
    "ExtractionState",
    "ExtractionTimeout",
    "Extractor",
    "HelperConfig",
    "PROFILES",
    "PageInfo",
    "Rendered",
    "extract_credentials",
    "get_profile",
    "run_profile",
]
