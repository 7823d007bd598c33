"""
Command-line entry point: run one credential extraction and print the payload.

Exit codes: 0 on success, 1 on extraction failure, 130 on Ctrl-C.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from .clipboard import copy_to_clipboard
from .config import HelperConfig
from .errors import ExtractionError
from .profiles import PROFILES, CredentialProfile
from .runner import run_profile

logger = logging.getLogger("cookie_helpers")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cookie-helpers",
        description="Open a browser, let you log in, then extract bridge login credentials.",
    )
    parser.add_argument("profile", choices=sorted(PROFILES), help="Service to extract credentials for")
    parser.add_argument("--browser", help="Browser executable (default: auto-detect)")
    parser.add_argument("--port", type=int, help="Remote debugging port (default: per-profile)")
    parser.add_argument("--timeout", type=float, help="Login timeout in seconds (default: 300)")
    parser.add_argument("--no-clipboard", action="store_true", help="Do not copy the result to the clipboard")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> HelperConfig:
    config = HelperConfig.from_env()
    if args.browser:
        config.binary_path = args.browser
    if args.port:
        config.port_override = args.port
    if args.timeout and args.timeout > 0:
        config.login_timeout = args.timeout
    if args.no_clipboard:
        config.clipboard = False
    return config


def print_banner(profile: CredentialProfile, out: TextIO) -> None:
    print(profile.title, file=out)
    print("=" * len(profile.title), file=out)
    for i, line in enumerate(profile.instructions, start=1):
        print(f"{i}. {line}", file=out)
    print("", file=out)


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None, stderr: TextIO | None = None) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=err,
    )

    profile = PROFILES[args.profile]
    config = config_from_args(args)
    print_banner(profile, out)

    try:
        rendered = run_profile(profile, config)
    except ExtractionError as exc:
        logger.debug("extraction_failed %s", exc.to_dict())
        print(f"\n{exc}", file=err)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=err)
        return 130

    print("\n✓ Credentials extracted successfully!\n", file=out)
    if profile.bot:
        print(f"Send this to {profile.bot}:\n", file=out)
    for line in profile.next_steps:
        print(line, file=out)
    print(rendered.display, file=out)

    if config.clipboard:
        if copy_to_clipboard(rendered.clipboard):
            print("\n(Copied to clipboard)", file=out)
        else:
            logger.info("No clipboard utility available; copy the value above manually")
    return 0


if __name__ == "__main__":
    sys.exit(main())
