#!/usr/bin/env python3
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

print(
    f"[cookie-helpers] browser={os.environ.get('COOKIE_HELPER_BROWSER', 'auto')} | "
    f"port={os.environ.get('COOKIE_HELPER_PORT', 'per-profile')} | "
    f"timeout={os.environ.get('COOKIE_HELPER_TIMEOUT', '300')}s",
    file=sys.stderr,
)

from cookie_helpers.main import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
