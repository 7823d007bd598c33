from __future__ import annotations

import importlib

import pytest

MODULES = [
    "cookie_helpers",
    "cookie_helpers.__main__",
    "cookie_helpers.clipboard",
    "cookie_helpers.config",
    "cookie_helpers.devtools",
    "cookie_helpers.errors",
    "cookie_helpers.extractor",
    "cookie_helpers.formatters",
    "cookie_helpers.http_client",
    "cookie_helpers.launcher",
    "cookie_helpers.main",
    "cookie_helpers.page_channel",
    "cookie_helpers.profiles",
    "cookie_helpers.redaction",
    "cookie_helpers.runner",
    "cookie_helpers.selection",
    "cookie_helpers.session_cdp",
    "cookie_helpers.storage",
    "cookie_helpers.types",
]


@pytest.mark.parametrize("name", MODULES)
def test_module_imports(name: str) -> None:
    importlib.import_module(name)
