"""Shared pytest configuration, suite markers and environment isolation."""

from __future__ import annotations

from pathlib import Path

import pytest

SUITE_MARKERS = {
    "e2e_tests": "e2e",
    "integration_tests": "integration",
    "unit_tests": "unit",
}
SETTINGS_ENV_VARS = ("PANDOC_EXPORT_SETTINGS", "PANDOC_EXPORT_PANDOC_PATH")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test with the suite its directory belongs to."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        for directory, marker in SUITE_MARKERS.items():
            if directory in parts:
                item.add_marker(getattr(pytest.mark, marker))
                break


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's own settings variables out of the tests."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
