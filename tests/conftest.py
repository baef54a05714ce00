# pytest configuration hooks.
#
# Policy: No skipped tests. Skips hide real problems.
# Scenarios that need a real browser are deselected instead of skipped unless
# INSUREBDD_BROWSER_TESTS=1 (set by `insurebdd run`).

from __future__ import annotations

import os
from pathlib import Path
import pytest

# Lifecycle hooks and step definitions are plugins so the `world` fixture and steps are discoverable.
# pytester runs throwaway feature projects against the real hooks.
pytest_plugins = [
    "pytester",
    "insurebdd.hooks",
    "insurebdd.steps.common",
    "insurebdd.steps.insurance",
    "insurebdd.steps.playwright_site",
]

_SKIP_COUNT = 0


def pytest_configure() -> None:
    if "INSUREBDD_CONFIG_PATH" not in os.environ:
        path = Path(__file__).resolve().parents[1] / ".insurebdd-test-config.toml"
        os.environ["INSUREBDD_CONFIG_PATH"] = str(path)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.environ.get("INSUREBDD_BROWSER_TESTS") == "1":
        return
    keep: list[pytest.Item] = []
    deselected: list[pytest.Item] = []
    for item in items:
        (deselected if item.get_closest_marker("browser") else keep).append(item)
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = keep


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    global _SKIP_COUNT
    if report.when == "setup" and report.outcome == "skipped":
        _SKIP_COUNT += 1


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    if _SKIP_COUNT > 0:
        pytest.exit(f"Skipped tests are not allowed (skipped={_SKIP_COUNT}).", returncode=2)
