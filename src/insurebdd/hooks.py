"""pytest plugin wiring the scenario lifecycle into pytest-bdd.

Load it with `pytest_plugins = ["insurebdd.hooks"]` next to the step modules.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from insurebdd.core import config as config_core, lifecycle
from insurebdd.core.logs import configure_logging
from insurebdd.core.world import World

SCENARIO_MARKERS = {
    "smoke": "critical functionality checks",
    "critical": "high priority functionality",
    "regression": "existing functionality",
    "e2e": "complete user journeys",
    "auth": "authentication flows",
    "debug": "verbose browser console logging",
    "offline": "scenario never starts a browser",
    "browser": "scenario needs a real browser",
    "data": "test data generation",
}

_LIFECYCLE = lifecycle.FeatureLifecycle()


def _tags(feature: Any, scenario: Any) -> set[str]:
    return set(getattr(feature, "tags", None) or ()) | set(getattr(scenario, "tags", None) or ())


def pytest_configure(config: pytest.Config) -> None:
    for name, description in SCENARIO_MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def pytest_sessionstart(session: pytest.Session) -> None:
    configure_logging(debug=config_core.is_debug_mode())
    try:
        lifecycle.start_run()
    except ValueError as exc:
        # ConfigError, or a config file that does not parse
        pytest.exit(f"Configuration validation failed: {exc}", returncode=4)


@pytest.fixture()
def world(request: pytest.FixtureRequest) -> World:
    def _record(attachment: Any) -> None:
        request.node.user_properties.append(("attachment", attachment.file_name))

    return World(on_attach=_record)


def pytest_bdd_before_scenario(request: pytest.FixtureRequest, feature: Any, scenario: Any) -> None:
    tags = _tags(feature, scenario)
    _LIFECYCLE.enter_feature(feature.filename, with_browser=lifecycle.needs_browser(tags))
    lifecycle.begin_scenario(request.getfixturevalue("world"), scenario.name, tags)


def pytest_bdd_step_error(
    request: pytest.FixtureRequest,
    feature: Any,
    scenario: Any,
    step: Any,
    step_func: Any,
    step_func_args: Any,
    exception: Exception,
) -> None:
    request.getfixturevalue("world").failure = exception


def pytest_bdd_step_func_lookup_error(
    request: pytest.FixtureRequest, feature: Any, scenario: Any, step: Any, exception: Exception
) -> None:
    request.getfixturevalue("world").failure = exception


def pytest_bdd_after_scenario(request: pytest.FixtureRequest, feature: Any, scenario: Any) -> None:
    lifecycle.end_scenario(request.getfixturevalue("world"), _tags(feature, scenario))


@pytest.hookimpl(trylast=True)
def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    # trylast: pytest-bdd writes the cucumber JSON in its own sessionfinish
    report_path = getattr(session.config.option, "cucumber_json_path", None)
    lifecycle.finish_run(_LIFECYCLE, Path(report_path) if report_path else None)
