from __future__ import annotations

import logging
import os
import re
import time
from pathlib import Path
from typing import AbstractSet, Callable

from insurebdd.core import config, paths, reports
from insurebdd.core.browser import BrowserManager, get_browser_manager
from insurebdd.core.world import World

logger = logging.getLogger(__name__)

OFFLINE_TAG = "offline"

TAG_BANNERS = {
    "smoke": "Running SMOKE test - verifying critical functionality",
    "critical": "Running CRITICAL test - high priority functionality",
    "regression": "Running REGRESSION test - ensuring existing functionality works",
    "e2e": "Running END-TO-END test - complete user journey",
    "auth": "Running AUTHENTICATION test",
    "debug": "Running DEBUG test - detailed logging enabled",
}

FAILURE_ALERTS = {
    "smoke": "CRITICAL: Smoke test failed - basic functionality is broken!",
    "critical": "HIGH PRIORITY: Critical test failed - requires immediate attention!",
    "e2e": "END-TO-END test failed - user journey is broken",
}


def needs_browser(tags: AbstractSet[str]) -> bool:
    return OFFLINE_TAG not in tags


def screenshot_name(scenario_name: str) -> str:
    return "failed-" + re.sub(r"[^a-zA-Z0-9]", "-", scenario_name)


class FeatureLifecycle:
    """Keeps one browser per feature file: a new feature replaces the previous browser."""

    def __init__(self, manager_factory: Callable[[], BrowserManager] = get_browser_manager) -> None:
        self._manager_factory = manager_factory
        self.current_feature: str | None = None

    @property
    def manager(self) -> BrowserManager:
        return self._manager_factory()

    def enter_feature(self, feature_uri: str, *, with_browser: bool = True) -> bool:
        """Switch to `feature_uri`; returns True when this is a new feature."""
        manager = self.manager
        is_new = feature_uri != self.current_feature
        if is_new:
            if self.current_feature is not None and manager.is_ready():
                logger.info("Cleaning up browser from previous feature")
                manager.cleanup()
            self.current_feature = feature_uri
        if with_browser and not manager.is_ready():
            logger.info("Initializing browser for feature: %s", feature_uri)
            manager.initialize_browser()
        return is_new

    def finish(self) -> None:
        manager = self.manager
        if manager.is_ready():
            logger.info("Final browser cleanup")
            manager.cleanup()
        self.current_feature = None


def start_run() -> Path:
    """Log the run settings, validate config and create the report directories."""
    logger.info("Starting BDD test execution")
    logger.info("Environment: %s", config.environment())
    logger.info("Base URL: %s", config.get_run_config().base_url)
    logger.info("Browser: %s", config.get_browser_config().browser)

    config.validate_config()
    logger.info("Configuration validation passed")

    root = paths.ensure_report_dirs()
    logger.info("Report directories ready under %s", root)
    return root


def begin_scenario(world: World, name: str, tags: AbstractSet[str]) -> None:
    logger.info('Starting scenario: "%s"', name)
    world.set_scenario_data("scenario_name", name)
    world.set_scenario_data("scenario_tags", sorted(tags))
    world.set_scenario_data("start_time", time.monotonic())

    if needs_browser(tags):
        world.initialize_page()

    if tags:
        logger.info("Tags: %s", ", ".join(f"@{t}" for t in sorted(tags)))
    if config.is_debug_mode():
        logger.debug("Debug mode enabled for scenario")

    for tag in sorted(tags):
        banner = TAG_BANNERS.get(tag)
        if banner:
            world.log_message(banner, "info")
    if "debug" in tags:
        os.environ["DEBUG_CONSOLE"] = "true"


def end_scenario(world: World, tags: AbstractSet[str]) -> str:
    name = world.get_scenario_data("scenario_name") or "<unknown>"
    started = world.get_scenario_data("start_time")
    if started is not None:
        logger.info('Scenario "%s" completed in %dms', name, (time.monotonic() - started) * 1000)

    status = "failed" if world.failure is not None else "passed"
    if status == "failed":
        logger.error("Scenario FAILED: %s", name)
        if world.attach_screenshot(screenshot_name(name)) is not None:
            logger.info("Screenshot captured for failed scenario")
        else:
            logger.warning("Could not capture failure screenshot")
        logger.error("Failure reason: %s", world.failure)
        for tag in sorted(tags):
            alert = FAILURE_ALERTS.get(tag)
            if alert:
                logger.error(alert)
    else:
        logger.info("Scenario PASSED: %s", name)

    world.clear_scenario_data()
    if os.environ.get("DEBUG_CONSOLE") == "true":
        del os.environ["DEBUG_CONSOLE"]
    return status


def finish_run(lifecycle: FeatureLifecycle, report_path: Path | None = None) -> dict | None:
    """Close the browser and log a summary of the cucumber report, when there is one."""
    logger.info("BDD test execution completed")
    lifecycle.finish()

    report_path = report_path or paths.cucumber_json_path()
    if not report_path.exists():
        logger.info("No cucumber report at %s; skipping summary", report_path)
        return None
    try:
        summary = reports.summarize_report(report_path, paths.summary_json_path())
    except reports.ReportError as exc:
        logger.warning("Could not generate test summary from report file: %s", exc)
        return None

    for line in reports.summary_lines(summary):
        logger.info(line)
    logger.info("Reports generated in: %s", paths.reports_dir())
    return summary
