from __future__ import annotations

import json
import platform
from pathlib import Path
from typing import Any

import jsonschema

from insurebdd.core import clock, config, jsonio

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schemas"


class ReportError(ValueError):
    pass


def load_schema(name: str) -> dict[str, Any]:
    return json.loads((SCHEMA_DIR / name).read_text(encoding="utf-8"))


def load_report(path: str | Path) -> list[dict[str, Any]]:
    """Read a cucumber JSON report and check it against the bundled schema."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise ReportError(f"Report could not be read: {path}: {exc}") from exc
    try:
        report = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReportError(f"Report is not valid JSON: {path}") from exc
    try:
        jsonschema.validate(report, load_schema("cucumber-report.schema.json"))
    except jsonschema.ValidationError as exc:
        raise ReportError(f"Report does not look like cucumber JSON: {exc.message}") from exc
    return report


def validate_summary(summary: dict[str, Any]) -> None:
    jsonschema.validate(summary, load_schema("test-summary.schema.json"))


def format_duration(nanoseconds: float) -> str:
    milliseconds = nanoseconds / 1_000_000
    seconds = int(milliseconds // 1000)
    minutes = seconds // 60
    hours = minutes // 60

    if hours > 0:
        return f"{hours}h {minutes % 60}m {seconds % 60}s"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    if seconds > 0:
        return f"{seconds}s {int(milliseconds % 1000)}ms"
    return f"{int(milliseconds)}ms"


def scenario_status(scenario: dict[str, Any]) -> str:
    statuses = [(step.get("result") or {}).get("status") for step in scenario.get("steps") or []]
    if "failed" in statuses:
        return "failed"
    if "skipped" in statuses:
        return "skipped"
    return "passed"


def calculate_summary(report: list[dict[str, Any]]) -> dict[str, Any]:
    features = {"total": 0, "passed": 0, "failed": 0}
    scenarios = {"total": 0, "passed": 0, "failed": 0, "skipped": 0}
    steps = {"total": 0, "passed": 0, "failed": 0, "skipped": 0}
    total_duration = 0

    for feature in report:
        features["total"] += 1
        feature_failed = False

        for scenario in feature.get("elements") or []:
            if scenario.get("type") != "scenario":
                continue
            scenarios["total"] += 1

            for step in scenario.get("steps") or []:
                steps["total"] += 1
                result = step.get("result")
                if not result:
                    continue
                total_duration += result.get("duration") or 0
                status = result.get("status")
                if status in ("passed", "failed", "skipped"):
                    steps[status] += 1

            status = scenario_status(scenario)
            scenarios[status] += 1
            if status == "failed":
                feature_failed = True

        features["failed" if feature_failed else "passed"] += 1

    success_rate = "0.00"
    if scenarios["total"] > 0:
        success_rate = f"{scenarios['passed'] / scenarios['total'] * 100:.2f}"

    return {
        "features": features,
        "scenarios": scenarios,
        "steps": steps,
        "duration": {"total": total_duration, "formatted": format_duration(total_duration)},
        "success_rate": success_rate,
    }


def run_metadata() -> dict[str, str]:
    browser_config = config.get_browser_config()
    run_config = config.get_run_config()
    return {
        "test_environment": config.environment(),
        "browser": browser_config.browser,
        "headless": str(browser_config.headless).lower(),
        "base_url": run_config.base_url,
        "parallel": str(run_config.parallel),
        "platform": platform.system().lower(),
        "python_version": platform.python_version(),
        "report_generated": clock.now_utc().isoformat(),
    }


def verdict(summary: dict[str, Any]) -> str | None:
    scenarios = summary["scenarios"]
    total = scenarios["total"]
    failed = scenarios["failed"]
    if total == 0:
        return None
    if failed == 0:
        return "ALL TESTS PASSED!"
    if failed > total * 0.5:
        return "CRITICAL: More than 50% of tests failed!"
    return f"{failed} test(s) failed - review required"


def summary_lines(summary: dict[str, Any]) -> list[str]:
    scenarios = summary["scenarios"]
    steps = summary["steps"]
    lines = [
        "TEST EXECUTION SUMMARY",
        "======================",
        f"Features: {summary['features']['total']}",
        f"Scenarios: {scenarios['total']}",
        f"   Passed: {scenarios['passed']}",
        f"   Failed: {scenarios['failed']}",
        f"   Skipped: {scenarios['skipped']}",
        f"Steps: {steps['total']}",
        f"   Passed: {steps['passed']}",
        f"   Failed: {steps['failed']}",
        f"   Skipped: {steps['skipped']}",
        f"Duration: {summary['duration']['formatted']}",
    ]
    if scenarios["total"] > 0:
        lines.append(f"Success Rate: {summary['success_rate']}%")
    message = verdict(summary)
    if message:
        lines.append(message)
    return lines


def write_summary(summary: dict[str, Any], path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(jsonio.dumps(summary), encoding="utf-8")
    return path


def summarize_report(report_path: str | Path, summary_path: str | Path | None = None) -> dict[str, Any]:
    summary = calculate_summary(load_report(report_path))
    summary["metadata"] = run_metadata()
    validate_summary(summary)
    if summary_path is not None:
        write_summary(summary, summary_path)
    return summary
