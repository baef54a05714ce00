from __future__ import annotations

import importlib.metadata
import os
import sys
from dataclasses import asdict
from pathlib import Path

import typer

from insurebdd.core import (
    config as config_core,
    datagen,
    envelope,
    examples,
    factory,
    paths,
    reports,
)
from insurebdd.core.browser import browser_type_name
from insurebdd.core.jsonio import dumps
from insurebdd.core.process import ProcessFailedError, run_checked, run_streaming

VERSION = "0.1.0"
FEATURES_TEST_PATH = "tests/bdd"

app = typer.Typer(add_completion=False, help="insurebdd - BDD browser tests for insurance web apps")


def _emit(out: dict) -> None:
    typer.echo(dumps(out))
    if out.get("ok") is True:
        raise typer.Exit(code=0)
    raise typer.Exit(code=1)


def _trim(text: str, limit: int = 2000) -> str:
    return text if len(text) <= limit else text[:limit]


def _config_err(command: str, exc: ValueError) -> dict:
    return envelope.err(
        command=command,
        error_type="INVALID_CONFIG",
        message=str(exc),
        details={"path": str(config_core.config_path()), "environment": config_core.environment()},
    )


def features_test_path(start: Path | None = None) -> Path:
    """Find `tests/bdd` under the working directory or its nearest parent that has one."""
    here = (start or Path.cwd()).resolve()
    for candidate in (here, *here.parents):
        if (candidate / FEATURES_TEST_PATH).is_dir():
            return candidate / FEATURES_TEST_PATH
    return here / FEATURES_TEST_PATH


def marker_expression(tags: str) -> str:
    """Turn a cucumber tag expression (`@smoke and not @slow`) into a pytest -m expression."""
    return " ".join(tags.replace("@", "").split())


# ---- Sub-apps ----
config_app = typer.Typer(add_completion=False)
report_app = typer.Typer(add_completion=False)
data_app = typer.Typer(add_completion=False)
browsers_app = typer.Typer(add_completion=False)

app.add_typer(config_app, name="config")
app.add_typer(report_app, name="report")
app.add_typer(data_app, name="data")
app.add_typer(browsers_app, name="browsers")


# ---- Global commands ----
@app.command()
def version(json_output: bool = typer.Option(False, "--json", help="Output JSON envelope")):
    if json_output:
        _emit(envelope.ok(command="version", data={"version": VERSION}))
    typer.echo(f"insurebdd {VERSION}")


@app.command()
def doctor(json_output: bool = typer.Option(True, "--json")):
    checks: list[dict] = []

    for dist in ("playwright", "faker", "pytest-bdd"):
        try:
            checks.append({"name": f"package.{dist}", "ok": True, "details": {"version": importlib.metadata.version(dist)}})
        except importlib.metadata.PackageNotFoundError as exc:
            checks.append({"name": f"package.{dist}", "ok": False, "details": {"error": str(exc)}})

    config_details = {
        "path": str(config_core.config_path()),
        "exists": config_core.config_path().exists(),
        "environment": config_core.environment(),
    }
    try:
        config_core.validate_config()
    except ValueError as exc:
        config_details["error"] = str(exc)
        config_check = {"name": "config.valid", "ok": False, "details": config_details}
    else:
        config_check = {"name": "config.valid", "ok": True, "details": config_details}

    try:
        browser_name = config_core.get_browser_config().browser
    except ValueError:
        browser_name = config_core.get_env_var("BROWSER", "chromium")
    type_name = browser_type_name(browser_name)
    try:
        from playwright.sync_api import sync_playwright

        with sync_playwright() as pw:
            executable = getattr(pw, type_name).executable_path
        checks.append(
            {
                "name": f"browser.{type_name}",
                "ok": Path(executable).exists(),
                "details": {"path": executable},
            }
        )
    except Exception as exc:
        checks.append({"name": f"browser.{type_name}", "ok": False, "details": {"error": str(exc)}})

    checks.append(config_check)

    try:
        root = paths.reports_dir()
    except ValueError as exc:
        checks.append({"name": "reports.dirs", "ok": False, "details": {"error": str(exc)}})
    else:
        checks.append(
            {
                "name": "reports.dirs",
                "ok": all((root / sub).is_dir() for sub in paths.REPORT_SUBDIRS),
                "details": {"path": str(root), "exists": root.exists()},
            }
        )

    _emit(envelope.ok(command="doctor", data={"checks": checks}))


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(
    ctx: typer.Context,
    tags: str | None = typer.Option(None, "--tags", help="Tag expression, e.g. '@smoke and not @slow'"),
    browser: str | None = typer.Option(None, "--browser", help="chromium|firefox|webkit|chrome"),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window"),
):
    """Run the feature files through pytest-bdd; extra arguments go to pytest."""
    try:
        paths.ensure_report_dirs()
        report_path = paths.cucumber_json_path()
    except ValueError as exc:
        _emit(_config_err("run", exc))
    cmd = [
        sys.executable,
        "-m",
        "pytest",
        str(features_test_path()),
        "--cucumberjson",
        str(report_path),
    ]
    if tags:
        cmd += ["-m", marker_expression(tags)]
    cmd += list(ctx.args)

    env = dict(os.environ)
    env["INSUREBDD_BROWSER_TESTS"] = "1"
    if browser:
        env["BROWSER"] = browser
    if headed:
        env["HEADLESS"] = "false"
    raise typer.Exit(code=run_streaming(cmd, env=env))


# -------------- config --------------
@config_app.command("show")
def config_show(json_output: bool = typer.Option(True, "--json")):
    try:
        data = {
            "path": str(config_core.config_path()),
            "exists": config_core.config_path().exists(),
            "environment": config_core.environment(),
            "debug": config_core.is_debug_mode(),
            "ci": config_core.is_ci_mode(),
            "browser": asdict(config_core.get_browser_config()),
            "run": asdict(config_core.get_run_config()),
            "reports": asdict(config_core.get_report_config()),
        }
    except ValueError as exc:
        _emit(_config_err("config.show", exc))
    _emit(envelope.ok(command="config.show", data=data))


@config_app.command("validate")
def config_validate(json_output: bool = typer.Option(True, "--json")):
    # ConfigError and an unreadable config file are both ValueErrors
    try:
        config_core.validate_config()
        out = envelope.ok(command="config.validate", data={"valid": True})
    except ValueError as exc:
        out = _config_err("config.validate", exc)
    _emit(out)


# -------------- report --------------
@report_app.command("summary")
def report_summary(
    report: str | None = typer.Option(None, "--report", help="Cucumber JSON report path"),
    out_path: str | None = typer.Option(None, "--out", help="Where to write test-summary.json"),
    json_output: bool = typer.Option(True, "--json"),
):
    try:
        report_path = Path(report) if report else paths.cucumber_json_path()
        summary_path = Path(out_path) if out_path else paths.summary_json_path()
    except ValueError as exc:
        _emit(_config_err("report.summary", exc))
    try:
        summary = reports.summarize_report(report_path, summary_path)
        out = envelope.ok(
            command="report.summary",
            data={
                "summary": summary,
                "verdict": reports.verdict(summary),
                "lines": reports.summary_lines(summary),
            },
            artifacts=[
                envelope.Artifact(
                    path=str(summary_path),
                    mime="application/json",
                    purpose="test_summary",
                    bytes=summary_path.stat().st_size,
                )
            ],
        )
    except FileNotFoundError as exc:
        out = envelope.err(
            command="report.summary",
            error_type="NOT_FOUND",
            message=f"Report file not found: {report_path}",
            details={"path": str(report_path), "error": str(exc)},
        )
    except reports.ReportError as exc:
        out = envelope.err(
            command="report.summary",
            error_type="INVALID_REPORT",
            message=str(exc),
            details={"path": str(report_path)},
        )
    except ValueError as exc:
        # summary metadata reads the config file
        out = _config_err("report.summary", exc)
    _emit(out)


# -------------- data --------------
def _record_builders(manager: datagen.TestDataManager) -> dict:
    return {
        "customer": manager.generate_insurance_customer,
        "vehicle": manager.generate_vehicle,
        "property": manager.generate_property,
        "health": manager.generate_health_info,
        "policy": manager.generate_policy,
        "user": lambda: factory.generate_user(manager.fake),
        "product": lambda: factory.generate_product(manager.fake),
        "company": lambda: factory.generate_company(manager.fake),
        "credit-card": lambda: factory.generate_credit_card(manager.fake),
        "content": lambda: factory.generate_content(manager.fake),
    }


DATA_KINDS = ("customer", "vehicle", "property", "health", "policy", "user", "product", "company", "credit-card", "content")


@data_app.command("generate")
def data_generate(
    kind: str = typer.Option(..., "--kind", help="|".join(DATA_KINDS)),
    count: int = typer.Option(1, "--count"),
    seed: int | None = typer.Option(None, "--seed"),
    json_output: bool = typer.Option(True, "--json"),
):
    manager = datagen.TestDataManager(seed=seed)
    builder = _record_builders(manager).get(kind)
    if builder is None:
        _emit(
            envelope.err(
                command="data.generate",
                error_type="INVALID_ARGUMENT",
                message=f"Unknown record kind: {kind}",
                details={"kind": kind, "known": list(DATA_KINDS)},
            )
        )
    if count < 1:
        _emit(
            envelope.err(
                command="data.generate",
                error_type="INVALID_ARGUMENT",
                message="--count must be at least 1",
                details={"count": count},
            )
        )
    records = [builder() for _ in range(count)]
    _emit(envelope.ok(command="data.generate", data={"kind": kind, "seed": seed, "records": records}))


@data_app.command("example")
def data_example(
    name: str = typer.Argument(..., help="auto|home|life|high-risk|senior|business|multiple-quotes|claim|invalid|renewal"),
    seed: int | None = typer.Option(None, "--seed"),
    json_output: bool = typer.Option(True, "--json"),
):
    builder = examples.EXAMPLES.get(name)
    if builder is None:
        out = envelope.err(
            command="data.example",
            error_type="INVALID_ARGUMENT",
            message=f"Unknown insurance example: {name}",
            details={"name": name, "known": sorted(examples.EXAMPLES)},
        )
    else:
        out = envelope.ok(
            command="data.example",
            data={"name": name, "seed": seed, "example": builder(datagen.TestDataManager(seed=seed))},
        )
    _emit(out)


# -------------- browsers --------------
@browsers_app.command("install")
def browsers_install(
    name: str | None = typer.Argument(None, help="Browser to install; all when omitted"),
    json_output: bool = typer.Option(True, "--json"),
):
    cmd = [sys.executable, "-m", "playwright", "install"] + ([name] if name else [])
    try:
        importlib.metadata.version("playwright")
    except importlib.metadata.PackageNotFoundError:
        _emit(
            envelope.err(
                command="browsers.install",
                error_type="TOOL_MISSING",
                message="playwright is not installed in this environment",
                details={"python": sys.executable},
            )
        )
    try:
        result = run_checked(cmd)
        out = envelope.ok(
            command="browsers.install",
            data={"browser": name, "cmd": cmd, "stdout": _trim(result.stdout)},
        )
    except ProcessFailedError as exc:
        out = envelope.err(
            command="browsers.install",
            error_type="BACKEND_FAILED",
            message="playwright install failed",
            details={"cmd": exc.cmd, "returncode": exc.returncode, "stderr": _trim(exc.stderr)},
        )
    _emit(out)


if __name__ == "__main__":
    app()
