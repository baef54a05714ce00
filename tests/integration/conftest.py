from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture()
def cli_env(tmp_path: Path) -> Dict[str, str]:
    env = dict(os.environ)
    for key in ("BROWSER", "BASE_URL", "TIMEOUT", "VIEWPORT_WIDTH", "VIEWPORT_HEIGHT", "TEST_ENV"):
        env.pop(key, None)
    env["INSUREBDD_CONFIG_PATH"] = str(tmp_path / "insurebdd.toml")
    env["REPORTS_DIR"] = str(tmp_path / "reports")
    env["INSUREBDD_TEST_NOW_ISO"] = "2025-06-01T09:00:00+00:00"
    return env


@pytest.fixture()
def run_cli(cli_env: Dict[str, str]) -> Callable[..., Dict[str, Any]]:
    def _run(*args: str, env: Dict[str, str] | None = None) -> Dict[str, Any]:
        p = subprocess.run(
            [sys.executable, "-m", "insurebdd.cli", *args],
            capture_output=True,
            text=True,
            env=env or cli_env,
            cwd=REPO_ROOT,
        )
        try:
            out = json.loads(p.stdout)
        except json.JSONDecodeError as e:  # pragma: no cover
            raise AssertionError(f"CLI did not return JSON. Output:\n{p.stdout}\nSTDERR:\n{p.stderr}") from e
        if out.get("ok") is True:
            assert p.returncode == 0, p.stderr
        else:
            assert p.returncode != 0, p.stderr
        return out

    return _run
