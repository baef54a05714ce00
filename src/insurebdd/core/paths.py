from __future__ import annotations

from pathlib import Path
from datetime import datetime

from insurebdd.core import clock, config

REPORT_SUBDIRS = ("cucumber", "screenshots", "videos", "traces")
CUCUMBER_JSON = "cucumber-report.json"
SUMMARY_JSON = "test-summary.json"


def reports_dir() -> Path:
    return Path(config.get_report_config().output_dir).expanduser()


def ensure_report_dirs() -> Path:
    root = reports_dir()
    root.mkdir(parents=True, exist_ok=True)
    for subdir in REPORT_SUBDIRS:
        (root / subdir).mkdir(parents=True, exist_ok=True)
    return root


def cucumber_json_path() -> Path:
    return reports_dir() / "cucumber" / CUCUMBER_JSON


def summary_json_path() -> Path:
    return reports_dir() / "cucumber" / SUMMARY_JSON


def videos_dir() -> Path:
    return reports_dir() / "videos"


def screenshot_path(name: str, now: datetime | None = None) -> Path:
    return reports_dir() / "screenshots" / f"{name}-{clock.file_timestamp(now)}.png"


def trace_path(now: datetime | None = None) -> Path:
    now = now or clock.now_utc()
    return reports_dir() / "traces" / f"trace-{int(now.timestamp() * 1000)}.zip"
