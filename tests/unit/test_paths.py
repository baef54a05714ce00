from datetime import datetime, timezone

from insurebdd.core import paths


def test_ensure_report_dirs_creates_subdirs(tmp_path, monkeypatch):
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path / "out"))
    root = paths.ensure_report_dirs()
    assert root == tmp_path / "out"
    for subdir in paths.REPORT_SUBDIRS:
        assert (root / subdir).is_dir()


def test_report_file_locations(tmp_path, monkeypatch):
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path))
    assert paths.cucumber_json_path() == tmp_path / "cucumber" / "cucumber-report.json"
    assert paths.summary_json_path() == tmp_path / "cucumber" / "test-summary.json"
    assert paths.videos_dir() == tmp_path / "videos"


def test_screenshot_and_trace_names(tmp_path, monkeypatch):
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path))
    now = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert paths.screenshot_path("home", now) == tmp_path / "screenshots" / "home-2025-01-02T03-04-05+00-00.png"
    assert paths.trace_path(now) == tmp_path / "traces" / "trace-1735787045000.zip"
