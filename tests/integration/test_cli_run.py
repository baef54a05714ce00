import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_run_offline_data_features_writes_cucumber_report(cli_env, tmp_path):
    p = subprocess.run(
        [sys.executable, "-m", "insurebdd.cli", "run", "--tags", "@data", "-q", "-p", "no:cacheprovider"],
        capture_output=True,
        text=True,
        env=cli_env,
        cwd=REPO_ROOT,
    )
    assert p.returncode == 0, p.stdout + p.stderr

    report = json.loads((tmp_path / "reports" / "cucumber" / "cucumber-report.json").read_text(encoding="utf-8"))
    names = {feature["name"] for feature in report}
    assert names == {"Insurance test data"}


def test_run_from_a_subdirectory_finds_the_feature_tests(cli_env, tmp_path):
    p = subprocess.run(
        [sys.executable, "-m", "insurebdd.cli", "run", "--tags", "@data", "-q", "-p", "no:cacheprovider"],
        capture_output=True,
        text=True,
        env=cli_env,
        cwd=REPO_ROOT / "features",
    )
    assert p.returncode == 0, p.stdout + p.stderr
    assert (tmp_path / "reports" / "cucumber" / "cucumber-report.json").exists()
