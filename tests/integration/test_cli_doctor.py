def test_doctor_reports_packages_config_and_dirs(run_cli):
    out = run_cli("doctor", "--json")
    checks = {check["name"]: check for check in out["data"]["checks"]}
    assert checks["package.playwright"]["ok"] is True
    assert checks["package.faker"]["ok"] is True
    assert checks["config.valid"]["ok"] is True
    assert checks["reports.dirs"]["ok"] is False
    assert "browser.chromium" in checks


def test_doctor_flags_malformed_config_file(run_cli, tmp_path):
    (tmp_path / "insurebdd.toml").write_text('[browser\nname = "', encoding="utf-8")
    out = run_cli("doctor", "--json")
    checks = {check["name"]: check for check in out["data"]["checks"]}
    assert checks["config.valid"]["ok"] is False
    assert "Invalid config file" in checks["config.valid"]["details"]["error"]
    assert checks["reports.dirs"]["ok"] is False
    assert "browser.chromium" in checks
