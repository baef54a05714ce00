"""Failing scenarios go through the real pytest-bdd hooks into the failure log."""

import pytest

FEATURE = """\
@offline @smoke
Feature: Premium quotes

  Scenario: Customer data
    When I generate a random customer
    Then the generated customer should have a valid email

  Scenario: Premium engine outage
    When I generate a random customer
    Then the premium engine should answer

  Scenario: Undefined quote step
    Given a quote step nobody wrote
"""

CONFTEST = """\
from pytest_bdd import then

pytest_plugins = ["insurebdd.hooks", "insurebdd.steps.insurance"]


@then("the premium engine should answer")
def then_premium_engine_answers():
    raise AssertionError("premium engine down")
"""


@pytest.fixture()
def feature_project(pytester, monkeypatch, tmp_path):
    monkeypatch.setenv("INSUREBDD_CONFIG_PATH", str(tmp_path / "insurebdd.toml"))
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path / "reports"))
    for key in ("BROWSER", "BASE_URL", "DEBUG", "FAKER_SEED"):
        monkeypatch.delenv(key, raising=False)
    pytester.makeconftest(CONFTEST)
    pytester.mkdir("features")
    (pytester.path / "features" / "quotes.feature").write_text(FEATURE, encoding="utf-8")
    pytester.makepyfile(test_quotes='from pytest_bdd import scenarios\n\nscenarios("features")\n')
    return pytester


def test_step_errors_are_logged_as_failed_scenarios(feature_project):
    result = feature_project.runpytest_subprocess("-p", "no:cacheprovider", "--log-cli-level=INFO")

    result.assert_outcomes(passed=1, failed=2)
    result.stdout.fnmatch_lines(["*Scenario PASSED: Customer data*"])
    result.stdout.fnmatch_lines(
        [
            "*Scenario FAILED: Premium engine outage*",
            "*Could not capture failure screenshot*",
            "*Failure reason: premium engine down*",
            "*CRITICAL: Smoke test failed - basic functionality is broken!*",
        ]
    )


def test_missing_step_definitions_are_logged_as_failed_scenarios(feature_project):
    result = feature_project.runpytest_subprocess(
        "-p", "no:cacheprovider", "--log-cli-level=INFO", "-k", "undefined_quote_step"
    )

    result.assert_outcomes(failed=1)
    result.stdout.fnmatch_lines(
        [
            "*Scenario FAILED: Undefined quote step*",
            "*Failure reason:*a quote step nobody wrote*",
            "*CRITICAL: Smoke test failed*",
        ]
    )
