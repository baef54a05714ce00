from __future__ import annotations

import logging

import pytest

from insurebdd.core.browser import BrowserNotInitializedError
from insurebdd.core.datagen import TestDataManager
from insurebdd.core.world import (
    World,
    page_url,
    validate_email,
    validate_phone,
    validate_ssn,
    validate_zip_code,
)


class FakeBrowser:
    def __init__(self, page=None, screenshot_path=None):
        self.page = page
        self.ready = page is not None
        self.initialized = 0
        self.screenshot_path = screenshot_path
        self.navigated: list[str] = []

    def is_ready(self):
        return self.ready

    def initialize_browser(self):
        self.initialized += 1
        self.ready = True

    def navigate_to_page(self, url):
        self.navigated.append(url)

    def take_screenshot(self, name, full_page=True):
        return self.screenshot_path

    def browser_info(self):
        return "chromium (headless: true)"


class FakePage:
    url = "http://localhost:3000/quote"

    def __init__(self):
        self.waited: list[int] = []

    def wait_for_timeout(self, ms):
        self.waited.append(ms)


@pytest.mark.parametrize(
    ("email", "valid"),
    [
        ("jane.doe@example.com", True),
        ("jane@sub.example.co", True),
        ("jane..doe@example.com", False),
        ("jane@example", False),
        ("@example.com", False),
        ("", False),
    ],
)
def test_validate_email(email, valid) -> None:
    assert validate_email(email) is valid


def test_validate_phone_ssn_zip() -> None:
    assert validate_phone("555-123-4567")
    assert validate_phone("5551234567")
    assert not validate_phone("555-1234")
    assert validate_ssn("123-45-6789")
    assert validate_ssn("123456789")
    assert not validate_ssn("000-12-3456")
    assert validate_zip_code("90210")
    assert validate_zip_code("90210-1234")
    assert not validate_zip_code("9021")


def test_page_url_mapping() -> None:
    assert page_url("Login") == "/login"
    assert page_url("home") == "/"
    assert page_url("Billing") == "/billing"
    assert page_url("https://example.com/x") == "https://example.com/x"


def test_initialize_page_starts_browser_once() -> None:
    page = FakePage()
    browser = FakeBrowser()
    browser.page = page
    world = World(browser=browser, data=TestDataManager(seed=1))
    assert world.initialize_page() is page
    assert browser.initialized == 1
    world.initialize_page()
    assert browser.initialized == 1
    assert world.current_url() == "http://localhost:3000/quote"


def test_initialize_page_without_page_raises() -> None:
    world = World(browser=FakeBrowser(), data=TestDataManager(seed=1))
    with pytest.raises(BrowserNotInitializedError):
        world.initialize_page()


def test_element_helpers_need_a_page() -> None:
    world = World(browser=FakeBrowser(), data=TestDataManager(seed=1))
    with pytest.raises(BrowserNotInitializedError):
        world.click_element("#go")
    assert world.current_url() == ""


def test_wait_for_timeout_uses_page_when_bound() -> None:
    page = FakePage()
    world = World(browser=FakeBrowser(page=page), data=TestDataManager(seed=1))
    world.initialize_page()
    world.wait_for_timeout(250)
    assert page.waited == [250]


def test_scenario_data_and_run_store() -> None:
    world = World(browser=FakeBrowser(), data=TestDataManager(seed=1))
    world.set_scenario_data("quote_id", "Q-1")
    assert world.get_scenario_data("quote_id") == "Q-1"
    world.clear_scenario_data()
    assert world.get_scenario_data("quote_id") is None

    world.store_data("shared", {"id": 3})
    other = World(browser=FakeBrowser(), data=world.data)
    assert other.retrieve_data("shared") == {"id": 3}


def test_generators_and_invalid_pickers_delegate() -> None:
    world = World(browser=FakeBrowser(), data=TestDataManager(seed=1))
    vehicle = world.generate_vehicle({"make": "Toyota", "model": "Camry"})
    assert (vehicle["make"], vehicle["model"]) == ("Toyota", "Camry")
    assert not validate_email(world.invalid_email())
    assert world.user_data("agent").role == "agent"


def test_attach_screenshot_records_attachment(tmp_path) -> None:
    shot = tmp_path / "failed.png"
    shot.write_bytes(b"\x89PNG")
    seen = []
    world = World(
        browser=FakeBrowser(page=FakePage(), screenshot_path=str(shot)),
        data=TestDataManager(seed=1),
        on_attach=seen.append,
    )
    world.initialize_page()
    attachment = world.attach_screenshot("failed")
    assert attachment is not None
    assert attachment.data == b"\x89PNG"
    assert attachment.media_type == "image/png"
    assert attachment.file_name == "failed.png"
    assert seen == [attachment]
    assert world.attachments == [attachment]


def test_attach_screenshot_without_capture_returns_none() -> None:
    world = World(browser=FakeBrowser(page=FakePage(), screenshot_path=None), data=TestDataManager(seed=1))
    world.initialize_page()
    assert world.attach_screenshot() is None
    assert world.attachments == []


def test_log_message_levels(caplog) -> None:
    world = World(browser=FakeBrowser(), data=TestDataManager(seed=1))
    with caplog.at_level(logging.DEBUG, logger="insurebdd.world"):
        world.log_message("careful", "warn")
        world.log_message("details", "debug")
    levels = {r.getMessage(): r.levelno for r in caplog.records}
    assert levels["careful"] == logging.WARNING
    assert levels["details"] == logging.DEBUG
    assert world.browser_info() == "chromium (headless: true)"
