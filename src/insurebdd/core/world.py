"""Per-scenario world object handed to step definitions."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from playwright.sync_api import Page

from insurebdd.core import clock, config, waits
from insurebdd.core.browser import BrowserManager, BrowserNotInitializedError, get_browser_manager
from insurebdd.core.config import UserCredentials
from insurebdd.core.datagen import TestDataManager, get_data_manager

logger = logging.getLogger("insurebdd.world")

PAGE_PATHS: dict[str, str] = {
    "home": "/",
    "login": "/login",
    "dashboard": "/dashboard",
    "profile": "/profile",
    "settings": "/settings",
    "quote": "/quote",
    "policy": "/policy",
    "claims": "/claims",
    "about": "/about",
    "contact": "/contact",
}

_EMAIL_RE = re.compile(r"^(?!.*\.\.)[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\d{3}-?\d{3}-?\d{4}$")
_SSN_RE = re.compile(r"^(?!000)\d{3}-?(?!00)\d{2}-?(?!0000)\d{4}$")
_ZIP_RE = re.compile(r"^(?!00000)\d{5}(-\d{4})?$")

_LOG_LEVELS = {
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "debug": logging.DEBUG,
}


@dataclass
class Attachment:
    data: bytes | str
    media_type: str
    file_name: str
    timestamp: str


def validate_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    return bool(_PHONE_RE.match(phone))


def validate_ssn(ssn: str) -> bool:
    return bool(_SSN_RE.match(ssn))


def validate_zip_code(zip_code: str) -> bool:
    return bool(_ZIP_RE.match(zip_code))


def page_url(page_name: str) -> str:
    if page_name.startswith(("http://", "https://")):
        return page_name
    key = page_name.lower()
    return PAGE_PATHS.get(key, f"/{key}")


class World:
    def __init__(
        self,
        browser: BrowserManager | None = None,
        data: TestDataManager | None = None,
        *,
        on_attach: Callable[[Attachment], None] | None = None,
    ) -> None:
        self.browser = browser or get_browser_manager()
        self.data = data or get_data_manager()
        self.page: Page | None = None
        self.scenario_data: dict[str, Any] = {}
        self.attachments: list[Attachment] = []
        self.failure: BaseException | None = None
        self._on_attach = on_attach

    # ---- browser ----
    def initialize_page(self) -> Page:
        if not self.browser.is_ready():
            self.browser.initialize_browser()
        page = self.browser.page
        if page is None:
            raise BrowserNotInitializedError()
        self.page = page
        return page

    def require_page(self) -> Page:
        if self.page is None:
            raise BrowserNotInitializedError()
        return self.page

    def navigate_to_page(self, url: str) -> None:
        self.browser.navigate_to_page(url)

    def current_url(self) -> str:
        return self.page.url if self.page is not None else ""

    def reload_page(self) -> None:
        self.browser.reload_page()

    def go_back(self) -> None:
        self.browser.go_back()

    def go_forward(self) -> None:
        self.browser.go_forward()

    def wait_for_element(self, selector: str, timeout: int | None = None) -> None:
        page = self.require_page()
        page.wait_for_selector(selector, timeout=timeout or config.get_run_config().timeout)

    def click_element(self, selector: str) -> None:
        self.require_page().locator(selector).click()

    def fill_input(self, selector: str, text: str) -> None:
        self.require_page().locator(selector).fill(text)

    def element_text(self, selector: str) -> str | None:
        return self.require_page().locator(selector).text_content()

    def is_element_visible(self, selector: str) -> bool:
        return self.require_page().locator(selector).is_visible()

    def is_element_enabled(self, selector: str) -> bool:
        return self.require_page().locator(selector).is_enabled()

    def select_option(self, selector: str, option: str) -> None:
        self.require_page().locator(selector).select_option(option)

    def check_checkbox(self, selector: str) -> None:
        self.require_page().locator(selector).check()

    def uncheck_checkbox(self, selector: str) -> None:
        self.require_page().locator(selector).uncheck()

    def take_screenshot(self, name: str, full_page: bool = True) -> str | None:
        return self.browser.take_screenshot(name, full_page)

    def wait_for_timeout(self, ms: int) -> None:
        if self.page is not None:
            self.page.wait_for_timeout(ms)
        else:
            waits.sleep(ms)

    def wait_until(self, condition: Callable[[], bool], timeout: int | None = None) -> bool:
        return waits.wait_for_condition(condition, timeout=timeout or config.get_run_config().timeout)

    # ---- attachments ----
    def add_attachment(self, data: bytes | str, media_type: str, file_name: str) -> Attachment:
        attachment = Attachment(
            data=data,
            media_type=media_type,
            file_name=file_name,
            timestamp=clock.now_utc().isoformat(),
        )
        self.attachments.append(attachment)
        if self._on_attach is not None:
            self._on_attach(attachment)
        return attachment

    def attach_screenshot(self, name: str = "screenshot") -> Attachment | None:
        path = self.take_screenshot(name)
        if not path or self.page is None:
            return None
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            self.log_message(f"Failed to attach screenshot: {exc}", "warn")
            return None
        return self.add_attachment(data, "image/png", f"{name}.png")

    # ---- test data ----
    def user_data(self, role: str = "default") -> UserCredentials:
        return config.get_user_credentials(role)

    def generate_insurance_customer(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.data.generate_insurance_customer(overrides)

    def generate_vehicle(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.data.generate_vehicle(overrides)

    def generate_property(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.data.generate_property(overrides)

    def generate_health_info(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.data.generate_health_info(overrides)

    def generate_policy(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.data.generate_policy(overrides)

    def invalid_email(self) -> str:
        return self.data.generate_invalid_email()

    def invalid_phone(self) -> str:
        return self.data.generate_invalid_phone()

    def invalid_ssn(self) -> str:
        return self.data.generate_invalid_ssn()

    def invalid_zip_code(self) -> str:
        return self.data.generate_invalid_zip_code()

    def set_scenario_data(self, key: str, value: Any) -> None:
        self.scenario_data[key] = value

    def get_scenario_data(self, key: str) -> Any:
        return self.scenario_data.get(key)

    def clear_scenario_data(self) -> None:
        self.scenario_data.clear()

    def store_data(self, key: str, data: Any) -> None:
        self.data.store_data(key, data)

    def retrieve_data(self, key: str) -> Any:
        return self.data.retrieve_data(key)

    # ---- config ----
    def base_url(self) -> str:
        return config.get_run_config().base_url

    def timeout(self) -> int:
        return config.get_run_config().timeout

    def is_debug_mode(self) -> bool:
        return config.is_debug_mode()

    def is_ci_mode(self) -> bool:
        return config.is_ci_mode()

    def browser_info(self) -> str:
        return self.browser.browser_info()

    def log_message(self, message: str, level: str = "info") -> None:
        logger.log(_LOG_LEVELS.get(level, logging.INFO), message)
