"""
Base Page Object

Shared helpers every page object builds on.
"""
from __future__ import annotations

from playwright.sync_api import Locator, Page

from insurebdd.core import paths

DEFAULT_WAIT_MS = 30000


class BasePage:
    """Base class for all page objects."""

    def __init__(self, page: Page):
        self.page = page

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str) -> None:
        """Go to an absolute URL."""
        self.page.goto(url)

    def title(self) -> str:
        return self.page.title()

    def current_url(self) -> str:
        return self.page.url

    def wait_for_page_load(self) -> None:
        """Wait until the network has been idle."""
        self.page.wait_for_load_state("networkidle")

    # =========================================================================
    # Elements
    # =========================================================================

    def locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    def wait_for_element(self, selector: str, state: str = "visible", timeout: int = DEFAULT_WAIT_MS) -> None:
        self.page.wait_for_selector(selector, state=state, timeout=timeout)

    def click_element(self, selector: str) -> None:
        self.page.locator(selector).click()

    def fill_input(self, selector: str, text: str) -> None:
        self.page.locator(selector).fill(text)

    def scroll_to_element(self, selector: str) -> None:
        self.page.locator(selector).scroll_into_view_if_needed()

    def is_element_visible(self, selector: str) -> bool:
        return self.page.locator(selector).is_visible()

    def element_text(self, selector: str) -> str | None:
        return self.page.locator(selector).text_content()

    # =========================================================================
    # Screenshots
    # =========================================================================

    def take_screenshot(self, name: str) -> str:
        """Full-page screenshot into the report screenshots directory."""
        path = paths.screenshot_path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.page.screenshot(path=str(path), full_page=True)
        return str(path)
