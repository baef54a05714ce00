"""Page object for the playwright.dev landing page."""
from __future__ import annotations

import re

from playwright.sync_api import Page

from insurebdd.core.browser import BrowserNotInitializedError, get_browser_manager
from insurebdd.pages.base import BasePage

HOME_URL = "https://playwright.dev"


class PlaywrightHomePage(BasePage):
    DOCS_LINK = 'a:has-text("Docs")'
    MAIN_HEADING = "h1"

    def __init__(self, page: Page | None = None):
        page = page or get_browser_manager().page
        if page is None:
            raise BrowserNotInitializedError()
        super().__init__(page)
        self.docs_link = self.page.locator(self.DOCS_LINK).first
        self.main_heading = self.page.locator(self.MAIN_HEADING).first
        self.hero_text = self.page.get_by_text(re.compile("playwright", re.IGNORECASE)).first

    def navigate_to_home_page(self) -> None:
        self.navigate(HOME_URL)

    def click_docs_link(self) -> None:
        self.docs_link.click()

    def is_hero_text_visible(self) -> bool:
        return self.hero_text.is_visible()
