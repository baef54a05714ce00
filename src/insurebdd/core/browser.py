from __future__ import annotations

import logging
from typing import Any, Callable

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from insurebdd.core import config, paths
from insurebdd.core.config import BrowserConfig

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
]

_BROWSER_TYPES = {
    "firefox": "firefox",
    "webkit": "webkit",
    "safari": "webkit",
    "chrome": "chromium",
    "chromium": "chromium",
}


class BrowserError(RuntimeError):
    pass


class BrowserNotInitializedError(BrowserError):
    def __init__(self, message: str = "Page not initialized. Call initialize_browser() first.") -> None:
        super().__init__(message)


def browser_type_name(browser: str) -> str:
    """Map a configured browser name onto a Playwright browser type (chromium by default)."""
    return _BROWSER_TYPES.get(browser.lower(), "chromium")


class BrowserManager:
    """Owns the single browser/context/page triple shared by sequential steps."""

    def __init__(
        self,
        browser_config: BrowserConfig | None = None,
        *,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ) -> None:
        self.config = browser_config or config.get_browser_config()
        self._playwright_factory = playwright_factory
        self._playwright: Playwright | None = None
        self.browser: Browser | None = None
        self.context: BrowserContext | None = None
        self.page: Page | None = None
        self._initialized = False

    def initialize_browser(self) -> None:
        if self._initialized:
            return

        logger.info("Launching %s browser", self.config.browser)
        try:
            self._playwright = self._playwright_factory().start()
            type_name = browser_type_name(self.config.browser)
            browser_type = getattr(self._playwright, type_name)
            self.browser = browser_type.launch(
                headless=self.config.headless,
                args=CHROMIUM_ARGS if type_name == "chromium" else [],
                slow_mo=self.config.slow_mo,
            )
            self._create_context()
            self._create_page()
        except Exception:
            logger.exception("Failed to initialize browser")
            self.cleanup()
            raise

        self._initialized = True
        logger.info("Browser initialized")

    def _create_context(self) -> None:
        if self.browser is None:
            raise BrowserError("Browser not initialized")

        options: dict[str, Any] = {
            "viewport": self.config.viewport.as_dict(),
            "ignore_https_errors": True,
            "accept_downloads": True,
            "locale": self.config.locale,
        }
        if self.config.record_video:
            options["record_video_dir"] = str(paths.videos_dir())
            options["record_video_size"] = self.config.viewport.as_dict()

        self.context = self.browser.new_context(**options)

        if self.config.record_trace:
            self.context.tracing.start(screenshots=True, snapshots=True, sources=True)

    def _create_page(self) -> None:
        if self.context is None:
            raise BrowserError("Browser context not initialized")

        page = self.context.new_page()
        page.set_default_timeout(self.config.timeout)
        page.set_default_navigation_timeout(self.config.timeout)
        page.on("console", self._on_console)
        page.on("pageerror", self._on_page_error)
        page.on("requestfailed", self._on_request_failed)
        self.page = page

    @staticmethod
    def _on_console(msg: Any) -> None:
        if config.get_env_bool("DEBUG_CONSOLE"):
            logger.info("Browser console [%s]: %s", msg.type, msg.text)

    @staticmethod
    def _on_page_error(error: Any) -> None:
        logger.error("Page error: %s", getattr(error, "message", error))

    @staticmethod
    def _on_request_failed(request: Any) -> None:
        if config.is_debug_mode():
            logger.warning("Request failed: %s - %s", request.url, request.failure)

    def _require_page(self) -> Page:
        if self.page is None:
            raise BrowserNotInitializedError()
        return self.page

    def navigate_to_page(self, url: str) -> None:
        page = self._require_page()
        full_url = url if url.startswith("http") else f"{config.get_run_config().base_url}{url}"
        try:
            page.goto(full_url, wait_until="networkidle", timeout=self.config.timeout)
        except PlaywrightError as exc:
            logger.error("Navigation failed to %s: %s", full_url, exc)
            raise BrowserError(f"Navigation failed to {full_url}: {exc}") from exc
        logger.debug("Navigated to: %s", full_url)

    def take_screenshot(self, name: str, full_page: bool = True) -> str | None:
        if self.page is None:
            logger.warning("Cannot take screenshot: page not initialized")
            return None

        path = paths.screenshot_path(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.page.screenshot(path=str(path), full_page=full_page, type="png")
        except (PlaywrightError, OSError) as exc:
            logger.error("Failed to take screenshot: %s", exc)
            return None

        logger.debug("Screenshot saved: %s", path)
        return str(path)

    def reload_page(self) -> None:
        self._require_page().reload()

    def go_back(self) -> None:
        self._require_page().go_back()

    def go_forward(self) -> None:
        self._require_page().go_forward()

    def _stop_trace(self) -> None:
        trace = paths.trace_path()
        trace.parent.mkdir(parents=True, exist_ok=True)
        self.context.tracing.stop(path=str(trace))

    def cleanup(self) -> None:
        actions: list[tuple[str, Callable[[], Any]]] = []
        if self.config.record_trace and self.context is not None:
            actions.append(("trace", self._stop_trace))
        if self.page is not None:
            actions.append(("page", self.page.close))
        if self.context is not None:
            actions.append(("context", self.context.close))
        if self.browser is not None:
            actions.append(("browser", self.browser.close))
        if self._playwright is not None:
            actions.append(("playwright", self._playwright.stop))

        failed = 0
        try:
            for what, action in actions:
                try:
                    action()
                except Exception as exc:
                    # one failed close must not keep the rest open
                    failed += 1
                    logger.error("Error during browser cleanup (%s): %s", what, exc)
        finally:
            self.page = None
            self.context = None
            self.browser = None
            self._playwright = None
            self._initialized = False
        if not failed:
            logger.info("Browser cleanup completed")

    def is_ready(self) -> bool:
        return self._initialized and self.page is not None

    def browser_info(self) -> str:
        if self.browser is None:
            return "Not initialized"
        return f"{self.config.browser} (headless: {str(self.config.headless).lower()})"


_MANAGER: BrowserManager | None = None


def get_browser_manager() -> BrowserManager:
    global _MANAGER
    if _MANAGER is None:
        _MANAGER = BrowserManager()
    return _MANAGER


def reset_browser_manager() -> None:
    global _MANAGER
    _MANAGER = None
