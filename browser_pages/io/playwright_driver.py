"""
Playwright-based BrowserDriver implementation (sync API).

Conforms to io/driver.py's BrowserDriver Protocol:
- goto(url) / current_url() / title()
- find_elements(selector, scope?) -> list[ElementHandle]
- wait_for(selector, timeout_ms?)
- click(element) / text_content(element) / get_attribute(element, name)
- execute_script(script, *args)
- quit()

One driver owns one browser, one incognito context and one page. Drivers on
the same thread share that thread's Playwright connection (the sync API allows
only one per thread); it is stopped when the last of them quits.
"""

from __future__ import annotations

import logging
import threading
from textwrap import dedent
from typing import Any, Optional

from playwright.sync_api import (
    Browser,
    BrowserContext,
    ElementHandle,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from ..core.settings import Settings

logger = logging.getLogger(__name__)

_local = threading.local()


def _acquire_playwright() -> Playwright:
    """This thread's Playwright instance, started on first use."""
    if getattr(_local, "users", 0) == 0:
        _local.playwright = sync_playwright().start()
        _local.users = 0
        logger.debug("started playwright on %s", threading.current_thread().name)
    _local.users += 1
    return _local.playwright


def _release_playwright() -> None:
    _local.users -= 1
    if _local.users > 0:
        return
    pw, _local.playwright = _local.playwright, None
    pw.stop()
    logger.debug("stopped playwright on %s", threading.current_thread().name)


class PlaywrightDriver:
    """
    A concrete BrowserDriver based on Playwright.
    - Element handles are Playwright `ElementHandle`s from `query_selector_all()`.
    - `start()` must be called before any other primitive; it returns self.
    """

    def __init__(
        self,
        *,
        browser_name: str = "chromium",
        headless: bool = True,
        slow_mo_ms: int = 0,
        default_timeout_ms: int = 30_000,
    ) -> None:
        self.browser_name = browser_name
        self.headless = headless
        self.slow_mo_ms = slow_mo_ms
        self.default_timeout_ms = default_timeout_ms

        self._pw: Optional[Playwright] = None  # playwright instance
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PlaywrightDriver":
        return cls(
            browser_name=settings.browser_name,
            headless=settings.headless,
            slow_mo_ms=settings.slow_mo_ms,
            default_timeout_ms=settings.default_timeout_ms,
        )

    # ---------------- lifecycle ----------------

    def start(self) -> "PlaywrightDriver":
        """Launch a browser, a fresh context and its page once."""
        if self._page is not None:
            return self
        self._pw = _acquire_playwright()
        try:
            launcher = getattr(self._pw, self.browser_name)
            self._browser = launcher.launch(headless=self.headless, slow_mo=self.slow_mo_ms)
            self._context = self._browser.new_context()
            # set a sensible default operation timeout on the context
            self._context.set_default_timeout(self.default_timeout_ms)
            self._page = self._context.new_page()
        except BaseException:
            self.quit()
            raise
        logger.debug("launched %s (headless=%s)", self.browser_name, self.headless)
        return self

    def quit(self) -> None:
        """Close page, context and browser, then release Playwright."""
        try:
            for closable in (self._page, self._context, self._browser):
                if closable is None:
                    continue
                try:
                    closable.close()
                except PlaywrightError as e:
                    logger.debug("ignoring error while closing %r: %s", closable, e)
        finally:
            if self._pw is not None:
                _release_playwright()
            self._pw = None
            self._browser = None
            self._context = None
            self._page = None
            logger.debug("stopped %s", self.browser_name)

    # ---------------- navigation ----------------

    def goto(self, url: str, *, timeout_ms: Optional[int] = None) -> None:
        page = self._require_page()
        page.goto(url, timeout=timeout_ms or self.default_timeout_ms, wait_until="load")

    def current_url(self) -> str:
        return self._require_page().url

    def title(self) -> str:
        return self._require_page().title()

    # ---------------- elements ----------------

    def find_elements(self, selector: str, *, scope: Any | None = None) -> list[ElementHandle]:
        root = self._require_page() if scope is None else self._as_handle(scope)
        return root.query_selector_all(selector)

    def wait_for(self, selector: str, *, timeout_ms: Optional[int] = None) -> None:
        page = self._require_page()
        locator = page.locator(selector).first
        locator.wait_for(state="visible", timeout=timeout_ms or self.default_timeout_ms)

    def click(self, element: Any, *, timeout_ms: Optional[int] = None) -> None:
        """
        Click and let any navigation it triggers finish loading, so the next
        at clause sees the new document.
        """
        page = self._require_page()
        handle = self._as_handle(element)
        to = timeout_ms or self.default_timeout_ms
        handle.scroll_into_view_if_needed(timeout=to)
        handle.click(timeout=to)
        page.wait_for_load_state("load", timeout=to)

    def text_content(self, element: Any) -> str:
        # rendered text, like WebElement.text
        return self._as_handle(element).inner_text().strip()

    def get_attribute(self, element: Any, name: str) -> Optional[str]:
        return self._as_handle(element).get_attribute(name)

    # ---------------- scripts ----------------

    def execute_script(self, script: str, *args: Any) -> Any:
        """
        Run a Selenium-style script body (`arguments[i]`, `return ...`).
        The body is wrapped in a function receiving all arguments as one array.
        """
        page = self._require_page()
        wrapper = f"""
            (args) => {{
                const arguments = args;
                {dedent(script)}
            }}
        """
        return page.evaluate(wrapper, list(args))

    # ---------------- internals ----------------

    def _require_page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser not started. Call start() first.")
        return self._page

    @staticmethod
    def _as_handle(element: Any) -> ElementHandle:
        if not isinstance(element, ElementHandle):
            raise TypeError("element must be a Playwright ElementHandle (from find_elements()).")
        return element
