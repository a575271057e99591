"""
Browser: the session/navigation controller.

`drive()` hands out a Browser bound to one driver for the duration of a
`with` block. Inside it, pages are reached with:
- `to(PageClass)`: navigate to the page's url, then verify its at clause
- `at(PageClass)`: verify only (the browser is assumed to be there already)
- `to("https://...")`: plain navigation, returns the resulting url
Verification is shared with `Element.click(PageClass)`.
"""
# @file purpose: Session lifecycle, page navigation and implicit verification.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar, Union, overload

from ..io.driver import BrowserDriver
from .config import ConfigurationSetup, default_setup
from .element import Element, ElementSet, find
from .errors import MissingUrlError, VerificationError
from .page import Page
from .query import Index

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=Page)
PageFactory = Callable[["Browser"], P]


class Browser:
    """Owns one driver for a drive() scope. Not thread-safe."""

    def __init__(self, driver: BrowserDriver) -> None:
        self.driver = driver

    # -------- document state --------

    @property
    def current_url(self) -> str:
        return self.driver.current_url()

    @property
    def title(self) -> str:
        return self.driver.title()

    # -------- navigation --------

    def at(self, page_factory: PageFactory[P]) -> P:
        """Build the page without navigating and verify the browser is on it."""
        return self._verify(page_factory(self))

    @overload
    def to(self, target: str) -> str: ...
    @overload
    def to(self, target: PageFactory[P]) -> P: ...

    def to(self, target: Union[str, PageFactory[P]]) -> Union[str, P]:
        """
        Navigate to a url (returns the resulting current url) or to a page
        (returns the verified page instance).
        """
        if isinstance(target, str):
            logger.debug("navigating to %s", target)
            self.driver.goto(target)
            return self.current_url

        page = target(self)
        if page.url is None:
            raise MissingUrlError(type(page).__name__)
        logger.debug("navigating to %s for %s", page.url, type(page).__name__)
        self.driver.goto(page.url)
        return self._verify(page)

    def _verify(self, page: P) -> P:
        if not page.verify_at():
            raise VerificationError(
                type(page).__name__,
                expected=page.at.description if page.at is not None else None,
                url=self.current_url,
                title=self.title,
            )
        logger.debug("at %s", type(page).__name__)
        return page

    # -------- content --------

    @overload
    def query(self, selector: str, index: int, /) -> Element: ...
    @overload
    def query(self, selector: str, *indices: Index) -> ElementSet: ...

    def query(self, selector: str, *indices: Index) -> Union[Element, ElementSet]:
        return find(self, selector, indices)

    def wait_for(self, selector: str, *, timeout_ms: Optional[int] = None) -> None:
        """Block until `selector` is visible; timing is the driver's business."""
        self.driver.wait_for(selector, timeout_ms=timeout_ms)

    def execute_script(self, script: str, *args: Any) -> Any:
        """Run a script body; Element arguments are passed as their handles."""
        unwrapped = [arg.handle if isinstance(arg, Element) else arg for arg in args]
        return self.driver.execute_script(script, *unwrapped)

    # -------- lifecycle --------

    def quit(self) -> None:
        logger.debug("quitting driver")
        self.driver.quit()


@contextmanager
def drive(
    driver: Optional[BrowserDriver] = None,
    *,
    auto_quit: Optional[bool] = None,
    setup: Optional[ConfigurationSetup] = None,
) -> Iterator[Browser]:
    """
    Yield a Browser over `driver` (default: the setup's factory).
    With auto_quit (default: the setup's) the driver is quit however the
    block exits; otherwise closing it is the caller's job.
    """
    if driver is None or auto_quit is None:
        setup = setup or default_setup()
        driver = driver if driver is not None else setup.driver_factory()
        auto_quit = setup.auto_quit if auto_quit is None else auto_quit

    browser = Browser(driver)
    try:
        yield browser
    finally:
        if auto_quit:
            browser.quit()
