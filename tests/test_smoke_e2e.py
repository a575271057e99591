import functools
import http.server
import os
import socketserver
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from browser_pages.core.browser import drive
from browser_pages.core.config import ConfigurationSetup
from browser_pages.core.errors import VerificationError
from browser_pages.core.page import Page, at_clause, content
from browser_pages.io.playwright_driver import PlaywrightDriver

pytestmark = pytest.mark.skipif(
    os.environ.get("BP_RUN_E2E") != "1",
    reason="needs Playwright browsers; set BP_RUN_E2E=1",
)


@pytest.fixture(scope="session")
def web_server() -> Iterator[str]:
    root = Path(__file__).resolve().parent / "fixtures"
    Handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(root))
    httpd = socketserver.TCPServer(("127.0.0.1", 0), Handler)
    port = httpd.server_address[1]
    t = threading.Thread(target=httpd.serve_forever, daemon=True)
    t.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        httpd.shutdown()
        httpd.server_close()


@pytest.fixture
def driver_setup() -> ConfigurationSetup:
    return ConfigurationSetup(
        driver_factory=lambda: PlaywrightDriver(headless=True, default_timeout_ms=10_000).start(),
        auto_quit=True,
    )


def test_smoke_end_to_end(web_server: str, driver_setup: ConfigurationSetup) -> None:
    class ReferencePage(Page):
        at = at_clause(lambda browser: browser.title == "Reference")

        @content
        def header(self) -> str:
            return self.query("h1", 0).text

    class IndexPage(Page):
        url = f"{web_server}/index.html"
        at = at_clause(lambda browser: browser.title == "Example Programming Language")

        @content
        def features(self) -> list[str]:
            return self.query("li.feature", range(0, 4)).query("h3").texts()

        @content
        def nav_items(self) -> list[str]:
            return self.query("a.nav-item").texts()

    with drive(setup=driver_setup) as browser:
        index = browser.to(IndexPage)
        assert browser.current_url == IndexPage.url
        assert index.nav_items == ["Learn", "Community", "Try Online"]
        assert index.features == ["Concise", "Safe", "Interoperable", "Tool-friendly"]
        button = browser.query(".get-button", 0)
        assert browser.execute_script("return arguments[0].id;", button) == "get"

        reference = index.query("div.nav-links a", 0).click(ReferencePage)
        assert reference.header == "Reference"

        with pytest.raises(VerificationError):
            browser.at(IndexPage)


def test_nested_sessions_end_to_end(web_server: str, driver_setup: ConfigurationSetup) -> None:
    with drive(setup=driver_setup) as outer:
        outer.to(f"{web_server}/index.html")
        with drive(setup=driver_setup) as inner:
            inner.to(f"{web_server}/reference.html")
            assert inner.title == "Reference"
        assert outer.title == "Example Programming Language"
    with drive(setup=driver_setup) as again:
        again.to(f"{web_server}/reference.html")
        assert again.title == "Reference"
