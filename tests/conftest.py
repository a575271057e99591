from collections.abc import Iterator

import pytest

from browser_pages.core.config import ConfigurationSetup, default_setup
from fakes import INDEX_URL, REFERENCE_URL, FakeDocument, FakeDriver, FakeElement


def feature(name: str) -> FakeElement:
    return FakeElement(
        name,
        children={
            "h3:nth-child(2)": [FakeElement(name)],
            "p": [FakeElement(f"{name} intro"), FakeElement(f"{name} detail")],
        },
    )


@pytest.fixture
def driver() -> FakeDriver:
    """A two-page site: an index linking to a reference page."""
    index = FakeDocument(
        INDEX_URL,
        "Example Programming Language",
        {
            "a.nav-item": [
                FakeElement("Learn", attributes={"href": "/docs/"}),
                FakeElement("Community", attributes={"href": "/community/"}),
                FakeElement("Try Online", attributes={"href": "https://play.lang.example/"}),
            ],
            ".get-button": [FakeElement("Try It")],
            "li.feature": [
                feature(n) for n in ("Concise", "Safe", "Interoperable", "Tool-friendly")
            ],
            "div.nav-links a": [FakeElement("Learn", href=REFERENCE_URL)],
        },
    )
    reference = FakeDocument(
        REFERENCE_URL,
        "Reference",
        {"h1": [FakeElement("Reference")]},
    )
    return FakeDriver(index, reference)


@pytest.fixture
def driver_setup(driver: FakeDriver) -> ConfigurationSetup:
    return ConfigurationSetup(driver_factory=lambda: driver, auto_quit=True)


@pytest.fixture(autouse=True)
def _fresh_default_setup() -> Iterator[None]:
    default_setup.cache_clear()
    yield
    default_setup.cache_clear()
