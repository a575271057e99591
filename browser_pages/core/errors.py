"""
Project-level exception types.
- BrowserPagesError: base class for every custom error
- MissingUrlError: `to(page)` on a page that declares no URL
- VerificationError: a page's at clause did not hold after navigation/click
- IndexOutOfRangeError: a requested ordinal is outside the matched elements
- ConfigurationError: a user configuration object has the wrong shape
"""
# @file purpose: Define error taxonomy for browser-pages.

from __future__ import annotations

from typing import Any


class BrowserPagesError(Exception):
    """
    Base class for all custom errors in browser-pages.
    Carries a details mapping rendered as `message | k=v | ...`.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}

    def __str__(self) -> str:
        parts = [super().__str__()]
        parts.extend(f"{k}={v!r}" for k, v in self.details.items() if v is not None)
        return " | ".join(parts)


class MissingUrlError(BrowserPagesError):
    """Raised when navigating to a page that has no URL."""

    def __init__(self, page: str) -> None:
        super().__init__(
            "page declares no url; use at() once the browser is already on it",
            details={"page": page},
        )
        self.page = page


class VerificationError(BrowserPagesError):
    """
    Raised when a page's at clause evaluates false.
    Keeps what was expected and what the browser actually showed.
    """

    def __init__(
        self,
        page: str,
        *,
        expected: str | None = None,
        url: str | None = None,
        title: str | None = None,
    ) -> None:
        super().__init__(
            "browser is not at the expected page",
            details={"page": page, "expected": expected, "url": url, "title": title},
        )
        self.page = page
        self.expected = expected
        self.url = url
        self.title = title


class IndexOutOfRangeError(BrowserPagesError, IndexError):
    """Raised when a query asks for an ordinal its selector did not match."""

    def __init__(
        self,
        selector: str,
        index: int,
        count: int,
        *,
        indices: list[int] | None = None,
    ) -> None:
        super().__init__(
            f"index {index} out of range for {count} matched element(s)",
            details={"selector": selector, "requested": indices},
        )
        self.selector = selector
        self.index = index
        self.count = count
        self.indices = indices or [index]


class ConfigurationError(BrowserPagesError):
    """Raised when a user-supplied configuration cannot be used."""
