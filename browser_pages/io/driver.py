"""
Browser driver protocol (abstraction).

This Protocol defines the minimal browser control surface that the page
layer relies on. It allows plugging different backends (Playwright today,
anything exposing the same calls tomorrow) without touching pages.

Notes:
- Element handles are opaque: whatever `find_elements()` returns is passed
  back unchanged to `click()`, `text_content()`, `get_attribute()` and as
  `scope=` for nested lookups.
- Handles belong to the current document and go stale once it changes.
- Implementations own their timeouts and waiting; callers never poll.
"""

from __future__ import annotations

from typing import Any, Protocol


class BrowserDriver(Protocol):
    # -------- navigation & document state --------
    def goto(self, url: str, *, timeout_ms: int | None = None) -> None: ...
    def current_url(self) -> str: ...
    def title(self) -> str: ...

    # -------- element lookup --------
    def find_elements(self, selector: str, *, scope: Any | None = None) -> list[Any]: ...
    def wait_for(self, selector: str, *, timeout_ms: int | None = None) -> None: ...

    # -------- element interaction --------
    def click(self, element: Any, *, timeout_ms: int | None = None) -> None: ...
    def text_content(self, element: Any) -> str: ...
    def get_attribute(self, element: Any, name: str) -> str | None: ...

    # -------- utilities --------
    def execute_script(self, script: str, *args: Any) -> Any: ...

    # -------- lifecycle --------
    def quit(self) -> None: ...
