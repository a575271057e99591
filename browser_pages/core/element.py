"""
Element wrappers returned by queries.

- Element: one matched node; reads text/attributes, runs nested queries and
  clicks, optionally landing on (and verifying) the next page.
- ElementSet: an ordered, immutable sequence of Elements; nested queries run
  per element and are concatenated in set order.
"""
# @file purpose: Wrap driver element handles with query/click helpers.

from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterator,
    Optional,
    Sequence,
    TypeVar,
    Union,
    overload,
)

from .query import Index, is_single, pick

if TYPE_CHECKING:
    from .browser import Browser
    from .page import Page

logger = logging.getLogger(__name__)

P = TypeVar("P", bound="Page")


class Element:
    """One matched DOM node, valid while its document is current."""

    def __init__(self, browser: "Browser", handle: Any, *, selector: str) -> None:
        self.browser = browser
        self.handle = handle
        self.selector = selector

    @property
    def text(self) -> str:
        return self.browser.driver.text_content(self.handle)

    def attribute(self, name: str) -> Optional[str]:
        return self.browser.driver.get_attribute(self.handle, name)

    @overload
    def query(self, selector: str, index: int, /) -> "Element": ...
    @overload
    def query(self, selector: str, *indices: Index) -> "ElementSet": ...

    def query(self, selector: str, *indices: Index) -> Union["Element", "ElementSet"]:
        """Query this element's descendants; same index rules as Browser.query."""
        return find(self.browser, selector, indices, scopes=[self])

    @overload
    def click(self) -> None: ...
    @overload
    def click(self, page_factory: Callable[["Browser"], P]) -> P: ...

    def click(self, page_factory: Optional[Callable[["Browser"], P]] = None) -> Optional[P]:
        """
        Click the element. Given a page factory, the click is expected to land
        the browser on that page: it is built and verified like `Browser.at`.
        """
        logger.debug("click %r", self.selector)
        self.browser.driver.click(self.handle)
        if page_factory is None:
            return None
        return self.browser.at(page_factory)

    def __repr__(self) -> str:
        return f"Element(selector={self.selector!r})"


class ElementSet(Sequence[Element]):
    """Ordered query result."""

    def __init__(self, elements: Sequence[Element], *, selector: str) -> None:
        self._elements = tuple(elements)
        self.selector = selector

    @overload
    def __getitem__(self, index: int) -> Element: ...
    @overload
    def __getitem__(self, index: slice) -> "ElementSet": ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Element, "ElementSet"]:
        if isinstance(index, slice):
            return ElementSet(self._elements[index], selector=self.selector)
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    @overload
    def query(self, selector: str, index: int, /) -> Element: ...
    @overload
    def query(self, selector: str, *indices: Index) -> "ElementSet": ...

    def query(self, selector: str, *indices: Index) -> Union[Element, "ElementSet"]:
        """
        Query the descendants of every element, concatenating in set order.
        Indices select from the concatenated matches.
        """
        if not self._elements:
            return find(None, selector, indices, scopes=[])
        return find(self._elements[0].browser, selector, indices, scopes=self._elements)

    def texts(self) -> list[str]:
        return [element.text for element in self._elements]

    def attributes(self, name: str) -> list[Optional[str]]:
        return [element.attribute(name) for element in self._elements]

    def __repr__(self) -> str:
        return f"ElementSet(selector={self.selector!r}, size={len(self._elements)})"


def find(
    browser: Optional["Browser"],
    selector: str,
    indices: Sequence[Index],
    *,
    scopes: Optional[Sequence[Element]] = None,
) -> Union[Element, ElementSet]:
    """
    Resolve `selector` against the whole document (scopes=None) or under each
    scope element, then apply the index selection.
    """
    handles: list[Any] = []
    if scopes is None:
        assert browser is not None
        handles = browser.driver.find_elements(selector)
    else:
        for scope in scopes:
            handles.extend(scope.browser.driver.find_elements(selector, scope=scope.handle))
    logger.debug("query %r matched %d element(s)", selector, len(handles))

    picked = pick(handles, indices, selector=selector)
    # browser is only None for an empty receiver set, which yields no handles
    elements = [
        Element(browser, handle, selector=selector)  # type: ignore[arg-type]
        for handle in picked
    ]
    if is_single(indices):
        return elements[0]
    return ElementSet(elements, selector=selector)
