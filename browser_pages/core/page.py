"""
Page objects.

A page class declares:
- `url`: where `Browser.to()` navigates (None: reachable only via `at()`)
- `at`: an AtClause built with `at_clause()`, checked after every arrival
- `@content` accessors: evaluated on first read, then cached per instance

Example:

    class IndexPage(Page):
        url = "https://example.org/"
        at = at_clause(lambda browser: browser.title == "Example Domain")

        @content
        def heading(self) -> str:
            return self.query("h1", 0).text
"""
# @file purpose: Page base class, lazy content accessors and at clauses.

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Generic,
    Optional,
    TypeVar,
    Union,
    overload,
)

from .element import Element, ElementSet, find
from .query import Index

if TYPE_CHECKING:
    from .browser import Browser

T = TypeVar("T")


class AtClause:
    """A stored readiness check; calling it runs the block against a browser."""

    def __init__(
        self, block: Callable[["Browser"], bool], description: Optional[str] = None
    ) -> None:
        self.block = block
        self.description = description or getattr(block, "__qualname__", repr(block))

    def __call__(self, browser: "Browser") -> bool:
        return bool(self.block(browser))

    def __repr__(self) -> str:
        return f"AtClause({self.description!r})"


def at_clause(block: Callable[["Browser"], bool], description: Optional[str] = None) -> AtClause:
    """Wrap a boolean block into the at clause a page declares. Performs no I/O."""
    return AtClause(block, description)


class content(Generic[T]):
    """
    Lazy, memoize-once page accessor.

    The first read runs the function and stores the value in the page's
    cache slot; later reads return it without touching the driver. A failed
    evaluation caches nothing. Reading an accessor from inside its own
    evaluation raises RecursionError.
    """

    def __init__(self, fn: Callable[[Any], T]) -> None:
        self.fn = fn
        self.name = fn.__name__
        self.__doc__ = fn.__doc__

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, page: None, owner: type) -> "content[T]": ...
    @overload
    def __get__(self, page: "Page", owner: type) -> T: ...

    def __get__(
        self, page: Optional["Page"], owner: Optional[type] = None
    ) -> Union["content[T]", T]:
        if page is None:
            return self
        cache = page._content_cache
        if self.name in cache:
            return cache[self.name]
        if self.name in page._content_evaluating:
            raise RecursionError(
                f"content {type(page).__name__}.{self.name} read while being evaluated"
            )
        page._content_evaluating.add(self.name)
        try:
            value = self.fn(page)
        finally:
            page._content_evaluating.discard(self.name)
        cache[self.name] = value
        return value

    def __set__(self, page: "Page", value: Any) -> None:
        raise AttributeError(f"content {self.name!r} is read-only")


class Page:
    """Base class for page objects; subclasses are their own page factories."""

    url: ClassVar[Optional[str]] = None
    at: ClassVar[Optional[AtClause]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared = cls.__dict__.get("at")
        if declared is not None and not isinstance(declared, AtClause):
            raise TypeError(
                f"{cls.__name__}.at must be built with at_clause(), got {type(declared).__name__}"
            )

    def __init__(self, browser: "Browser") -> None:
        self.browser = browser
        self._content_cache: dict[str, Any] = {}
        self._content_evaluating: set[str] = set()

    def verify_at(self) -> bool:
        """True when the page declares no at clause (permissive default)."""
        clause = self.at
        if clause is None:
            return True
        return clause(self.browser)

    @overload
    def query(self, selector: str, index: int, /) -> Element: ...
    @overload
    def query(self, selector: str, *indices: Index) -> ElementSet: ...

    def query(self, selector: str, *indices: Index) -> Union[Element, ElementSet]:
        return find(self.browser, selector, indices)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r})"
