"""Per-item state classes for menu entries.

Classifies a page relative to its siblings (first/last) and to the page
the menu is rendered for (current/section/link).
"""

from enum import Enum

from nestedmenu.core.position import TreePosition
from nestedmenu.core.site import Page


class LinkingMode(Enum):
    """Relation of a menu entry to the current page."""

    CURRENT = "current"
    SECTION = "section"
    LINK = "link"


class NodeClassifier:
    """Computes state classes for a menu rendered for one current page."""

    def __init__(self, current: Page | None = None) -> None:
        """Initialize classifier.

        Args:
            current: Page the menu is rendered for, None if there is none
        """
        self._current = current
        self._position = TreePosition.for_page(current)

    @property
    def current(self) -> Page | None:
        """Page the menu is rendered for."""
        return self._current

    @property
    def position(self) -> TreePosition:
        """Ancestor chain of the current page."""
        return self._position

    def linking_mode(self, page: Page) -> LinkingMode:
        if page is self._current:
            return LinkingMode.CURRENT
        if self._position.contains(page):
            return LinkingMode.SECTION
        return LinkingMode.LINK

    def is_section(self, page: Page) -> bool:
        """Check whether the page is the current page or one of its ancestors."""
        return self._position.contains(page)

    def classify(self, index: int, total: int, page: Page) -> list[str]:
        """Get state classes for a page at a position in its sibling list.

        Args:
            index: Zero-based position among the rendered siblings
            total: Number of rendered siblings
            page: Page being classified

        Returns:
            Classes in order: position tags, then the linking mode.
            A lone sibling gets both "first" and "last", unlike
            SilverStripe's FirstLast(), which tags it only as "first".
        """
        classes: list[str] = []
        if index == 0:
            classes.append("first")
        if index == total - 1:
            classes.append("last")
        classes.append(self.linking_mode(page).value)
        return classes
