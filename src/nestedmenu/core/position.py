"""Starting point resolution for menus that begin below the top level."""

from __future__ import annotations

from dataclasses import dataclass

from nestedmenu.core.site import Page, TreeSource
from nestedmenu.exceptions import InvalidLevelError, MalformedTreeError


@dataclass(frozen=True)
class TreePosition:
    """Ancestor chain of a page, ordered from the root down to the page itself."""

    chain: tuple[Page, ...]

    @classmethod
    def for_page(cls, page: Page | None) -> TreePosition:
        """Build the position of a page by following parent references.

        Args:
            page: Page to resolve, or None for no current page

        Returns:
            TreePosition with a root-first chain (empty for None)

        Raises:
            MalformedTreeError: If the parent references form a cycle
        """
        ancestors: list[Page] = []
        seen: set[int] = set()
        current = page
        while current is not None:
            if id(current) in seen:
                raise MalformedTreeError(f"Cycle in parent chain at page {current.id!r}")
            seen.add(id(current))
            ancestors.append(current)
            current = current.parent

        ancestors.reverse()
        return cls(chain=tuple(ancestors))

    @property
    def depth(self) -> int:
        """Number of pages in the chain (1 for a top-level page)."""
        return len(self.chain)

    def contains(self, page: Page) -> bool:
        """Check whether the page is on the chain."""
        return any(p is page for p in self.chain)

    def pages_for_level(self, source: TreeSource, level: int) -> list[Page]:
        """Get the menu pages at a site tree level.

        Level 1 is the top level of the site. Deeper levels list the
        children of the ancestor at that level, so the result depends on
        where the page sits in the tree.

        Args:
            source: Tree source to query
            level: Site tree level, starting at 1

        Returns:
            Pages for the level, empty if the page is not that deep

        Raises:
            InvalidLevelError: If level is below 1
        """
        if level < 1:
            raise InvalidLevelError(f"Menu level must be at least 1, got {level}")

        if level == 1:
            return source.get_root_pages()

        if len(self.chain) < level - 1:
            return []

        return source.get_children(self.chain[level - 2])


def resolve_start_pages(
    source: TreeSource,
    level: int,
    current: Page | None = None,
) -> list[Page]:
    """Resolve the pages a menu at the given level starts with.

    Args:
        source: Tree source to query
        level: Site tree level, starting at 1
        current: Page the menu is rendered for

    Returns:
        Pages in menu order, before visibility filtering
    """
    return TreePosition.for_page(current).pages_for_level(source, level)
