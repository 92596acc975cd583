"""Nested menu rendering.

Turns a subtree of the site into nested list markup. Expansion follows
the current page: only the current page and its ancestors open up to
show their children, limited by show_children_in_menus and an optional
maximum depth. Children of excluded page types are never listed.

Example output for a menu rendered for /about-us/::

    <ul class="nested-menu nested-menu-level-1 nested-menu-nesting-1">
      <li class="first link"><a class="first link" href="/">Home</a></li>
      <li class="current open"><a class="current open" href="/about-us/">About Us</a>
        <ul class="nested-menu-level-2 nested-menu-nesting-2">
          <li class="first link"><a ...>Our Staff</a></li>
          <li class="last link"><a ...>Another Page</a></li>
        </ul>
      </li>
      <li class="last link"><a class="last link" href="/contact-us/">Contact Us</a></li>
    </ul>
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypedDict

from nestedmenu.config import MenuConfig
from nestedmenu.core.classifier import NodeClassifier
from nestedmenu.core.formatter import MarkupFormatter
from nestedmenu.core.site import Page, TreeSource
from nestedmenu.core.types import URLPath
from nestedmenu.core.visibility import VisibilityFilter, show_all
from nestedmenu.exceptions import InvalidLevelError, MalformedTreeError

logger = logging.getLogger(__name__)

OPEN_CLASS = "open"


class RenderNodeDict(TypedDict, total=False):
    """Dictionary representation of a menu entry."""

    title: str
    link: str
    level: int
    classes: list[str]
    children: list[RenderNodeDict]


@dataclass
class RenderNode:
    """Menu entry ready for formatting.

    The level is the entry's depth in the site tree, not in the menu.
    """

    title: str
    link: URLPath
    level: int = 1
    classes: list[str] = field(default_factory=list)
    children: list[RenderNode] = field(default_factory=list)

    @property
    def class_attr(self) -> str:
        """Classes joined for use in a class attribute."""
        return " ".join(c for c in self.classes if c).strip()

    @property
    def is_open(self) -> bool:
        return OPEN_CLASS in self.classes

    def to_dict(self) -> RenderNodeDict:
        """Convert to dictionary for JSON serialization."""
        result: RenderNodeDict = {
            "title": self.title,
            "link": self.link,
            "level": self.level,
            "classes": list(self.classes),
        }
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


class NestedMenu:
    """Renders nested menus of a site for one current page.

    The renderer only reads from the tree source and holds no state
    between calls, so one instance can render any number of menus.
    """

    def __init__(
        self,
        source: TreeSource,
        *,
        current: Page | None = None,
        config: MenuConfig | None = None,
        visibility_filter: VisibilityFilter = show_all,
        formatter: MarkupFormatter | None = None,
        classifier: NodeClassifier | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            source: Tree source listing root pages and children
            current: Page the menu is rendered for. Required for menus
                     starting below level 1 and for expanding sections.
            config: Menu settings (item template, exclusions, recursion limit)
            visibility_filter: Drops pages the requester may not see
            formatter: Markup formatter, built from config.item_template if None
            classifier: State classifier, built from current if None
        """
        self._source = source
        self._config = config or MenuConfig()
        self._visibility_filter = visibility_filter
        self._formatter = formatter or MarkupFormatter(self._config.item_template)
        self._classifier = classifier or NodeClassifier(current)

    @property
    def config(self) -> MenuConfig:
        return self._config

    @property
    def formatter(self) -> MarkupFormatter:
        return self._formatter

    @property
    def current(self) -> Page | None:
        """Page the menu is rendered for."""
        return self._classifier.current

    def has_nested_menu(self, level: int = 1) -> bool:
        """Check whether a menu starting at the given level has any entries.

        Useful to decide whether to emit surrounding markup such as a
        <nav> element or an "In this section" heading.

        Args:
            level: Site tree level to start at (1 is the top level)

        Returns:
            True if render_nested_menu(level) would contain at least one entry

        Raises:
            InvalidLevelError: If level is below 1
        """
        pages = self._start_pages(level)
        return any(not self._is_excluded(page) for page in pages)

    def render_nested_menu(self, level: int = 1, max_depth: int | None = None) -> str:
        """Render the nested menu markup.

        Args:
            level: Site tree level to start at (1 is the top level)
            max_depth: Maximum number of nested lists, counted from the
                       starting level. None means no limit.

        Returns:
            Nested <ul> markup; an empty outer list if no pages qualify

        Raises:
            InvalidLevelError: If level or max_depth is below 1
            MalformedTreeError: If the tree contains a cycle
        """
        items = self.build(level, max_depth)
        return self._formatter.format(items, level)

    def build(self, level: int = 1, max_depth: int | None = None) -> list[RenderNode]:
        """Build the menu entries without formatting them.

        Args:
            level: Site tree level to start at (1 is the top level)
            max_depth: Maximum nesting depth, None for no limit

        Returns:
            Top-level RenderNodes in page order
        """
        if max_depth is not None and max_depth < 1:
            raise InvalidLevelError(f"Maximum depth must be at least 1, got {max_depth}")

        pages = self._start_pages(level)
        logger.debug(
            f"Rendering menu at level {level} (max depth {max_depth}) "
            f"from {len(pages)} pages"
        )
        return self._expand(pages, level, 1, max_depth, ())

    def filter_visible_pages(self, pages: Sequence[Page]) -> list[Page]:
        """Filter pages down to the ones that should appear in the menu.

        Override to add rules beyond the injected visibility filter.
        """
        return self._visibility_filter(pages)

    def _start_pages(self, level: int) -> list[Page]:
        """Resolve and filter the pages a menu at the given level starts with."""
        pages = self._classifier.position.pages_for_level(self._source, level)
        return self.filter_visible_pages(pages)

    def _expand(
        self,
        pages: Sequence[Page],
        site_tree_level: int,
        nesting_level: int,
        max_depth: int | None,
        path: tuple[Page, ...],
    ) -> list[RenderNode]:
        """Turn one level of sibling pages into RenderNodes, recursing into sections.

        Args:
            pages: Visible sibling pages in menu order
            site_tree_level: Level of the pages in the site tree (labels only)
            nesting_level: Depth within this menu, 1 for the outer list
            max_depth: Maximum nesting depth, None for no limit
            path: Pages expanded on the way down to this level
        """
        if max_depth is None and nesting_level > self._config.recursion_limit:
            raise MalformedTreeError(
                f"Menu nesting exceeds the recursion limit of {self._config.recursion_limit}"
            )

        included = [page for page in pages if not self._is_excluded(page)]
        nodes: list[RenderNode] = []
        for index, page in enumerate(included):
            classes = self._classifier.classify(index, len(included), page)
            children: list[RenderNode] = []

            if self._can_expand(page, nesting_level, max_depth):
                if any(p is page for p in path):
                    raise MalformedTreeError(f"Cycle in page tree at page {page.id!r}")

                visible = self.filter_visible_pages(self._source.get_children(page))
                if visible:
                    classes.append(OPEN_CLASS)
                    children = self._expand(
                        visible,
                        site_tree_level + 1,
                        nesting_level + 1,
                        max_depth,
                        (*path, page),
                    )

            nodes.append(
                RenderNode(
                    title=page.label,
                    link=page.link,
                    level=site_tree_level,
                    classes=classes,
                    children=children,
                )
            )

        return nodes

    def _can_expand(self, page: Page, nesting_level: int, max_depth: int | None) -> bool:
        """Check whether a page's children should be listed below it.

        Requires that:
        * the page allows showing its children (show_children_in_menus)
        * the page is the current page or an ancestor of it
        * the maximum depth has not been reached
        """
        return (
            page.show_children_in_menus
            and self._classifier.is_section(page)
            and (max_depth is None or nesting_level < max_depth)
        )

    def _is_excluded(self, page: Page) -> bool:
        """Check whether the page's parent hides its children from menus."""
        parent = page.parent
        return parent is not None and parent.page_type in self._config.exclude_children_of
