"""Site structure for page hierarchy.

Represents the page tree that menus are rendered from. Pages keep a
back-reference to their parent so ancestor chains can be walked upwards
without indexing into the whole tree. Separate from the menu renderer,
which only reads the site through the TreeSource protocol.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from nestedmenu.core.types import URLPath
from nestedmenu.exceptions import TreeSourceError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_TYPE = "Page"


@dataclass(eq=False)
class Page:
    """Page in the site tree.

    Compared by identity: two pages with equal fields are still
    distinct nodes of the tree.
    """

    id: str
    title: str
    link: URLPath
    menu_title: str | None = None
    page_type: str = DEFAULT_PAGE_TYPE
    show_in_menus: bool = True
    show_children_in_menus: bool = True
    parent: Page | None = field(default=None, repr=False)
    children: list[Page] = field(default_factory=list, repr=False)

    @property
    def label(self) -> str:
        """Title shown in menus."""
        return self.menu_title or self.title


class TreeSource(Protocol):
    """Read access to a page tree for menu rendering.

    Both methods return only pages with show_in_menus set, in tree order.
    """

    def get_root_pages(self) -> list[Page]: ...

    def get_children(self, page: Page) -> list[Page]: ...


class Site:
    """In-memory page tree with link and id lookups."""

    __slots__ = ("_id_index", "_link_index", "_pages", "_roots")

    def __init__(self, pages: list[Page], roots: list[Page]) -> None:
        """Initialize site structure.

        Args:
            pages: Flat list of all pages, parents before children
            roots: Top-level pages in menu order
        """
        self._pages = pages
        self._roots = roots
        self._id_index = {page.id: page for page in pages}
        self._link_index = {_normalize_link(page.link): page for page in pages}

    @property
    def pages(self) -> list[Page]:
        """All pages, parents before children."""
        return list(self._pages)

    def get_page(self, path: str) -> Page | None:
        """Get page by link.

        Args:
            path: Page link (e.g., "about-us", "/about-us" or "/about-us/")

        Returns:
            Page if found, None otherwise
        """
        return self._link_index.get(_normalize_link(path))

    def get_page_by_id(self, page_id: str) -> Page | None:
        """Get page by id."""
        return self._id_index.get(page_id)

    def get_root_pages(self) -> list[Page]:
        """Get top-level pages shown in menus."""
        return [page for page in self._roots if page.show_in_menus]

    def get_children(self, page: Page) -> list[Page]:
        """Get children of a page shown in menus."""
        return [child for child in page.children if child.show_in_menus]


class SiteBuilder:
    """Builder for constructing Site instances."""

    def __init__(self) -> None:
        self._pages: list[Page] = []
        self._roots: list[Page] = []

    def add_page(
        self,
        title: str,
        link: str,
        parent_idx: int | None = None,
        *,
        page_id: str | None = None,
        menu_title: str | None = None,
        page_type: str = DEFAULT_PAGE_TYPE,
        show_in_menus: bool = True,
        show_children_in_menus: bool = True,
    ) -> int:
        """Add a page to the site.

        Args:
            title: Page title
            link: Page link
            parent_idx: Index of parent page, None for root
            page_id: Unique page id (defaults to the link)
            menu_title: Label for menus (defaults to title)
            page_type: Type tag used by exclusion rules
            show_in_menus: Whether the page is listed in menus
            show_children_in_menus: Whether the page's children are listed

        Returns:
            Index of the added page
        """
        idx = len(self._pages)
        parent = self._pages[parent_idx] if parent_idx is not None else None
        page = Page(
            id=page_id if page_id is not None else link,
            title=title,
            link=URLPath(link),
            menu_title=menu_title,
            page_type=page_type,
            show_in_menus=show_in_menus,
            show_children_in_menus=show_children_in_menus,
            parent=parent,
        )
        self._pages.append(page)

        if parent is None:
            self._roots.append(page)
        else:
            parent.children.append(page)

        return idx

    def build(self) -> Site:
        """Build the Site instance."""
        return Site(pages=self._pages, roots=self._roots)


class SiteLoader:
    """Loads a Site from a TOML definition file.

    The file is re-read only when its mtime changes, so a long-running
    server picks up edits without restarting.

    File format::

        [[pages]]
        title = "About Us"
        link = "/about-us/"

        [[pages.children]]
        title = "Our Staff"
        link = "/about-us/our-staff/"
    """

    def __init__(self, source_path: Path) -> None:
        self._source_path = source_path
        self._site: Site | None = None
        self._mtime: float | None = None

    @property
    def source_path(self) -> Path:
        """Path to the site definition file."""
        return self._source_path

    def load(self) -> Site:
        """Load the site, reusing the previous result if the file is unchanged.

        Raises:
            TreeSourceError: If the file is missing, unreadable or invalid
        """
        try:
            mtime = self._source_path.stat().st_mtime
        except OSError as e:
            logger.error(f"Cannot read site file {self._source_path}: {e}")
            raise TreeSourceError(f"Site file not found: {self._source_path}") from e

        if self._site is not None and self._mtime == mtime:
            return self._site

        try:
            with self._source_path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Cannot parse site file {self._source_path}: {e}")
            raise TreeSourceError(f"Invalid site file {self._source_path}: {e}") from e

        try:
            site = parse_site(data)
        except ValueError as e:
            logger.error(f"Invalid site definition in {self._source_path}: {e}")
            raise TreeSourceError(f"Invalid site file {self._source_path}: {e}") from e

        logger.info(f"Loaded {len(site.pages)} pages from {self._source_path}")
        self._site = site
        self._mtime = mtime
        return site


def parse_site(data: dict[str, Any]) -> Site:
    """Build a Site from a parsed site definition.

    Args:
        data: Mapping with a "pages" list of page tables

    Returns:
        Site instance

    Raises:
        ValueError: If the definition is invalid
    """
    pages = data.get("pages", [])
    if not isinstance(pages, list):
        raise ValueError("pages must be a list")

    builder = SiteBuilder()
    seen_ids: set[str] = set()
    seen_links: set[str] = set()
    for entry in pages:
        _add_entry(builder, entry, None, seen_ids, seen_links)
    return builder.build()


def _add_entry(
    builder: SiteBuilder,
    entry: object,
    parent_idx: int | None,
    seen_ids: set[str],
    seen_links: set[str],
) -> None:
    """Add a page table and its children to the builder."""
    if not isinstance(entry, dict):
        raise ValueError("page entries must be tables")

    title = entry.get("title")
    if not isinstance(title, str):
        raise ValueError("page.title must be a string")

    link = entry.get("link")
    if not isinstance(link, str):
        raise ValueError(f"page.link must be a string (page {title!r})")
    normalized = _normalize_link(link)
    if normalized in seen_links:
        raise ValueError(f"duplicate page link {link!r}")
    seen_links.add(normalized)

    page_id = entry.get("id", link)
    if not isinstance(page_id, str):
        raise ValueError(f"page.id must be a string (page {title!r})")
    if page_id in seen_ids:
        raise ValueError(f"duplicate page id {page_id!r}")
    seen_ids.add(page_id)

    menu_title = entry.get("menu_title")
    if menu_title is not None and not isinstance(menu_title, str):
        raise ValueError(f"page.menu_title must be a string (page {title!r})")

    page_type = entry.get("type", DEFAULT_PAGE_TYPE)
    if not isinstance(page_type, str):
        raise ValueError(f"page.type must be a string (page {title!r})")

    show_in_menus = entry.get("show_in_menus", True)
    if not isinstance(show_in_menus, bool):
        raise ValueError(f"page.show_in_menus must be a boolean (page {title!r})")

    show_children = entry.get("show_children_in_menus", True)
    if not isinstance(show_children, bool):
        raise ValueError(
            f"page.show_children_in_menus must be a boolean (page {title!r})"
        )

    children = entry.get("children", [])
    if not isinstance(children, list):
        raise ValueError(f"page.children must be a list (page {title!r})")

    idx = builder.add_page(
        title,
        link,
        parent_idx,
        page_id=page_id,
        menu_title=menu_title,
        page_type=page_type,
        show_in_menus=show_in_menus,
        show_children_in_menus=show_children,
    )
    for child in children:
        _add_entry(builder, child, idx, seen_ids, seen_links)


def _normalize_link(link: str) -> str:
    """Normalize link to have a leading slash and no trailing slash."""
    stripped = link.strip("/")
    return f"/{stripped}" if stripped else "/"
