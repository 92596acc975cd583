"""Nested menus for hierarchical page trees."""

from nestedmenu.core.menu import NestedMenu, RenderNode
from nestedmenu.core.site import Page, Site, SiteBuilder, SiteLoader
from nestedmenu.exceptions import (
    InvalidLevelError,
    MalformedTreeError,
    NestedMenuError,
    TreeSourceError,
)

__all__ = [
    "InvalidLevelError",
    "MalformedTreeError",
    "NestedMenu",
    "NestedMenuError",
    "Page",
    "RenderNode",
    "Site",
    "SiteBuilder",
    "SiteLoader",
    "TreeSourceError",
]
