"""Exceptions raised while resolving and rendering menus."""


class NestedMenuError(Exception):
    """Base exception for nestedmenu operations."""


class InvalidLevelError(NestedMenuError, ValueError):
    """Level or depth argument outside the accepted range."""


class MalformedTreeError(NestedMenuError):
    """Page tree contains a cycle or nests deeper than the recursion limit."""


class TreeSourceError(NestedMenuError):
    """Tree source could not answer a query."""
