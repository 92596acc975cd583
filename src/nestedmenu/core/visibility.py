"""Visibility filters applied to page lists before they enter a menu.

A filter takes the pages of one menu level and returns the ones the
requester may see, keeping their order. Filters are applied to the
starting pages and to the children of every expanded page.
"""

from collections.abc import Callable, Iterable, Sequence

from nestedmenu.core.site import Page

VisibilityFilter = Callable[[Sequence[Page]], list[Page]]


def show_all(pages: Sequence[Page]) -> list[Page]:
    """Keep every page."""
    return list(pages)


def predicate_filter(predicate: Callable[[Page], bool]) -> VisibilityFilter:
    """Create a filter from a per-page predicate.

    Args:
        predicate: Returns True for pages that stay visible

    Returns:
        VisibilityFilter keeping pages the predicate accepts
    """

    def _filter(pages: Sequence[Page]) -> list[Page]:
        return [page for page in pages if predicate(page)]

    return _filter


def hide_page_types(page_types: Iterable[str]) -> VisibilityFilter:
    """Create a filter dropping pages of the given types."""
    hidden = frozenset(page_types)
    return predicate_filter(lambda page: page.page_type not in hidden)
