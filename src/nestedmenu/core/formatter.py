"""Markup formatting for rendered menus.

Turns RenderNode trees into nested <ul> markup using a configurable
per-item template. Holds no tree traversal logic of its own beyond
walking the already-built RenderNode children.
"""

from __future__ import annotations

import html
import string
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nestedmenu.core.menu import RenderNode

# Substitution fields:
# - {title}    The page's menu title (escaped as text)
# - {link}     The page link (escaped as an attribute value)
# - {classes}  The classes of the list item (and its anchor)
# - {children} The nested <ul> markup for the sub-menu, empty if none
DEFAULT_ITEM_TEMPLATE = (
    '<li class="{classes}"><a class="{classes}" href="{link}">{title}</a>{children}</li>'
)

TEMPLATE_FIELDS = frozenset({"title", "link", "classes", "children"})

TOP_LEVEL_CLASS = "nested-menu"


def validate_item_template(template: str) -> str:
    """Check that an item template only uses the known fields.

    Args:
        template: str.format style template

    Returns:
        The template unchanged

    Raises:
        ValueError: If the template is malformed or uses unknown fields
    """
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as e:
        raise ValueError(f"Malformed item template: {e}") from e

    for _, field_name, format_spec, conversion in parsed:
        if field_name is None:
            continue
        if field_name not in TEMPLATE_FIELDS:
            raise ValueError(
                f"Unknown item template field {{{field_name}}}, "
                f"expected one of: {', '.join(sorted(TEMPLATE_FIELDS))}"
            )
        if format_spec or conversion:
            raise ValueError(f"Item template field {{{field_name}}} must not use a format spec")
    return template


class MarkupFormatter:
    """Serializes RenderNode trees to nested list markup."""

    def __init__(self, item_template: str = DEFAULT_ITEM_TEMPLATE) -> None:
        self._item_template = validate_item_template(item_template)

    @property
    def item_template(self) -> str:
        return self._item_template

    def format(
        self,
        items: Sequence[RenderNode],
        site_tree_level: int,
        nesting_level: int = 1,
    ) -> str:
        """Format one menu level and everything nested below it.

        Args:
            items: Entries of this level
            site_tree_level: Level of the entries in the site tree
            nesting_level: Depth within this menu, 1 for the outer list

        Returns:
            <ul> markup, an empty list if there are no items
        """
        parts = [self.open_list(site_tree_level, nesting_level)]
        for item in items:
            child_markup = ""
            if item.children or item.is_open:
                child_markup = self.format(
                    item.children,
                    site_tree_level + 1,
                    nesting_level + 1,
                )
            parts.append(self.format_item(item, child_markup))
        parts.append("</ul>")
        return "".join(parts)

    def format_item(self, item: RenderNode, child_markup: str) -> str:
        return self._item_template.format(
            title=html.escape(item.title, quote=False),
            link=html.escape(item.link, quote=True),
            classes=html.escape(item.class_attr, quote=True),
            children=child_markup,
        )

    def open_list(self, site_tree_level: int, nesting_level: int) -> str:
        """Opening <ul> tag with level and depth classes.

        The nested-menu class is only put on the outer list.
        """
        classes = [
            f"nested-menu-level-{site_tree_level}",
            f"nested-menu-nesting-{nesting_level}",
        ]
        if nesting_level == 1:
            classes.insert(0, TOP_LEVEL_CLASS)
        return f'<ul class="{" ".join(classes)}">'
