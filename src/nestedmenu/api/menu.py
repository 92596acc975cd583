"""Menu API endpoints.

Provides rendered menus for the site root and for any page.
"""

from aiohttp import web

from nestedmenu.app_keys import menu_config_key, site_loader_key
from nestedmenu.core.menu import NestedMenu
from nestedmenu.exceptions import InvalidLevelError, MalformedTreeError, TreeSourceError


def create_menu_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/menu", get_menu),
        web.get("/api/menu/{path:.*}", get_page_menu),
    ]


async def get_menu(request: web.Request) -> web.Response:
    """Render a menu, optionally for the page given in the current parameter."""
    return _render(request, request.query.get("current"))


async def get_page_menu(request: web.Request) -> web.Response:
    """Render a menu for the page at the given path."""
    return _render(request, request.match_info["path"])


def _render(request: web.Request, current_path: str | None) -> web.Response:
    try:
        level = _int_param(request, "level", 1)
        max_depth = _int_param(request, "max_depth", None)
    except ValueError as e:
        return web.json_response({"error": str(e)}, status=400)

    try:
        site = request.app[site_loader_key].load()
    except TreeSourceError as e:
        return web.json_response({"error": str(e)}, status=500)

    current = None
    if current_path is not None:
        current = site.get_page(current_path)
        if current is None:
            return web.json_response(
                {"error": "Page not found", "path": current_path},
                status=404,
            )

    try:
        menu = NestedMenu(site, current=current, config=request.app[menu_config_key])
        items = menu.build(level, max_depth)
        html = menu.formatter.format(items, level)
    except InvalidLevelError as e:
        return web.json_response({"error": str(e)}, status=400)
    except MalformedTreeError as e:
        return web.json_response({"error": str(e)}, status=500)

    return web.json_response(
        {
            "has_menu": bool(items),
            "html": html,
            "items": [item.to_dict() for item in items],
        }
    )


def _int_param(request: web.Request, name: str, default: int | None) -> int | None:
    raw = request.query.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None
