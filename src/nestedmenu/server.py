"""aiohttp server for nestedmenu.

Application factory and route registration for standalone server mode.
"""

from aiohttp import web

from nestedmenu.api.menu import create_menu_routes
from nestedmenu.app_keys import menu_config_key, site_loader_key
from nestedmenu.config import Config
from nestedmenu.core.site import SiteLoader


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[site_loader_key] = SiteLoader(config.site.source)
    app[menu_config_key] = config.menu

    app.router.add_routes(create_menu_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
