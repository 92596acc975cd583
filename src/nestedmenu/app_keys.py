"""Application keys for type-safe app configuration access."""

from aiohttp import web

from nestedmenu.config import MenuConfig
from nestedmenu.core.site import SiteLoader

site_loader_key = web.AppKey("site_loader", SiteLoader)
menu_config_key = web.AppKey("menu_config", MenuConfig)
