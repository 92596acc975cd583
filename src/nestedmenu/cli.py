"""CLI interface for nestedmenu.

Command-line tool for rendering nested menus from a site definition.
"""

import json
import logging
import sys
from pathlib import Path

import click

from nestedmenu.config import Config
from nestedmenu.core.menu import NestedMenu
from nestedmenu.core.site import Page, Site, SiteLoader
from nestedmenu.exceptions import NestedMenuError

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover nestedmenu.toml)",
)
site_option = click.option(
    "--site",
    "-s",
    "site_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Site definition file (overrides config)",
)
level_option = click.option(
    "--level",
    "-l",
    type=int,
    default=1,
    show_default=True,
    help="Site tree level to start the menu at (1 is the top level)",
)
current_option = click.option(
    "--current",
    default=None,
    help="Link of the page the menu is rendered for",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)


@click.group()
def cli() -> None:
    """nestedmenu - Nested list menus for page trees."""


@cli.command()
@config_option
@site_option
@level_option
@click.option(
    "--max-depth",
    "-d",
    type=int,
    default=None,
    help="Maximum number of nested levels (default: unlimited)",
)
@current_option
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the menu entries as JSON instead of markup",
)
@verbose_option
def render(
    config_path: Path | None,
    site_path: Path | None,
    level: int,
    max_depth: int | None,
    current: str | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Render a nested menu."""
    _configure_logging(verbose)
    try:
        config = Config.load(config_path).with_overrides(site_source=site_path)
        site = SiteLoader(config.site.source).load()
        menu = NestedMenu(site, current=_find_current(site, current), config=config.menu)

        if as_json:
            items = menu.build(level, max_depth)
            click.echo(json.dumps([item.to_dict() for item in items], indent=2))
        else:
            click.echo(menu.render_nested_menu(level, max_depth))

    except (NestedMenuError, ValueError, FileNotFoundError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@config_option
@site_option
@level_option
@current_option
@verbose_option
def check(
    config_path: Path | None,
    site_path: Path | None,
    level: int,
    current: str | None,
    verbose: bool,
) -> None:
    """Check whether a menu exists at a level (exit code 1 if not)."""
    _configure_logging(verbose)
    try:
        config = Config.load(config_path).with_overrides(site_source=site_path)
        site = SiteLoader(config.site.source).load()
        menu = NestedMenu(site, current=_find_current(site, current), config=config.menu)
        has_menu = menu.has_nested_menu(level)
    except (NestedMenuError, ValueError, FileNotFoundError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if has_menu:
        click.echo(f"Menu available at level {level}")
    else:
        click.echo(f"No menu at level {level}")
        sys.exit(1)


@cli.command()
@config_option
@site_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@verbose_option
def serve(
    config_path: Path | None,
    site_path: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
) -> None:
    """Start the menu server."""
    from nestedmenu.server import run_server

    _configure_logging(verbose)
    config = Config.load(config_path).with_overrides(
        host=host,
        port=port,
        site_source=site_path,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Site definition: {config.site.source}")

    run_server(config)


def _find_current(site: Site, path: str | None) -> Page | None:
    """Look up the current page, failing for unknown links."""
    if path is None:
        return None
    page = site.get_page(path)
    if page is None:
        raise NestedMenuError(f"Page not found: {path}")
    return page


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":
    cli()
