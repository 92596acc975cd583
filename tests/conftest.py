"""Shared test fixtures."""

from pathlib import Path

import pytest
from nestedmenu.config import Config, MenuConfig, ServerConfig, SiteConfig
from nestedmenu.core.site import Site, SiteBuilder

SITE_TOML = """
[[pages]]
title = "Home"
link = "/"

[[pages]]
title = "About Us"
link = "/about-us/"

[[pages.children]]
title = "Our Staff"
link = "/about-us/our-staff/"

[[pages.children.children]]
title = "Jane Doe"
link = "/about-us/our-staff/jane/"

[[pages.children]]
title = "Another Page"
link = "/about-us/another-page/"

[[pages]]
title = "Contact Us"
link = "/contact-us/"
"""


@pytest.fixture
def site() -> Site:
    """Three top-level pages; About Us has two children.

    Home, About Us (Our Staff, Another Page), Contact Us
    """
    builder = SiteBuilder()
    builder.add_page("Home", "/")
    about = builder.add_page("About Us", "/about-us/")
    builder.add_page("Our Staff", "/about-us/our-staff/", about)
    builder.add_page("Another Page", "/about-us/another-page/", about)
    builder.add_page("Contact Us", "/contact-us/")
    return builder.build()


@pytest.fixture
def site_file(tmp_path: Path) -> Path:
    """Write a site definition with a three-level About Us section."""
    path = tmp_path / "site.toml"
    path.write_text(SITE_TOML)
    return path


@pytest.fixture
def test_config(site_file: Path) -> Config:
    """Create a test configuration pointing at the site_file fixture."""
    return Config(
        server=ServerConfig(),
        site=SiteConfig(source=site_file),
        menu=MenuConfig(),
    )
