"""Tests for CLI commands."""

import json
from pathlib import Path

from click.testing import CliRunner
from nestedmenu.cli import cli


class TestRenderCommand:
    """Tests for the render command."""

    def test__top_level__prints_markup(self, site_file: Path) -> None:
        """Print the top-level menu markup."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "--site", str(site_file)])

        assert result.exit_code == 0
        assert result.output.startswith(
            '<ul class="nested-menu nested-menu-level-1 nested-menu-nesting-1">'
        )
        assert ">Contact Us</a>" in result.output

    def test__current_page__opens_section(self, site_file: Path) -> None:
        """Open the section of the current page."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", "-s", str(site_file), "--current", "/about-us/our-staff/"],
        )

        assert result.exit_code == 0
        assert '<li class="section open">' in result.output
        assert '<li class="first current open">' in result.output
        assert ">Jane Doe</a>" in result.output

    def test__max_depth__limits_nesting(self, site_file: Path) -> None:
        """Stop nesting at the maximum depth."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "render",
                "-s",
                str(site_file),
                "--current",
                "/about-us/our-staff/jane/",
                "--max-depth",
                "2",
            ],
        )

        assert result.exit_code == 0
        assert "nested-menu-nesting-2" in result.output
        assert "nested-menu-nesting-3" not in result.output

    def test__level_two__starts_below_section(self, site_file: Path) -> None:
        """Start the menu at the second level."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", "-s", str(site_file), "-l", "2", "--current", "/about-us/"],
        )

        assert result.exit_code == 0
        assert result.output.startswith(
            '<ul class="nested-menu nested-menu-level-2 nested-menu-nesting-1">'
        )
        assert "Home" not in result.output

    def test__json__prints_entries(self, site_file: Path) -> None:
        """Print entries as JSON."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", "-s", str(site_file), "--json", "--current", "/about-us/"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [item["title"] for item in data] == ["Home", "About Us", "Contact Us"]
        assert data[1]["classes"] == ["current", "open"]
        assert [c["title"] for c in data[1]["children"]] == ["Our Staff", "Another Page"]

    def test__unknown_current__fails(self, site_file: Path) -> None:
        """Fail when the current page does not exist."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["render", "-s", str(site_file), "--current", "/nope/"],
        )

        assert result.exit_code == 1
        assert "Page not found: /nope/" in result.output

    def test__invalid_level__fails(self, site_file: Path) -> None:
        """Fail for levels below 1."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "-s", str(site_file), "-l", "0"])

        assert result.exit_code == 1
        assert "Menu level must be at least 1" in result.output

    def test__invalid_site_file__fails(self, tmp_path: Path) -> None:
        """Fail for an invalid site definition."""
        site_file = tmp_path / "site.toml"
        site_file.write_text("[[pages]]\nlink = 1\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["render", "-s", str(site_file)])

        assert result.exit_code == 1
        assert "Invalid site file" in result.output

    def test__config_file__provides_site_and_template(
        self, tmp_path: Path, site_file: Path
    ) -> None:
        """Use site source and item template from the config file."""
        config_file = tmp_path / "nestedmenu.toml"
        config_file.write_text(
            f'[site]\nsource = "{site_file.name}"\n\n'
            '[menu]\nitem_template = "<li>{title}{children}</li>"\n'
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["render", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "<li>Home</li>" in result.output

    def test__missing_site_option_file__fails(self, tmp_path: Path) -> None:
        """Fail when the --site file doesn't exist."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", "-s", str(tmp_path / "missing.toml")])

        assert result.exit_code != 0


class TestCheckCommand:
    """Tests for the check command."""

    def test__menu_exists__exits_zero(self, site_file: Path) -> None:
        """Exit 0 when the level has a menu."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "-s", str(site_file), "-l", "2", "--current", "/about-us/"],
        )

        assert result.exit_code == 0
        assert "Menu available at level 2" in result.output

    def test__no_menu__exits_one(self, site_file: Path) -> None:
        """Exit 1 when the level has no menu."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "-s", str(site_file), "-l", "2", "--current", "/contact-us/"],
        )

        assert result.exit_code == 1
        assert "No menu at level 2" in result.output

    def test__level_two_without_current__exits_one(self, site_file: Path) -> None:
        """Report no menu below level 1 without a current page."""
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-s", str(site_file), "-l", "2"])

        assert result.exit_code == 1
        assert "No menu at level 2" in result.output
