"""Unit tests for the config CLI commands and global options."""

from pathlib import Path

from dirkit import __version__
from dirkit.cli.main import app
from dirkit.core.config import load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestGlobalOptions:
    """Tests for options handled by the main callback."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"dirkit version {__version__}" in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_verbose(self, xdg_dirs: dict[str, str], tree: Path) -> None:
        """--verbose is accepted before a command."""
        result = runner.invoke(app, ["--verbose", "ls", str(tree), "-f", "json"])

        assert result.exit_code == 0


class TestConfigInit:
    """Tests for config init."""

    def test_writes_default(self, xdg_dirs: dict[str, str]) -> None:
        """init writes a default config at the XDG location."""
        path = Path(xdg_dirs["XDG_CONFIG_HOME"]) / "dirkit" / "config.toml"

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert load_config(path).search_limit == 1

    def test_refuses_existing(self, tmp_path: Path) -> None:
        """init keeps an existing file unless --force is given."""
        path = tmp_path / "config.toml"
        path.write_text("search_limit = 9\n")

        refused = runner.invoke(app, ["-c", str(path), "config", "init"])

        assert refused.exit_code == 1
        assert load_config(path).search_limit == 9

        forced = runner.invoke(app, ["-c", str(path), "config", "init", "--force"])

        assert forced.exit_code == 0
        assert load_config(path).search_limit == 1


class TestConfigShow:
    """Tests for config show."""

    def test_defaults(self, xdg_dirs: dict[str, str]) -> None:
        """show reports defaults when no file exists."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "search_limit" in result.stdout
        assert "Showing defaults" in result.stdout

    def test_from_file(self, tmp_path: Path) -> None:
        """show reports values from the selected file."""
        path = tmp_path / "config.toml"
        path.write_text("search_limit = 42\nlocal_mode = false\n")

        result = runner.invoke(app, ["-c", str(path), "config", "show"])

        assert result.exit_code == 0
        assert "42" in result.stdout
        assert "false" in result.stdout
        assert "Showing defaults" not in result.stdout
