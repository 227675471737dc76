"""Unit tests for the main CLI application."""

from pathlib import Path

from filebyte import __version__
from filebyte.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"filebyte version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        """--help lists every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("ls", "tree", "dupes", "info", "stats", "disk", "config"):
            assert command in result.stdout

    def test_invalid_settings_fall_back_to_defaults(self, isolated_config: Path, sample_tree: Path) -> None:
        """A broken settings file warns but does not stop the command."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text("hash_workers = [")

        result = runner.invoke(app, ["ls", str(sample_tree)])

        assert result.exit_code == 0
        assert "using default settings" in result.output
        assert "6 entries" in result.stdout

    def test_settings_provide_defaults(self, isolated_config: Path, sample_tree: Path) -> None:
        """Configured size units apply when --size is omitted."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text('size_unit = "kb"\n')

        result = runner.invoke(app, ["ls", str(sample_tree)])

        assert result.exit_code == 0
        assert "0.04 KB in files" in result.stdout
