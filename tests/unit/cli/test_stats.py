"""Unit tests for the stats command."""

from pathlib import Path

import pytest
from filebyte.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def _config(isolated_config: Path) -> Path:
    return isolated_config


class TestStatsCommand:
    """Tests for filebyte stats."""

    def test_recursive_summary(self, sample_tree: Path) -> None:
        """All tables are printed for a recursive walk."""
        result = runner.invoke(app, ["stats", str(sample_tree)])

        assert result.exit_code == 0
        for title in ("Summary", "File Types (8 files)", "Size Distribution", "Age Distribution"):
            assert title in result.stdout
        assert "text/plain" in result.stdout
        assert "Today" in result.stdout

    def test_non_recursive(self, sample_tree: Path) -> None:
        """-R only counts the immediate children."""
        result = runner.invoke(app, ["stats", str(sample_tree), "-R"])

        assert result.exit_code == 0
        assert "File Types (4 files)" in result.stdout

    def test_top_limits_types(self, sample_tree: Path) -> None:
        """--top limits the number of type rows."""
        result = runner.invoke(app, ["stats", str(sample_tree), "-t", "1"])

        assert result.exit_code == 0
        assert "text/plain" in result.stdout
        assert "text/x-python" not in result.stdout

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty directory prints a notice."""
        result = runner.invoke(app, ["stats", str(tmp_path)])

        assert result.exit_code == 0
        assert "No entries found." in result.stdout

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path exits with code 1."""
        result = runner.invoke(app, ["stats", str(tmp_path / "missing")])

        assert result.exit_code == 1
