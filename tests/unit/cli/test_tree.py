"""Unit tests for the tree command."""

import json
from pathlib import Path

import pytest
from filebyte.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def _config(isolated_config: Path) -> Path:
    return isolated_config


class TestTreeCommand:
    """Tests for filebyte tree."""

    def test_renders_connectors(self, sample_tree: Path) -> None:
        """The tree starts at the root name and draws connectors."""
        result = runner.invoke(app, ["tree", str(sample_tree)])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "root/"
        assert "├── docs/" in lines
        assert "└── c.txt" in lines
        assert "│   └── pkg/" not in lines
        assert "│   ├── pkg/" in lines

    def test_max_depth(self, sample_tree: Path) -> None:
        """--max-depth stops descending past the given level."""
        result = runner.invoke(app, ["tree", str(sample_tree), "-d", "1"])

        assert result.exit_code == 0
        assert "readme.md" not in result.stdout
        assert "Skipped" in result.stdout

    def test_show_size(self, sample_tree: Path) -> None:
        """--show-size appends file sizes."""
        result = runner.invoke(app, ["tree", str(sample_tree), "--show-size"])

        assert result.exit_code == 0
        assert "a.txt (12 B)" in result.stdout

    def test_aggregate(self, sample_tree: Path) -> None:
        """--aggregate shows recursive directory totals."""
        result = runner.invoke(app, ["tree", str(sample_tree), "-a"])

        assert result.exit_code == 0
        assert "docs/ (19 B)" in result.stdout

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing root exits with code 1."""
        result = runner.invoke(app, ["tree", str(tmp_path / "missing")])

        assert result.exit_code == 1

    def test_export_pre_order(self, sample_tree: Path, tmp_path: Path) -> None:
        """Exported entries follow the rendered line order."""
        destination = tmp_path / "tree.json"

        result = runner.invoke(app, ["tree", str(sample_tree), "-o", str(destination)])

        assert result.exit_code == 0
        names = [r["name"] for r in json.loads(destination.read_text())]
        assert names[:4] == ["docs", "notes.txt", "readme.md", "src"]
        assert len(names) == 11
