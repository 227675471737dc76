"""Unit tests for user settings."""

from pathlib import Path

import pytest
from filebyte.core.settings import (
    FilebyteSettings,
    SettingsError,
    SettingsParseError,
    load_settings,
    save_settings,
)
from filebyte.filesystem.sorting import SortKey
from filebyte.utils.units import SizeUnit
from pydantic import ValidationError


class TestFilebyteSettings:
    """Tests for FilebyteSettings model."""

    def test_defaults(self) -> None:
        """Defaults match the documented option defaults."""
        settings = FilebyteSettings()

        assert settings.size_unit == SizeUnit.AUTO
        assert settings.sort_by == SortKey.NAME
        assert settings.follow_symlinks is True
        assert settings.max_tree_depth == 64
        assert settings.hash_workers == 1
        assert settings.color is True

    def test_long_unit_name(self) -> None:
        """size_unit accepts long names."""
        assert FilebyteSettings(size_unit="megabytes").size_unit == SizeUnit.MB  # type: ignore[arg-type]

    def test_invalid_unit(self) -> None:
        """Unknown units are rejected."""
        with pytest.raises(ValidationError):
            FilebyteSettings(size_unit="furlongs")  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("max_tree_depth", 0),
            ("max_tree_depth", 5000),
            ("hash_workers", 0),
            ("hash_workers", 65),
            ("hash_chunk_size", 1024),
        ],
    )
    def test_out_of_range(self, field: str, value: int) -> None:
        """Numeric fields are range checked."""
        with pytest.raises(ValidationError):
            FilebyteSettings.model_validate({field: value})

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            FilebyteSettings.model_validate({"colour": False})


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing file is not an error."""
        assert load_settings(tmp_path / "config.toml") == FilebyteSettings()

    def test_partial_file(self, tmp_path: Path) -> None:
        """Omitted keys keep their defaults."""
        path = tmp_path / "config.toml"
        path.write_text('size_unit = "kb"\nhash_workers = 4\n')

        settings = load_settings(path)

        assert settings.size_unit == SizeUnit.KB
        assert settings.hash_workers == 4
        assert settings.sort_by == SortKey.NAME

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML raises SettingsParseError."""
        path = tmp_path / "config.toml"
        path.write_text("size_unit = [")

        with pytest.raises(SettingsParseError, match="Invalid TOML syntax"):
            load_settings(path)

    def test_invalid_schema(self, tmp_path: Path) -> None:
        """Values outside the schema raise SettingsError."""
        path = tmp_path / "config.toml"
        path.write_text("max_tree_depth = -3\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_settings(path)

    def test_default_path(self, isolated_config: Path) -> None:
        """Without an argument the XDG settings path is read."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text("color = false\n")

        assert load_settings().color is False


class TestSaveSettings:
    """Tests for save_settings function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved settings load back unchanged."""
        settings = FilebyteSettings(size_unit=SizeUnit.GB, sort_by=SortKey.SIZE, hash_workers=8)
        path = save_settings(settings, tmp_path / "nested" / "config.toml")

        assert path == tmp_path / "nested" / "config.toml"
        assert load_settings(path) == settings

    def test_writes_plain_values(self, tmp_path: Path) -> None:
        """Enums are stored by value."""
        path = save_settings(FilebyteSettings(size_unit=SizeUnit.MB), tmp_path / "config.toml")

        assert 'size_unit = "mb"' in path.read_text()

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The temporary file is renamed into place."""
        save_settings(FilebyteSettings(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_unwritable_parent(self, tmp_path: Path) -> None:
        """A parent that is a file raises SettingsError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(SettingsError, match="Failed to write settings"):
            save_settings(FilebyteSettings(), blocker / "config.toml")
