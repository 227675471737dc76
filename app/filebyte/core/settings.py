"""User settings for filebyte.

Settings provide defaults for command options. They are stored in
~/.config/filebyte/config.toml; every field is optional and command
line options always take precedence.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from filebyte.core.paths import get_settings_path
from filebyte.filesystem.duplicates import DEFAULT_CHUNK_SIZE
from filebyte.filesystem.sorting import SortKey
from filebyte.filesystem.tree import DEFAULT_MAX_DEPTH
from filebyte.utils.units import SizeUnit

logger = logging.getLogger(__name__)


class FilebyteSettings(BaseModel):
    """Default option values for filebyte commands.

    Attributes:
        size_unit: Unit used to render sizes.
        sort_by: Secondary sort key for listings.
        follow_symlinks: Descend through symlinked directories.
        max_tree_depth: Depth guard for tree rendering and recursive walks.
        hash_chunk_size: Bytes read per iteration while hashing.
        hash_workers: Threads used to hash duplicate candidates.
        color: Colorize terminal output.
    """

    model_config = ConfigDict(extra="forbid")

    size_unit: Annotated[SizeUnit, Field(description="Size display unit")] = SizeUnit.AUTO
    sort_by: Annotated[SortKey, Field(description="Listing sort key")] = SortKey.NAME
    follow_symlinks: Annotated[
        bool,
        Field(description="Follow symlinked directories when recursing"),
    ] = True
    max_tree_depth: Annotated[
        int,
        Field(ge=1, le=4096, description="Maximum tree depth (1-4096)"),
    ] = DEFAULT_MAX_DEPTH
    hash_chunk_size: Annotated[
        int,
        Field(ge=4096, le=64 * 1024 * 1024, description="Hash read size in bytes"),
    ] = DEFAULT_CHUNK_SIZE
    hash_workers: Annotated[
        int,
        Field(ge=1, le=64, description="Hashing threads (1-64)"),
    ] = 1
    color: Annotated[bool, Field(description="Colorize output")] = True

    @field_validator("size_unit", mode="before")
    @classmethod
    def parse_size_unit(cls, v: object) -> object:
        """Accept long unit names such as "megabytes"."""
        if isinstance(v, str) and not isinstance(v, SizeUnit):
            return SizeUnit.parse(v)
        return v


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> FilebyteSettings:
    """Load settings from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated FilebyteSettings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or the content
            doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return FilebyteSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return FilebyteSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: FilebyteSettings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The settings to save.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = settings.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
