"""Entry probe: turn a path into a normalized :class:`Entry`.

The probe performs read-only ``lstat``/``stat`` calls only. The entry
kind is decided once here from ``lstat`` so consumers never re-inspect
the filesystem to tell files, directories and symlinks apart.
"""

import logging
import mimetypes
import os
import stat
from datetime import UTC, datetime
from pathlib import Path

from filebyte.filesystem.errors import AccessError, PathNotFoundError
from filebyte.filesystem.models import Entry, EntryKind

logger = logging.getLogger(__name__)

# Extensions missing from the interpreter's built-in table
_EXTRA_TYPES: dict[str, str] = {
    ".md": "text/markdown",
    ".toml": "application/toml",
    ".yaml": "application/yaml",
    ".yml": "application/yaml",
    ".rs": "text/x-rust",
    ".go": "text/x-go",
    ".ts": "text/x-typescript",
    ".log": "text/plain",
    ".ini": "text/plain",
    ".cfg": "text/plain",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".mkv": "video/x-matroska",
    ".flac": "audio/flac",
    ".7z": "application/x-7z-compressed",
    ".iso": "application/x-iso9660-image",
    ".deb": "application/vnd.debian.binary-package",
}

# Built-in table only, so guesses do not depend on /etc/mime.types
_MIME_TABLE = mimetypes.MimeTypes()
for _ext, _type in _EXTRA_TYPES.items():
    _MIME_TABLE.add_type(_type, _ext)


def guess_mime(name: str) -> str | None:
    """Guess a MIME type from a file name using the static extension table.

    Args:
        name: File name or path.

    Returns:
        MIME type string, or None when the extension is unknown.
    """
    mime, _encoding = _MIME_TABLE.guess_type(name, strict=False)
    return mime


def format_permissions(mode: int, with_type: bool = False) -> str:
    """Render a mode as ``rwxr-xr-x`` (or ``drwxr-xr-x`` with the type char)."""
    text = stat.filemode(mode)
    return text if with_type else text[1:]


def _timestamp(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=UTC)


def _created_at(st: os.stat_result) -> datetime | None:
    """Return the birth time where the platform exposes one."""
    birth = getattr(st, "st_birthtime", None)
    if birth is None:
        return None
    return _timestamp(birth)


def _kind_from_mode(mode: int) -> EntryKind:
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def _link_details(path: str) -> tuple[int, bool, str | None]:
    """Resolve a symlink's reported size, broken flag and raw target.

    Returns:
        Tuple of (size_bytes, broken, target). Size is the target file
        size, or 0 when the target is missing, looping, or not a file.
    """
    try:
        target: str | None = os.readlink(path)
    except OSError:
        target = None

    try:
        target_stat = os.stat(path)
    except OSError as e:
        logger.debug("Broken symlink %s: %s", path, e)
        return 0, True, target

    if stat.S_ISREG(target_stat.st_mode):
        return target_stat.st_size, False, target
    return 0, False, target


def probe(path: str | Path) -> Entry:
    """Produce a normalized entry record for ``path``.

    Symlinks are reported as :attr:`EntryKind.SYMLINK` without being
    followed for kind detection; broken links are flagged rather than
    treated as errors. Directory sizes are always 0 here; aggregation
    is done by :class:`~filebyte.filesystem.sizing.DirectorySizer`.

    Args:
        path: Path to inspect.

    Returns:
        Entry describing the path.

    Raises:
        PathNotFoundError: If the path does not exist (or vanished).
        AccessError: If the path cannot be stat'ed due to permissions
            or another OS error.
    """
    path_str = os.fspath(path)
    try:
        st = os.lstat(path_str)
    except FileNotFoundError as e:
        raise PathNotFoundError(f"Path not found: {path_str}", path_str) from e
    except PermissionError as e:
        raise AccessError(f"Permission denied: {path_str}", path_str) from e
    except OSError as e:
        raise AccessError(f"Cannot stat {path_str}: {e.strerror or e}", path_str) from e

    kind = _kind_from_mode(st.st_mode)
    name = os.path.basename(os.path.normpath(path_str)) or path_str

    size = 0
    broken = False
    target: str | None = None
    mime: str | None = None

    if kind == EntryKind.FILE:
        size = st.st_size
        mime = guess_mime(name)
    elif kind == EntryKind.SYMLINK:
        size, broken, target = _link_details(path_str)

    return Entry(
        path=path_str,
        name=name,
        kind=kind,
        size_bytes=size,
        modified_at=_timestamp(st.st_mtime),
        created_at=_created_at(st),
        permission_bits=stat.S_IMODE(st.st_mode),
        mime_guess=mime,
        broken_link=broken,
        link_target=target,
    )
