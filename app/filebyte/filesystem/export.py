"""Serialization of entry collections to JSON and CSV.

Both formats share one stable column set. Export never reorders
entries: it writes exactly the sequence held by the document.
"""

import csv
import io
import json
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from filebyte import __version__
from filebyte.filesystem.errors import WriteError
from filebyte.filesystem.filters import NO_FILTER, EntryFilter
from filebyte.filesystem.models import Entry

EXPORT_FIELDS: tuple[str, ...] = (
    "path",
    "name",
    "kind",
    "size_bytes",
    "modified_at",
    "permissions",
    "mime",
)


class ExportFormat(str, Enum):
    """Supported export file formats."""

    JSON = "json"
    CSV = "csv"

    @classmethod
    def from_path(cls, path: Path) -> "ExportFormat":
        """Infer the format from a destination's suffix.

        Raises:
            WriteError: If the suffix is neither ``.json`` nor ``.csv``.
        """
        suffix = path.suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            msg = f"Cannot infer export format from '{path.name}' (use .json or .csv)"
            raise WriteError(msg, str(path)) from None


@dataclass(frozen=True, slots=True)
class ExportMetadata:
    """Context recorded alongside exported entries.

    Attributes:
        root: Root path that was analyzed.
        generated_at: ISO 8601 timestamp of document creation.
        recursive: Whether the walk was recursive.
        filters: Pattern text of the applied filter.
        filebyte_version: Version of filebyte that produced the export.
    """

    root: str
    generated_at: str
    recursive: bool
    filters: dict[str, Any]
    filebyte_version: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "root": self.root,
            "generated_at": self.generated_at,
            "recursive": self.recursive,
            "filters": dict(self.filters),
            "filebyte_version": self.filebyte_version,
        }


@dataclass(frozen=True, slots=True)
class ExportDocument:
    """Ordered entries plus metadata, format-agnostic until serialized."""

    entries: tuple[Entry, ...]
    metadata: ExportMetadata

    @classmethod
    def create(
        cls,
        entries: list[Entry] | tuple[Entry, ...],
        root: str,
        *,
        recursive: bool = False,
        entry_filter: EntryFilter = NO_FILTER,
    ) -> "ExportDocument":
        """Create a document with auto-generated metadata."""
        metadata = ExportMetadata(
            root=root,
            generated_at=datetime.now(tz=UTC).isoformat(),
            recursive=recursive,
            filters=entry_filter.describe(),
            filebyte_version=__version__,
        )
        return cls(entries=tuple(entries), metadata=metadata)


def entry_to_record(entry: Entry) -> dict[str, Any]:
    """Map an entry onto the stable export columns."""
    return {
        "path": entry.path,
        "name": entry.name,
        "kind": entry.kind.value,
        "size_bytes": entry.size_bytes,
        "modified_at": entry.modified_at.isoformat(),
        "permissions": entry.permissions,
        "mime": entry.mime_guess,
    }


def render_json(document: ExportDocument, *, with_metadata: bool = False) -> str:
    """Serialize to JSON: a bare object array, or wrapped with metadata."""
    records = [entry_to_record(e) for e in document.entries]
    payload: object = records
    if with_metadata:
        payload = {"metadata": document.metadata.to_dict(), "entries": records}
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_csv(document: ExportDocument) -> str:
    """Serialize to CSV with a header row and RFC 4180 quoting."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_FIELDS, quoting=csv.QUOTE_MINIMAL)
    writer.writeheader()
    for entry in document.entries:
        record = entry_to_record(entry)
        if record["mime"] is None:
            record["mime"] = ""
        writer.writerow(record)
    return buffer.getvalue()


def export_document(
    document: ExportDocument,
    destination: Path,
    export_format: ExportFormat | None = None,
    *,
    with_metadata: bool = False,
) -> Path:
    """Write ``document`` to ``destination``.

    Args:
        document: Entries and metadata to write.
        destination: Output file path.
        export_format: Format to use; inferred from the suffix when None.
        with_metadata: Wrap JSON output with a metadata object.

    Returns:
        Resolved path that was written.

    Raises:
        WriteError: If the destination is a directory, the format cannot
            be inferred, or the file cannot be written.
    """
    destination = destination.expanduser().resolve()
    if destination.is_dir():
        raise WriteError(f"Export path is a directory: {destination}", str(destination))

    fmt = export_format or ExportFormat.from_path(destination)
    if fmt == ExportFormat.JSON:
        content = render_json(document, with_metadata=with_metadata)
    else:
        content = render_csv(document)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8", newline="")
    except OSError as e:
        raise WriteError(f"Failed to export to {destination}: {e.strerror or e}", str(destination)) from e
    return destination
