"""Unit tests for JSON and CSV export."""

import csv
import io
import json
from collections.abc import Callable
from pathlib import Path

import pytest
from filebyte import __version__
from filebyte.filesystem.errors import WriteError
from filebyte.filesystem.export import (
    EXPORT_FIELDS,
    ExportDocument,
    ExportFormat,
    export_document,
    render_csv,
    render_json,
)
from filebyte.filesystem.filters import EntryFilter
from filebyte.filesystem.models import Entry, EntryKind


@pytest.fixture
def document(make_entry: Callable[..., Entry]) -> ExportDocument:
    """Three entries in a deliberately unsorted order."""
    entries = [
        make_entry("zeta.txt", size_bytes=30, mime_guess="text/plain"),
        make_entry("alpha", kind=EntryKind.DIRECTORY),
        make_entry("mid.bin", size_bytes=10),
    ]
    return ExportDocument.create(
        entries,
        "/data",
        recursive=True,
        entry_filter=EntryFilter.compile(exclude="^tmp"),
    )


class TestExportFormat:
    """Tests for ExportFormat.from_path."""

    def test_infers_json(self) -> None:
        """A .json suffix selects JSON."""
        assert ExportFormat.from_path(Path("out.JSON")) == ExportFormat.JSON

    def test_infers_csv(self) -> None:
        """A .csv suffix selects CSV."""
        assert ExportFormat.from_path(Path("out.csv")) == ExportFormat.CSV

    def test_unknown_suffix(self) -> None:
        """Other suffixes raise WriteError."""
        with pytest.raises(WriteError, match="Cannot infer export format"):
            ExportFormat.from_path(Path("out.xml"))


class TestRenderJson:
    """Tests for render_json function."""

    def test_round_trip_preserves_order(self, document: ExportDocument) -> None:
        """Parsing the output gives the same paths and sizes in the same order."""
        records = json.loads(render_json(document))

        assert len(records) == 3
        assert [(r["path"], r["size_bytes"]) for r in records] == [
            ("/data/zeta.txt", 30),
            ("/data/alpha", 0),
            ("/data/mid.bin", 10),
        ]

    def test_stable_keys(self, document: ExportDocument) -> None:
        """Every object carries exactly the export columns."""
        records = json.loads(render_json(document))
        assert all(tuple(r) == EXPORT_FIELDS for r in records)
        assert records[0]["modified_at"] == "2024-01-01T00:00:00+00:00"
        assert records[0]["permissions"] == "rw-r--r--"
        assert records[1]["kind"] == "directory"
        assert records[1]["mime"] is None

    def test_with_metadata(self, document: ExportDocument) -> None:
        """Metadata wraps the entries when requested."""
        payload = json.loads(render_json(document, with_metadata=True))

        assert payload["metadata"]["root"] == "/data"
        assert payload["metadata"]["recursive"] is True
        assert payload["metadata"]["filters"]["exclude"] == "^tmp"
        assert payload["metadata"]["filebyte_version"] == __version__
        assert len(payload["entries"]) == 3


class TestRenderCsv:
    """Tests for render_csv function."""

    def test_header_and_rows(self, document: ExportDocument) -> None:
        """Output has a header row followed by one row per entry."""
        rows = list(csv.reader(io.StringIO(render_csv(document))))

        assert tuple(rows[0]) == EXPORT_FIELDS
        assert [r[0] for r in rows[1:]] == ["/data/zeta.txt", "/data/alpha", "/data/mid.bin"]
        assert rows[2][6] == ""

    def test_quotes_special_characters(self, make_entry: Callable[..., Entry]) -> None:
        """Fields containing commas or quotes are quoted and escaped."""
        entry = make_entry('odd, "name".txt')
        text = render_csv(ExportDocument.create([entry], "/data"))

        assert '"odd, ""name"".txt"' in text
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1][1] == 'odd, "name".txt'


class TestExportDocument:
    """Tests for export_document function."""

    def test_writes_json(self, document: ExportDocument, tmp_path: Path) -> None:
        """Writing to a .json path produces parseable JSON."""
        written = export_document(document, tmp_path / "out" / "entries.json")

        assert written == (tmp_path / "out" / "entries.json").resolve()
        assert len(json.loads(written.read_text())) == 3

    def test_explicit_format_overrides_suffix(self, document: ExportDocument, tmp_path: Path) -> None:
        """An explicit format wins over the file suffix."""
        written = export_document(document, tmp_path / "entries.txt", ExportFormat.CSV)
        assert written.read_text().startswith(",".join(EXPORT_FIELDS))

    def test_directory_destination(self, document: ExportDocument, tmp_path: Path) -> None:
        """A directory destination raises WriteError."""
        with pytest.raises(WriteError, match="is a directory"):
            export_document(document, tmp_path)

    def test_unwritable_destination(self, document: ExportDocument, tmp_path: Path) -> None:
        """A parent that is a file raises WriteError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(WriteError, match="Failed to export"):
            export_document(document, blocker / "out.json")
