"""Filesystem inspection module.

This module provides the entry probe, directory traversal with
filtering and size aggregation, ordering, duplicate detection, tree
rendering, statistics and export for the filesystem domain.
"""

from filebyte.filesystem.duplicates import DuplicateFinder, DuplicateGroup, find_duplicates
from filebyte.filesystem.errors import (
    AccessError,
    FilebyteError,
    InvalidFilterError,
    PathNotFoundError,
    ReadError,
    WriteError,
)
from filebyte.filesystem.export import ExportDocument, ExportFormat, export_document
from filebyte.filesystem.filters import EntryFilter
from filebyte.filesystem.models import Entry, EntryKind, SkippedEntry, SkipReason
from filebyte.filesystem.probe import probe
from filebyte.filesystem.sorting import SortKey, sort_entries
from filebyte.filesystem.traverser import Traverser, walk
from filebyte.filesystem.tree import TreeNode, build_tree, render_tree

__all__ = [
    "AccessError",
    "DuplicateFinder",
    "DuplicateGroup",
    "Entry",
    "EntryFilter",
    "EntryKind",
    "ExportDocument",
    "ExportFormat",
    "FilebyteError",
    "InvalidFilterError",
    "PathNotFoundError",
    "ReadError",
    "SkipReason",
    "SkippedEntry",
    "SortKey",
    "Traverser",
    "TreeNode",
    "WriteError",
    "build_tree",
    "export_document",
    "find_duplicates",
    "probe",
    "render_tree",
    "sort_entries",
    "walk",
]
