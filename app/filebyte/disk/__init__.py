"""Disk capacity reporting.

Mount point records come from :mod:`filebyte.disk.source`; the report
module only formats them.
"""

from filebyte.disk.models import MountPoint
from filebyte.disk.report import DiskRow, build_report, find_mount, format_mount
from filebyte.disk.source import list_mount_points

__all__ = [
    "DiskRow",
    "MountPoint",
    "build_report",
    "find_mount",
    "format_mount",
    "list_mount_points",
]
