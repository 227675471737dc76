"""Disk capacity report.

Formats mount point records supplied by a collaborator; this module
never enumerates devices itself.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from filebyte.disk.models import MountPoint
from filebyte.filesystem.errors import PathNotFoundError
from filebyte.utils.units import SizeUnit, format_size


@dataclass(frozen=True, slots=True)
class DiskRow:
    """Display-ready figures for one mount point."""

    device: str
    mount_point: str
    filesystem_type: str
    total: str
    used: str
    available: str
    usage: str


def format_mount(mount: MountPoint, unit: SizeUnit = SizeUnit.AUTO) -> DiskRow:
    """Render one mount point's capacity in ``unit``."""
    return DiskRow(
        device=mount.device,
        mount_point=mount.mount_point,
        filesystem_type=mount.filesystem_type,
        total=format_size(mount.total_bytes, unit),
        used=format_size(mount.used_bytes, unit),
        available=format_size(mount.available_bytes, unit),
        usage=f"{mount.usage_percent:.1f}%",
    )


def build_report(mounts: Sequence[MountPoint], unit: SizeUnit = SizeUnit.AUTO) -> list[DiskRow]:
    """Render every mount point, preserving collaborator order."""
    return [format_mount(m, unit) for m in mounts]


def find_mount(mounts: Sequence[MountPoint], identifier: str) -> MountPoint:
    """Resolve a disk identifier to a mount point.

    The identifier may be the full device path, the short device name,
    or the mount point directory.

    Raises:
        PathNotFoundError: If no mount point matches.
    """
    for mount in mounts:
        if identifier in (mount.device, mount.name, mount.mount_point):
            return mount
    raise PathNotFoundError(f"Disk '{identifier}' not found", identifier)
