"""Mount point listing backed by psutil.

This is the collaborator that feeds the disk report: it enumerates
mounted filesystems and their capacity. Mount points whose usage
cannot be read are skipped with a debug log entry.
"""

import logging

import psutil

from filebyte.disk.models import MountPoint

logger = logging.getLogger(__name__)


def list_mount_points(all_partitions: bool = False) -> list[MountPoint]:
    """List mounted filesystems with capacity figures.

    Args:
        all_partitions: Include pseudo and virtual filesystems.

    Returns:
        Mount points in the order reported by the operating system.
    """
    mounts: list[MountPoint] = []
    for part in psutil.disk_partitions(all=all_partitions):
        try:
            usage = psutil.disk_usage(part.mountpoint)
        except (PermissionError, OSError) as e:
            logger.debug("Skipping mount point %s: %s", part.mountpoint, e)
            continue
        mounts.append(
            MountPoint(
                device=part.device or part.mountpoint,
                mount_point=part.mountpoint,
                total_bytes=usage.total,
                used_bytes=usage.used,
                filesystem_type=part.fstype,
            )
        )
    return mounts
