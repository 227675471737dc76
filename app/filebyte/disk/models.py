"""Disk domain models.

Mount point capacity records supplied by the disk collaborator and
consumed by the disk report.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MountPoint:
    """Capacity figures for one mounted filesystem.

    Attributes:
        device: Device name or identifier (e.g. ``/dev/nvme0n1p2``).
        mount_point: Directory where the filesystem is mounted.
        total_bytes: Total capacity in bytes.
        used_bytes: Bytes in use.
        filesystem_type: Filesystem type (e.g. ``ext4``).
    """

    device: str
    mount_point: str
    total_bytes: int
    used_bytes: int
    filesystem_type: str

    def __post_init__(self) -> None:
        """Validate capacity figures after initialization."""
        if not self.mount_point:
            msg = "Mount point cannot be empty"
            raise ValueError(msg)
        if self.total_bytes < 0 or self.used_bytes < 0:
            msg = "Capacity figures cannot be negative"
            raise ValueError(msg)

    @property
    def available_bytes(self) -> int:
        return max(0, self.total_bytes - self.used_bytes)

    @property
    def usage_percent(self) -> float:
        """Used share of total capacity (0.0 for zero-sized filesystems)."""
        if self.total_bytes == 0:
            return 0.0
        return self.used_bytes / self.total_bytes * 100.0

    @property
    def name(self) -> str:
        """Short device name (last path component of the device)."""
        return self.device.rstrip("/").rsplit("/", 1)[-1] or self.device
