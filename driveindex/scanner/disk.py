"""Volume capacity probing."""

import shutil

from driveindex.database.models import DiskUsage
from driveindex.scanner.filesystem import to_fs_path


class CapacityProbeError(Exception):
    """Raised when the capacity of the volume holding a path cannot be read."""


def probe_disk_space(root_path: str) -> DiskUsage:
    """Return total, free and used bytes of the volume holding root_path."""
    try:
        usage = shutil.disk_usage(to_fs_path(root_path))
    except OSError as e:
        raise CapacityProbeError(f"Could not read disk usage for {root_path}: {e}") from e
    return DiskUsage(total=usage.total, free=usage.free, used=usage.used)
