"""Scanner module for filesystem traversal."""

from .categories import CATEGORY_GROUPS, categories_for_group, classify
from .disk import CapacityProbeError, probe_disk_space
from .filesystem import normalize_path, walk_directory
from .leases import SCAN_LEASES, ScanAlreadyInProgressError, ScanLeases
from .progress import ProgressReporter, ScanProgress
from .scanner import (
    CancellationToken,
    InvalidPathError,
    PathNotFoundError,
    ScanCancelledError,
    Scanner,
)
from .writer import BatchWriteError, BatchWriter

__all__ = [
    "Scanner",
    "CancellationToken",
    "classify",
    "categories_for_group",
    "CATEGORY_GROUPS",
    "walk_directory",
    "normalize_path",
    "probe_disk_space",
    "BatchWriter",
    "ProgressReporter",
    "ScanProgress",
    "ScanLeases",
    "SCAN_LEASES",
    "InvalidPathError",
    "PathNotFoundError",
    "ScanAlreadyInProgressError",
    "ScanCancelledError",
    "CapacityProbeError",
    "BatchWriteError",
]
