"""Progress reporting utilities for scanning."""

import sys
import time
from dataclasses import dataclass, field

SCAN_COMPLETE_STATUS = "Scan complete!"


@dataclass
class ScanProgress:
    """A progress update emitted while a drive is scanned."""

    drive_id: str
    file_count: int
    status: str


@dataclass
class ScanStats:
    """Statistics for an ongoing scan operation."""

    files_scanned: int = 0
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time


class ProgressReporter:
    """Prints scan progress updates to stderr.

    Instances are callables so they can be handed to a scan as its progress
    callback. Updates closer together than ``interval`` files are dropped.
    """

    def __init__(self, interval: int = 100):
        self.interval = interval
        self.stats = ScanStats()
        self._last_report_count = 0

    def __call__(self, progress: ScanProgress) -> None:
        self.stats.files_scanned = progress.file_count
        if progress.status == SCAN_COMPLETE_STATUS:
            return
        if progress.file_count - self._last_report_count >= self.interval:
            self._print_progress(progress)
            self._last_report_count = progress.file_count

    def report_completion(self, file_count: int, total_size: int, free_space: int) -> None:
        duration = format_duration(self.stats.elapsed_seconds)
        print(f"\nScan complete: {file_count:,} files ({duration})")
        if total_size:
            print(f"Capacity: {format_bytes(total_size)}, free: {format_bytes(free_space)}")

    def _print_progress(self, progress: ScanProgress) -> None:
        print(f"[{progress.file_count:,} files] {progress.status}", file=sys.stderr)


def format_duration(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_bytes(size: int | None) -> str:
    if size is None:
        return "0 B"
    size_f = float(size)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_f < 1024:
            return f"{size_f:.2f} {unit}"
        size_f /= 1024
    return f"{size_f:.2f} PB"
