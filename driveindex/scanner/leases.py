"""Per-drive scan leases."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ScanAlreadyInProgressError(Exception):
    """Raised when a scan is requested for a drive that is already being scanned."""


class ScanLeases:
    """Tracks which drives have a scan in flight."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._active: set[str] = set()

    def acquire(self, drive_id: str) -> None:
        with self._lock:
            if drive_id in self._active:
                raise ScanAlreadyInProgressError(f"A scan is already running for drive {drive_id}")
            self._active.add(drive_id)

    def release(self, drive_id: str) -> None:
        with self._lock:
            self._active.discard(drive_id)

    def is_active(self, drive_id: str) -> bool:
        with self._lock:
            return drive_id in self._active

    @contextmanager
    def hold(self, drive_id: str) -> Iterator[None]:
        self.acquire(drive_id)
        try:
            yield
        finally:
            self.release(drive_id)


SCAN_LEASES = ScanLeases()
