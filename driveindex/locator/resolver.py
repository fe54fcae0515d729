"""Drive identity resolution by sampled file probing."""

import logging
import math
import os
from collections.abc import Callable, Sequence

from driveindex.database import Drive, DriveLocation, FileStore
from driveindex.locator.volumes import enumerate_volume_roots, join_root, split_volume_root
from driveindex.scanner.filesystem import normalize_path, to_fs_path

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 5

NOT_CONNECTED = DriveLocation(connected=False, location=None)


def match_threshold(sample_size: int) -> int:
    """Simple majority of the sample, rounded up."""
    return math.ceil(sample_size / 2)


def count_matches(root: str, relative_paths: Sequence[str]) -> int:
    matches = 0
    for relative_path in relative_paths:
        if os.path.exists(to_fs_path(join_root(root, relative_path))):
            matches += 1
    return matches


class DriveLocator:
    """Finds where a previously scanned drive is currently mounted.

    A handful of indexed paths is sampled and probed below candidate roots:
    the drive's last known scan path first, then the same directory below
    every available volume root. A root is accepted when a majority of the
    sampled files exist there. Nothing is written; persisting a new location
    is up to the caller.
    """

    def __init__(
        self,
        files: FileStore,
        enumerate_roots: Callable[[], list[str]] = enumerate_volume_roots,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
    ):
        self.files = files
        self.enumerate_roots = enumerate_roots
        self.sample_size = sample_size

    def locate(self, drive: Drive) -> DriveLocation:
        if not drive.is_scanned:
            return NOT_CONNECTED

        sample = self.files.sample_paths(drive.id, self.sample_size)
        if not sample:
            return NOT_CONNECTED
        threshold = match_threshold(len(sample))

        tried: set[str] = set()
        if drive.scan_path:
            fast_root = normalize_path(drive.scan_path)
            tried.add(fast_root)
            if self._accepts(fast_root, sample, threshold):
                return DriveLocation(connected=True, location=fast_root)

        for candidate in self._candidate_roots(drive.scan_path):
            if candidate in tried:
                continue
            tried.add(candidate)
            if self._accepts(candidate, sample, threshold):
                logger.info("Drive %s found at %s", drive.name, candidate)
                return DriveLocation(connected=True, location=candidate)

        logger.debug("Drive %s not found under %d candidate roots", drive.name, len(tried))
        return NOT_CONNECTED

    def _candidate_roots(self, scan_path: str | None) -> list[str]:
        remainder = split_volume_root(scan_path)[1] if scan_path else ""
        try:
            volume_roots = self.enumerate_roots()
        except OSError as e:
            logger.warning("Could not enumerate volume roots: %s", e)
            return []
        return [join_root(root, remainder) for root in volume_roots]

    def _accepts(self, root: str, sample: Sequence[str], threshold: int) -> bool:
        matches = count_matches(root, sample)
        logger.debug("%d of %d sampled files found under %s", matches, len(sample), root)
        return matches >= threshold
