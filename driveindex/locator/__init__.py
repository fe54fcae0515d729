"""Drive identity resolution."""

from .resolver import DriveLocator, count_matches, match_threshold
from .volumes import enumerate_volume_roots, join_root, split_volume_root

__all__ = [
    "DriveLocator",
    "count_matches",
    "match_threshold",
    "enumerate_volume_roots",
    "split_volume_root",
    "join_root",
]
