"""Volume root enumeration and volume prefix handling."""

import logging
import os
import re
import string
import subprocess
from pathlib import Path

from driveindex.scanner.filesystem import normalize_path

logger = logging.getLogger(__name__)

_LETTERED_PREFIX = re.compile(r"^([A-Za-z]:)(?:/(.*))?$")
_MOUNT_PREFIXES = (
    re.compile(r"^(/Volumes/[^/]+)(?:/(.*))?$"),
    re.compile(r"^(/run/media/[^/]+/[^/]+)(?:/(.*))?$"),
    re.compile(r"^(/media/[^/]+/[^/]+)(?:/(.*))?$"),
    re.compile(r"^(/mnt/[^/]+)(?:/(.*))?$"),
)
_FINDMNT_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")

PSEUDO_MOUNT_PREFIXES = ("/proc", "/sys", "/dev", "/run", "/snap", "/boot", "/var/lib")
REMOVABLE_MOUNT_PARENTS = ("/Volumes", "/mnt")
PER_USER_MOUNT_PARENTS = ("/media", "/run/media")


def split_volume_root(path: str) -> tuple[str, str]:
    """Split a path into its volume root and the remainder below it.

    Lettered volumes and the usual removable-media mount layouts are
    recognized. Any other path is taken to be a volume root itself.
    """
    normalized = normalize_path(path)

    match = _LETTERED_PREFIX.match(normalized)
    if match:
        return match.group(1).upper() + "/", (match.group(2) or "").strip("/")

    for pattern in _MOUNT_PREFIXES:
        match = pattern.match(normalized)
        if match:
            return match.group(1), (match.group(2) or "").strip("/")

    return normalized, ""


def join_root(root: str, remainder: str) -> str:
    root = normalize_path(root)
    if not remainder:
        return root
    if root.endswith("/"):
        return root + remainder
    return f"{root}/{remainder}"


def enumerate_volume_roots() -> list[str]:
    """List the roots of all currently available volumes."""
    if os.name == "nt":
        return lettered_volume_roots()
    return mounted_volume_roots()


def lettered_volume_roots() -> list[str]:
    roots = []
    for letter in string.ascii_uppercase:
        root = f"{letter}:/"
        try:
            if os.path.exists(root):
                roots.append(root)
        except OSError:
            continue
    return roots


def mounted_volume_roots() -> list[str]:
    try:
        targets = _findmnt_targets()
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("findmnt unavailable, listing mount directories instead: %s", e)
        return _mount_directory_children()

    roots = [t for t in targets if not _is_pseudo_mount(t)]
    for child in _mount_directory_children():
        if child not in roots:
            roots.append(child)
    return roots


def _findmnt_targets() -> list[str]:
    result = subprocess.run(
        ["findmnt", "-rn", "-o", "TARGET"],
        capture_output=True,
        text=True,
        check=True,
    )
    return [_unescape_findmnt(line) for line in result.stdout.splitlines() if line.strip()]


def _unescape_findmnt(value: str) -> str:
    return _FINDMNT_ESCAPE.sub(lambda m: chr(int(m.group(1), 16)), value.strip())


def _is_pseudo_mount(target: str) -> bool:
    if target.startswith("/run/media/"):
        return False
    return any(target == p or target.startswith(p + "/") for p in PSEUDO_MOUNT_PREFIXES)


def _mount_directory_children() -> list[str]:
    parents = [Path(p) for p in REMOVABLE_MOUNT_PARENTS]
    for per_user in PER_USER_MOUNT_PARENTS:
        parents.extend(_subdirectories(Path(per_user)))

    roots = []
    for parent in parents:
        roots.extend(child.as_posix() for child in _subdirectories(parent))
    return roots


def _subdirectories(directory: Path) -> list[Path]:
    try:
        return sorted(p for p in directory.iterdir() if p.is_dir())
    except OSError:
        return []
