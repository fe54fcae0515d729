"""Configuration module for driveindex."""

from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    return Path(__file__).parent.parent


@dataclass
class ScannerConfig:
    batch_size: int = 100
    progress_interval: int = 100


@dataclass
class LocatorConfig:
    sample_size: int = 5


@dataclass
class Config:
    database_path: Path = field(default_factory=lambda: _get_project_root() / "data" / "drives.db")
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    locator: LocatorConfig = field(default_factory=LocatorConfig)
    search_limit: int = 1000
