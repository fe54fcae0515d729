"""Drive Indexer - Find creative assets across external drives without mounting them."""

__version__ = "0.1.0"

from driveindex.catalog import Catalog
from driveindex.database import Database
from driveindex.locator import DriveLocator
from driveindex.scanner import Scanner

__all__ = ["Catalog", "Database", "DriveLocator", "Scanner"]
