"""CLI interface for driveindex."""

import logging
import sqlite3
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

import click

from driveindex.catalog import Catalog
from driveindex.config import Config
from driveindex.database import Database, DriveNotFoundError, DuplicateNameError
from driveindex.scanner import (
    BatchWriteError,
    CapacityProbeError,
    InvalidPathError,
    PathNotFoundError,
    ProgressReporter,
    ScanAlreadyInProgressError,
    categories_for_group,
)
from driveindex.scanner.progress import format_bytes

DATABASE_ENV_VAR = "DRIVEINDEX_DB"

USER_ERRORS = (
    DriveNotFoundError,
    DuplicateNameError,
    InvalidPathError,
    PathNotFoundError,
    ScanAlreadyInProgressError,
    BatchWriteError,
    CapacityProbeError,
    ValueError,
    sqlite3.OperationalError,
)

database_option = click.option(
    "--database",
    type=click.Path(path_type=Path),
    envvar=DATABASE_ENV_VAR,
    help="Path to database file",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log scan details to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj["config"] = Config()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@contextmanager
def _open_catalog(ctx: click.Context, database: Path | None) -> Iterator[Catalog]:
    config: Config = ctx.obj["config"]
    db_path = database or config.database_path

    try:
        with Database(db_path) as db:
            yield Catalog(db, config)
    except USER_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


@cli.command("drives")
@database_option
@click.pass_context
def list_drives(ctx: click.Context, database: Path | None) -> None:
    """List registered drives."""
    with _open_catalog(ctx, database) as catalog:
        drives = catalog.list_drives()

        if not drives:
            click.echo("No drives registered. Run 'driveindex add NAME' first.")
            return

        click.echo("-" * 90)
        header = "Name".ljust(25) + "Files".rjust(10) + "Capacity".rjust(12)
        header += "  " + "Last scanned".ljust(15) + "Path"
        click.echo(header)
        click.echo("-" * 90)

        for drive in drives:
            scanned = _format_relative_time(drive.last_scanned_at_unix)
            click.echo(
                f"{_truncate(drive.name, 24):<25}"
                f"{drive.file_count:>10,}"
                f"{format_bytes(drive.total_size):>12}  "
                f"{scanned:<15}"
                f"{drive.scan_path or '-'}"
            )


@cli.command("add")
@click.argument("name")
@click.option("--description", default=None, help="Free text shown next to the drive")
@database_option
@click.pass_context
def add_drive(
    ctx: click.Context, name: str, description: str | None, database: Path | None
) -> None:
    """Register a new drive."""
    with _open_catalog(ctx, database) as catalog:
        drive = catalog.create_drive(name, description)
        click.echo(f"Drive added: {drive.name} ({drive.id})")


@cli.command("rename")
@click.argument("drive")
@click.argument("new_name")
@database_option
@click.pass_context
def rename_drive(ctx: click.Context, drive: str, new_name: str, database: Path | None) -> None:
    """Give a drive a new name."""
    with _open_catalog(ctx, database) as catalog:
        updated = catalog.update_drive(catalog.find_drive(drive).id, name=new_name)
        click.echo(f"Drive renamed to {updated.name}")


@cli.command("describe")
@click.argument("drive")
@click.argument("description")
@database_option
@click.pass_context
def describe_drive(ctx: click.Context, drive: str, description: str, database: Path | None) -> None:
    """Set the description of a drive."""
    with _open_catalog(ctx, database) as catalog:
        updated = catalog.update_drive(catalog.find_drive(drive).id, description=description)
        click.echo(f"Description of {updated.name} updated")


@cli.command("remove")
@click.argument("drive")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@database_option
@click.pass_context
def remove_drive(ctx: click.Context, drive: str, yes: bool, database: Path | None) -> None:
    """Remove a drive and all of its indexed files."""
    with _open_catalog(ctx, database) as catalog:
        target = catalog.find_drive(drive)
        if not yes:
            click.confirm(
                f"Remove {target.name} and its {target.file_count:,} indexed files?",
                abort=True,
            )
        catalog.delete_drive(target.id)
        click.echo(f"Drive removed: {target.name}")


@cli.command("scan")
@click.argument("drive")
@click.argument("path")
@click.option("--progress-interval", type=int, default=None, help="Print status every N files")
@database_option
@click.pass_context
def scan(
    ctx: click.Context,
    drive: str,
    path: str,
    progress_interval: int | None,
    database: Path | None,
) -> None:
    """Index every file below PATH for DRIVE, replacing its previous index."""
    config: Config = ctx.obj["config"]
    reporter = ProgressReporter(interval=progress_interval or config.scanner.progress_interval)

    with _open_catalog(ctx, database) as catalog:
        target = catalog.find_drive(drive)
        click.echo(f"Starting scan of {path} for {target.name}")
        summary = catalog.scan_drive(target.id, path, on_progress=reporter)
        reporter.report_completion(summary.file_count, summary.total_size, summary.free_space)


@cli.command("clear")
@click.argument("drive")
@database_option
@click.pass_context
def clear(ctx: click.Context, drive: str, database: Path | None) -> None:
    """Forget every indexed file of DRIVE."""
    with _open_catalog(ctx, database) as catalog:
        target = catalog.find_drive(drive)
        deleted = catalog.clear_drive_index(target.id)
        click.echo(f"Cleared {deleted:,} files from {target.name}")


@cli.command("search")
@click.argument("query", required=False, default="")
@click.option("--category", "categories", multiple=True, help="Only this category (repeatable)")
@click.option("--group", "groups", multiple=True, help="Only categories of this group (repeatable)")
@click.option("--drive", "drives", multiple=True, help="Only this drive (repeatable)")
@click.option(
    "--limit", type=click.IntRange(min=1), default=None, help="Maximum number of results"
)
@database_option
@click.pass_context
def search(
    ctx: click.Context,
    query: str,
    categories: tuple[str, ...],
    groups: tuple[str, ...],
    drives: tuple[str, ...],
    limit: int | None,
    database: Path | None,
) -> None:
    """Find indexed files whose name contains QUERY."""
    selected = list(categories)
    for group in groups:
        try:
            selected.extend(categories_for_group(group))
        except KeyError as e:
            raise click.BadParameter(str(e), param_hint="--group") from e

    with _open_catalog(ctx, database) as catalog:
        drive_ids = [catalog.find_drive(d).id for d in drives] if drives else None
        results = catalog.search_files(
            query,
            categories=selected or None,
            drive_ids=drive_ids,
            limit=limit,
        )

        if not results:
            click.echo("No files found.")
            return

        for f in results:
            click.echo(
                f"[{f.id}] {f.file_name}  ({f.category}, {format_bytes(f.file_size)})  "
                f"{f.drive_name}: {f.file_path}"
            )
        click.echo(f"\n{len(results):,} files found")


@cli.command("stats")
@click.argument("drive")
@database_option
@click.pass_context
def stats(ctx: click.Context, drive: str, database: Path | None) -> None:
    """Show file counts per category for DRIVE."""
    with _open_catalog(ctx, database) as catalog:
        target = catalog.find_drive(drive)
        rows = catalog.get_file_stats(target.id)

        click.echo(f"{target.name}: {target.file_count:,} files")
        for row in rows:
            click.echo(f"  {row.category:<30}{row.count:>10,}{format_bytes(row.total_size):>14}")


@cli.command("locate")
@click.argument("drive")
@database_option
@click.pass_context
def locate(ctx: click.Context, drive: str, database: Path | None) -> None:
    """Check whether DRIVE is connected and where."""
    with _open_catalog(ctx, database) as catalog:
        target = catalog.find_drive(drive)
        location = catalog.locate_drive(target.id)
        if location.connected:
            click.echo(f"{target.name}: connected at {location.location}")
        else:
            click.echo(f"{target.name}: offline")


@cli.command("open")
@click.argument("file_id", type=int)
@database_option
@click.pass_context
def open_file(ctx: click.Context, file_id: int, database: Path | None) -> None:
    """Print the current location of an indexed file."""
    with _open_catalog(ctx, database) as catalog:
        resolved = catalog.resolve_file(file_id)
        if resolved is None:
            click.echo(f"Error: file {file_id} is unknown or its drive is offline.", err=True)
            sys.exit(1)
        click.echo(str(resolved))


@cli.command("space")
@click.argument("path")
@database_option
@click.pass_context
def space(ctx: click.Context, path: str, database: Path | None) -> None:
    """Show capacity and free space of the volume holding PATH."""
    with _open_catalog(ctx, database) as catalog:
        usage = catalog.probe_disk_space(path)
        click.echo(f"Total: {format_bytes(usage.total)}")
        click.echo(f"Used:  {format_bytes(usage.used)}")
        click.echo(f"Free:  {format_bytes(usage.free)}")


@cli.command("volumes")
@database_option
@click.pass_context
def volumes(ctx: click.Context, database: Path | None) -> None:
    """List the volume roots currently available."""
    with _open_catalog(ctx, database) as catalog:
        roots = catalog.list_volume_roots()
        if not roots:
            click.echo("No volumes detected.")
        for root in roots:
            click.echo(root)


def _format_relative_time(unix_timestamp: float | None) -> str:
    if not unix_timestamp:
        return "never"

    now = datetime.now()
    then = datetime.fromtimestamp(unix_timestamp)
    delta = now - then

    if delta.days > 1:
        return f"{delta.days} days ago"
    if delta.days == 1:
        return "yesterday"
    if delta.seconds > 3600:
        hours = delta.seconds // 3600
        return f"{hours}h ago"
    if delta.seconds > 60:
        minutes = delta.seconds // 60
        return f"{minutes}m ago"
    return "just now"


def _truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return "..." + text[-(max_len - 3) :]


def main() -> None:
    """Entry point for the CLI."""
    cli(standalone_mode=True)  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
