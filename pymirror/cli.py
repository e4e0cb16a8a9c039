"""CLI interface for pymirror."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .exceptions import MirrorError, SyncConfigError
from .output import OutputFormatter
from .sync import SyncEngine, SyncPair, SyncReport, load_sync_pairs_from_json
from .sync.comparator import FileComparator
from .sync.filesystem import LocalFileSystem
from .utils import DEFAULT_MAX_WORKERS, MAX_WORKERS_LIMIT

logger = logging.getLogger(__name__)

# Exit code when the run finished but some paths could not be mirrored
EXIT_PARTIAL_FAILURE = 2


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="pymirror")
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, verbose: bool) -> None:
    """PyMirror - Mirror a source directory tree onto a target directory."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)
    ctx.obj["verbose"] = verbose

    # Configure logging based on verbose flag
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("pymirror").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _validate_workers(ctx: Any, out: OutputFormatter, workers: int) -> None:
    if workers < 1:
        out.error("Workers must be at least 1")
        ctx.exit(1)
    if workers > MAX_WORKERS_LIMIT:
        out.error(f"Workers cannot exceed {MAX_WORKERS_LIMIT}")
        ctx.exit(1)


def _run_pairs(
    ctx: Any, out: OutputFormatter, pairs: list[SyncPair], workers: int
) -> None:
    """Mirror each pair in turn and exit with a status reflecting failures.

    A pair that is rejected before mirroring starts (missing source,
    overlapping trees) is reported and skipped, and the remaining pairs
    still run. Any rejected pair makes the command exit with 1.
    """
    engine = SyncEngine(output=out, max_workers=workers)
    reports: list[SyncReport] = []
    rejected = 0

    try:
        for pair in pairs:
            try:
                reports.append(engine.sync_pair(pair))
            except ValueError as e:
                out.error(f"Cannot mirror {pair}: {e}")
                rejected += 1
    except KeyboardInterrupt:
        out.warning("\nSync cancelled by user")
        ctx.exit(130)

    if out.json_output and reports:
        if len(pairs) == 1:
            out.output_json(reports[0].to_dict())
        else:
            out.output_json([report.to_dict() for report in reports])

    failures = sum(len(report.failures) for report in reports)
    if failures and not out.quiet:
        out.warning(
            f"{failures} path(s) could not be mirrored. "
            "Run with --verbose for details."
        )
    if rejected:
        ctx.exit(1)
    if failures:
        ctx.exit(EXIT_PARTIAL_FAILURE)


@main.command()
@click.argument("source", type=str)
@click.argument("target", type=click.Path(path_type=Path), required=False)
@click.option(
    "--workers",
    "-w",
    type=int,
    default=DEFAULT_MAX_WORKERS,
    envvar="PYMIRROR_WORKERS",
    show_default=True,
    help="Number of parallel workers for file copies and comparisons",
)
@click.pass_context
def sync(ctx: Any, source: str, target: Optional[Path], workers: int) -> None:
    """Make TARGET an exact mirror of SOURCE.

    Files missing or different in TARGET are copied from SOURCE, and
    entries in TARGET that do not exist in SOURCE are deleted. SOURCE is
    never modified. Without TARGET, SOURCE is read as a literal
    "source:target" pair.

    Examples:
        pymirror sync ./photos /mnt/backup/photos
        pymirror sync ./docs:./docs-mirror --workers 8
        pymirror --json sync ./data /srv/data
    """
    out: OutputFormatter = ctx.obj["out"]
    _validate_workers(ctx, out, workers)

    pair: SyncPair  # Type hint to satisfy type checker
    if target is None:
        try:
            pair = SyncPair.parse_literal(source)
        except ValueError as e:
            out.error(f"Invalid sync pair format: {e}")
            ctx.exit(1)
            return  # Unreachable, but helps type checker
    else:
        pair = SyncPair(source=Path(source), target=target)

    if not pair.source.exists():
        out.error(f"Path does not exist: {pair.source}")
        ctx.exit(1)

    _run_pairs(ctx, out, [pair], workers)


@main.command("sync-config")
@click.argument("config_file", type=click.Path(path_type=Path))
@click.option(
    "--workers",
    "-w",
    type=int,
    default=DEFAULT_MAX_WORKERS,
    envvar="PYMIRROR_WORKERS",
    show_default=True,
    help="Number of parallel workers for file copies and comparisons",
)
@click.pass_context
def sync_config(ctx: Any, config_file: Path, workers: int) -> None:
    """Mirror every pair listed in a JSON CONFIG_FILE.

    CONFIG_FILE holds a list of objects with "source", "target" and an
    optional "alias":

    \b
        [
          {"source": "/data/photos", "target": "/backup/photos"},
          {"source": "docs", "target": "/backup/docs", "alias": "docs"}
        ]
    """
    out: OutputFormatter = ctx.obj["out"]
    _validate_workers(ctx, out, workers)

    try:
        pairs = load_sync_pairs_from_json(config_file)
    except SyncConfigError as e:
        out.error(f"Invalid configuration: {e}")
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    if not pairs:
        out.warning("No sync pairs defined")
        return

    _run_pairs(ctx, out, pairs, workers)


@main.command()
@click.argument("file_a", type=click.Path(path_type=Path))
@click.argument("file_b", type=click.Path(path_type=Path))
@click.pass_context
def compare(ctx: Any, file_a: Path, file_b: Path) -> None:
    """Check whether FILE_A and FILE_B have identical content.

    Exits with 0 when the files are identical and 1 when they differ or
    cannot be read.
    """
    out: OutputFormatter = ctx.obj["out"]
    comparator = FileComparator(LocalFileSystem())

    try:
        differs = comparator.differs(file_a, file_b)
    except MirrorError as e:
        out.error(str(e))
        ctx.exit(1)
        return  # Unreachable, but helps type checker

    if out.json_output:
        out.output_json(
            {"file_a": str(file_a), "file_b": str(file_b), "identical": not differs}
        )
    elif differs:
        out.info(f"{file_a} and {file_b} differ")
    else:
        out.info(f"{file_a} and {file_b} are identical")

    if differs:
        ctx.exit(1)
