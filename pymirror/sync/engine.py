"""Core sync engine for mirroring a source tree onto a target tree."""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Optional, Union

from rich.progress import Progress, SpinnerColumn, TextColumn

from ..exceptions import MirrorError, SourceMissingError
from ..output import OutputFormatter
from ..utils import (
    DEFAULT_MAX_WORKERS,
    format_duration,
    format_size,
    is_path_inside,
)
from .comparator import FileComparator
from .filesystem import FileSystem, LocalFileSystem, NodeKind, node_kind
from .operations import SyncOperations
from .pair import SyncPair
from .report import SyncAction, SyncReport
from .scanner import DirectoryScanner

logger = logging.getLogger(__name__)


class SyncEngine:
    """Core sync engine that makes a target tree mirror a source tree.

    The engine walks the source recursively. For every directory it
    reconciles the file children on a bounded thread pool while the
    calling thread descends into the subdirectories, then waits for those
    files before pruning target entries that have no source counterpart.
    Only the calling thread ever waits on the pool, so a small pool
    cannot deadlock on deep trees.

    Failures on individual paths are logged, recorded in the returned
    :class:`SyncReport` and never abort the run.
    """

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        output: Optional[OutputFormatter] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        """Initialize sync engine.

        Args:
            fs: Filesystem to operate on (defaults to the local disk)
            output: Output formatter for displaying progress/status
            max_workers: Number of parallel workers for file reconciliation.
                With 1 the whole run happens in the calling thread.
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self.fs = fs or LocalFileSystem()
        self.output = output or OutputFormatter()
        self.max_workers = max_workers
        self.scanner = DirectoryScanner(self.fs)
        self.comparator = FileComparator(self.fs)
        self.operations = SyncOperations(self.fs)

    def sync_pair(self, pair: SyncPair) -> SyncReport:
        """Synchronize a single sync pair.

        Examples:
            >>> engine = SyncEngine()
            >>> report = engine.sync_pair(SyncPair("/data", "/backup"))
            >>> print(f"Copied {report.copied} file(s)")
        """
        if not self.output.quiet:
            self.output.info(f"Mirroring: {pair}")
        return self.synchronize(pair.source, pair.target)

    def synchronize(
        self, source: Union[str, Path], target: Union[str, Path]
    ) -> SyncReport:
        """Make ``target`` an exact mirror of ``source``.

        Returns only after the whole tree has been reconciled.

        Args:
            source: Existing source file or directory
            target: Target path, created if missing

        Returns:
            SyncReport with action counts and per-path failures

        Raises:
            ValueError: If the source does not exist, cannot be inspected or
                the two trees overlap
        """
        source = Path(source).absolute()
        target = Path(target).absolute()

        try:
            source_kind = node_kind(self.fs, source)
        except MirrorError as e:
            raise ValueError(f"Cannot inspect source: {e.message}") from e
        if source_kind == NodeKind.MISSING:
            raise ValueError(f"Source path does not exist: {source}")
        if is_path_inside(target, source):
            raise ValueError(f"Target {target} is the source or lies inside it")
        if is_path_inside(source, target):
            raise ValueError(f"Source {source} lies inside target {target}")

        report = SyncReport(source=source, target=target)
        start_time = time.time()
        logger.debug(
            "Starting sync %s -> %s with %d worker(s)",
            source,
            target,
            self.max_workers,
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            disable=self.output.quiet or self.output.json_output,
        ) as progress:
            task = progress.add_task("Mirroring...", total=None)

            def on_directory(directory: Path) -> None:
                progress.update(task, description=f"Mirroring {directory}...")

            if self.max_workers > 1:
                with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                    self._reconcile(source, target, report, executor, on_directory)
            else:
                self._reconcile(source, target, report, None, on_directory)

        report.elapsed = time.time() - start_time
        logger.debug(
            "Sync finished in %.2fs with %d failure(s)",
            report.elapsed,
            len(report.failures),
        )

        if not self.output.quiet:
            self._display_summary(report)

        return report

    def _reconcile(
        self,
        source: Path,
        target: Path,
        report: SyncReport,
        executor: Optional[ThreadPoolExecutor] = None,
        on_directory: Optional[Callable[[Path], None]] = None,
    ) -> None:
        """Reconcile one path pair, recording any failure instead of raising."""
        try:
            kind = node_kind(self.fs, source)
            if kind == NodeKind.DIRECTORY:
                self._reconcile_directory(
                    source, target, report, executor, on_directory
                )
            elif kind == NodeKind.FILE:
                self._reconcile_file(source, target, report)
            else:
                raise SourceMissingError("source entry vanished during sync", source)
        except MirrorError as e:
            self._record_failure(report, e)

    def _reconcile_directory(
        self,
        source: Path,
        target: Path,
        report: SyncReport,
        executor: Optional[ThreadPoolExecutor],
        on_directory: Optional[Callable[[Path], None]],
    ) -> None:
        if on_directory is not None:
            on_directory(source)

        target_kind = node_kind(self.fs, target)
        if target_kind == NodeKind.FILE:
            logger.debug("Replacing file %s with a directory", target)
            report.record(SyncAction.DELETE, self.operations.delete_recursively(target))
        if target_kind != NodeKind.DIRECTORY:
            self.operations.make_directory(target)
            report.record(SyncAction.MKDIR)

        files, directories = self.scanner.split_children(source)

        futures: list[Future] = []
        for child in files:
            child_target = target / child.name
            if executor is None:
                self._reconcile(child, child_target, report)
            else:
                futures.append(
                    executor.submit(self._reconcile, child, child_target, report)
                )

        for child in directories:
            self._reconcile(child, target / child.name, report, executor, on_directory)

        # Pruning must observe every copy made for this directory.
        if futures:
            wait(futures)
            for future in futures:
                future.result()

        self._prune(source, target, report)

    def _reconcile_file(self, source: Path, target: Path, report: SyncReport) -> None:
        if node_kind(self.fs, target) == NodeKind.DIRECTORY:
            logger.debug("Replacing directory %s with a file", target)
            report.record(SyncAction.DELETE, self.operations.delete_recursively(target))

        if node_kind(self.fs, target) == NodeKind.FILE:
            if not self.comparator.differs(source, target):
                logger.debug("Unchanged: %s", target)
                report.record(SyncAction.SKIP)
                return
            size = self.operations.copy_file(source, target)
            report.record(SyncAction.UPDATE, size=size)
        else:
            size = self.operations.copy_file(source, target)
            report.record(SyncAction.COPY, size=size)

    def _prune(self, source: Path, target: Path, report: SyncReport) -> None:
        """Delete target children whose names are absent from the source."""
        try:
            obsolete = self.scanner.obsolete_entries(source, target)
        except MirrorError as e:
            self._record_failure(report, e)
            return

        for path in obsolete:
            try:
                removed = self.operations.delete_recursively(path)
            except MirrorError as e:
                self._record_failure(report, e)
                continue
            logger.debug("Pruned %s (%d entr(y/ies))", path, removed)
            report.record(SyncAction.DELETE, removed)

    def _record_failure(self, report: SyncReport, error: MirrorError) -> None:
        report.fail(error)
        logger.warning("Failed to reconcile %s: %s", error.path, error.message)
        if not self.output.quiet:
            self.output.error(f"Error syncing {error.path}: {error.message}")

    def _display_summary(self, report: SyncReport) -> None:
        """Display sync summary.

        Args:
            report: Report of the finished run
        """
        self.output.print("")
        if report.ok:
            self.output.success("Sync complete!")
        else:
            self.output.warning(
                f"Sync finished with {len(report.failures)} failure(s)"
            )

        if report.total_changes > 0:
            self.output.info(f"Total changes: {report.total_changes}")
            if report.copied > 0:
                self.output.info(f"  Copied: {report.copied}")
            if report.updated > 0:
                self.output.info(f"  Updated: {report.updated}")
            if report.deleted > 0:
                self.output.info(f"  Deleted: {report.deleted}")
            if report.directories_created > 0:
                self.output.info(
                    f"  Directories created: {report.directories_created}"
                )
            self.output.info(f"  Transferred: {format_size(report.bytes_copied)}")
        else:
            self.output.info("No changes needed - everything is in sync!")

        if report.skipped > 0:
            self.output.info(f"Unchanged: {report.skipped} file(s)")
        self.output.info(f"Elapsed: {format_duration(report.elapsed)}")


Syncher = SyncEngine


def synchronize(
    source: Union[str, Path],
    target: Union[str, Path],
    max_workers: int = DEFAULT_MAX_WORKERS,
    fs: Optional[FileSystem] = None,
) -> SyncReport:
    """Mirror ``source`` onto ``target`` without any console output.

    Examples:
        >>> report = synchronize("/data/photos", "/backup/photos")
        >>> report.ok
        True
    """
    engine = SyncEngine(
        fs=fs, output=OutputFormatter(quiet=True), max_workers=max_workers
    )
    return engine.synchronize(source, target)
