"""Run orchestrator: sequences one full sync of a target toward its source.

The ``SyncEngine``:

1. Creates the run's quarantine (lost and found) directory.
2. Opens the run log and writes its header.
3. Scans both trees for orphan and widow folders.
4. Relocates moved folders (``move_folders``).
5. Quarantines target entries absent from the source (``delete``).
6. Copies new and changed files (``sync_files``).
7. Builds and returns a ``SyncReport``.

Each toggle gates only its own phase; enabled phases always run in this
order because each relies on the effects of the ones before it.

Error handling is fail-fast: the first ``OSError`` aborts the run and
propagates to the caller.  Nothing is rolled back; the run log up to the
failure and anything already quarantined remain as the record.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from treesink.config import Config
from treesink.sync.context import SyncContext
from treesink.sync.copier import sync_files
from treesink.sync.matcher import move_folders
from treesink.sync.models import ScanResult, SyncReport
from treesink.sync.quarantine import make_lost_and_found
from treesink.sync.remover import remove_orphans
from treesink.sync.runlog import RunLog
from treesink.sync.scanner import scan_tree

logger = logging.getLogger(__name__)


class SyncEngine:
    """Orchestrate a full one-way sync run.

    Args:
        config: Validated run configuration.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def run(self) -> SyncReport:
        """Execute a full sync run.

        Returns:
            A ``SyncReport`` of what was (or, in a dry run, would be) done.

        Raises:
            OSError: On the first filesystem failure.  Any exception is
                noted in the run log before it propagates.
        """
        started_at = datetime.now(timezone.utc).isoformat()
        config = self.config

        make_lost_and_found(config)
        with RunLog.create(config) as log:
            ctx = SyncContext.for_run(config, log)
            try:
                scan = self._run_phases(ctx)
            except Exception as exc:
                log.write_line(f"Run aborted: {exc}")
                logger.error("Run aborted: %s", exc)
                raise

        return SyncReport(
            source=str(config.source),
            target=str(config.target),
            dry_run=config.dry_run,
            orphans_found=scan.orphan_count,
            widows_found=scan.widow_count,
            results=ctx.results,
            log_file=str(config.log_file_path()),
            lost_and_found=str(config.lost_and_found_path()),
            started_at=started_at,
            completed_at=datetime.now(timezone.utc).isoformat(),
        )

    def scan(self) -> ScanResult:
        """Scan both trees without changing anything."""
        return scan_tree(self.config.source, self.config.target)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _run_phases(self, ctx: SyncContext) -> ScanResult:
        config = self.config
        log = ctx.log

        log.write_line("Starting scan of both folders...")
        scan = self.scan()
        log.write_line(
            f"Scan complete: found {scan.orphan_count} orphans "
            f"and {scan.widow_count} widows"
        )

        if config.move_folders:
            log.write_line("Moving folders...")
            moved = move_folders(ctx, scan)
            log.write_line(f"Finished moving folders ({moved} moved)")

        if config.delete:
            log.write_line("Removing orphans from target...")
            remove_orphans(ctx)
            log.write_line("Finished removing orphans")

        if config.sync_files:
            log.write_line("Syncing files...")
            sync_files(ctx)
            log.write_line("Finished syncing files")

        log.write_line("Run complete")
        return scan
