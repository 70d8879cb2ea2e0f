"""One-way, non-destructive sync engine.

Brings a target directory tree in line with a read-only source tree.
Nothing on the target is ever erased: removed and superseded entries
are renamed into a per-run lost-and-found directory under the target.

Architecture
------------
A run first scans both trees.  Each folder gets a shallow *fingerprint*
(its sorted entry names); folders present on one side only are indexed
as *orphans* (target only) or *widows* (source only).  An orphan and a
widow with the same fingerprint are treated as a folder that moved, and
the orphan is renamed into place instead of being deleted and copied
again.  Only then are leftover target entries quarantined and new or
changed files copied.

Modules:

- ``scanner``    -- fingerprints and ``scan_tree`` (the tree walker).
- ``matcher``    -- pairs orphans with widows and moves them.
- ``quarantine`` -- ``delete_file_or_folder``, the only removal path.
- ``remover``    -- quarantines target entries missing from source.
- ``copier``     -- copies new and changed files (``check_need_update``).
- ``view``       -- ``TargetView``, keeps dry-run decisions faithful.
- ``runlog``     -- ``RunLog``, the timestamped audit log.
- ``context``    -- ``SyncContext`` shared by the mutating phases.
- ``engine``     -- ``SyncEngine``: orchestrates a full run.
- ``models``     -- ``FolderNode``, ``ScanResult``, ``SyncAction``,
  ``SyncResult``, ``SyncReport``.
- ``reporter``   -- Human-readable and JSON report formatting.

Usage example
-------------
::

    from pathlib import Path
    from treesink.config import Config
    from treesink.sync import SyncEngine, format_dry_run_preview

    config = Config(
        source=Path("/data/photos"),
        target=Path("/mnt/backup/photos"),
        delete=True,
        dry_run=True,
    )
    report = SyncEngine(config).run()
    print(format_dry_run_preview(report))
"""

from .engine import SyncEngine
from .models import (
    FolderNode,
    ScanResult,
    SyncAction,
    SyncReport,
    SyncResult,
)
from .reporter import (
    format_dry_run_preview,
    format_sync_report,
    report_to_json,
)
from .scanner import fingerprint, list_entries, scan_tree

__all__ = [
    "FolderNode",
    "ScanResult",
    "SyncAction",
    "SyncEngine",
    "SyncReport",
    "SyncResult",
    "fingerprint",
    "format_dry_run_preview",
    "format_sync_report",
    "list_entries",
    "report_to_json",
    "scan_tree",
]
