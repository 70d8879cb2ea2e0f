"""Pydantic models for the sync engine.

Defines the data contracts shared by the sync modules:

- ``FolderNode``: one folder of the scanned tree (value type).
- ``ScanResult``: the scanned tree plus its orphan and widow indices.
- ``SyncAction``: Enum of the actions written to the run log.
- ``SyncResult``: one logged action.
- ``SyncReport``: aggregate results for a full run.

All models are frozen (immutable) for safety.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class FolderNode(BaseModel):
    """A folder at one relative path, as seen by the tree walker.

    Attributes:
        relpath: Posix path relative to both roots ("" for the root).
        fingerprint: Sorted, ", "-joined names of the immediate entries.
        is_orphan: Directory under target only.
        is_widow: Directory under source only.
        children: Sub-folders, only filled in when the folder is a
            directory on both sides.
    """

    relpath: str
    fingerprint: str
    is_orphan: bool = False
    is_widow: bool = False
    children: list[FolderNode] = []

    model_config = {"frozen": True}

    def iter_all(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.iter_all()


class ScanResult(BaseModel):
    """Output of ``scan_tree``.

    Attributes:
        root: The scanned tree.
        orphans: Fingerprint -> relative paths of target-only folders.
        widows: Fingerprint -> relative paths of source-only folders.
    """

    root: FolderNode
    orphans: dict[str, list[str]] = {}
    widows: dict[str, list[str]] = {}

    model_config = {"frozen": True}

    @property
    def orphan_count(self) -> int:
        return sum(len(paths) for paths in self.orphans.values())

    @property
    def widow_count(self) -> int:
        return sum(len(paths) for paths in self.widows.values())


class SyncAction(str, Enum):
    """Actions recorded in the run log."""

    MOVE = "move"
    DELETE = "delete"
    COPY = "copy"


class SyncResult(BaseModel):
    """One action taken (or, in a dry run, planned) against the target.

    Attributes:
        action: What was done.
        path: Target-relative path acted upon (the origin for a move).
        destination: Target-relative destination of a move.
        is_folder: True when a COPY created a folder.
    """

    action: SyncAction
    path: str
    destination: str | None = None
    is_folder: bool = False

    model_config = {"frozen": True}

    def log_line(self) -> str:
        """Render the event text written to the run log."""
        label = self.action.value.upper()
        if self.action == SyncAction.MOVE:
            return f'{label}: "{self.path}" -> "{self.destination}"'
        if self.is_folder:
            return f'{label}: "{self.path}" (folder)'
        return f'{label}: "{self.path}"'


class SyncReport(BaseModel):
    """Aggregate report for a full run.

    Attributes:
        source: Source root.
        target: Target root.
        dry_run: Whether this was a dry-run (no changes applied).
        orphans_found: Number of target-only folders found by the scan.
        widows_found: Number of source-only folders found by the scan.
        results: Every action in the order it was logged.
        log_file: Path of the run log.
        lost_and_found: Path of the quarantine directory.
        started_at: ISO 8601 timestamp when the run started.
        completed_at: ISO 8601 timestamp when the run completed.
    """

    source: str
    target: str
    dry_run: bool = False
    orphans_found: int = 0
    widows_found: int = 0
    results: list[SyncResult] = []
    log_file: str
    lost_and_found: str
    started_at: str
    completed_at: str | None = None

    model_config = {"frozen": True}

    @property
    def moved(self) -> list[SyncResult]:
        """Results where action is MOVE."""
        return [r for r in self.results if r.action == SyncAction.MOVE]

    @property
    def deleted(self) -> list[SyncResult]:
        """Results where action is DELETE."""
        return [r for r in self.results if r.action == SyncAction.DELETE]

    @property
    def copied(self) -> list[SyncResult]:
        """Results where action is COPY."""
        return [r for r in self.results if r.action == SyncAction.COPY]

    def summary(self) -> str:
        """Format a human-readable summary of the run.

        Returns:
            Multi-line summary string with counts by action.
        """
        lines = [
            f"Sync report for '{self.source}' -> '{self.target}'"
            + (" (DRY RUN)" if self.dry_run else ""),
            f"  Orphans found: {self.orphans_found}",
            f"  Widows found:  {self.widows_found}",
            f"  Moved:         {len(self.moved)}",
            f"  Quarantined:   {len(self.deleted)}",
            f"  Copied:        {len(self.copied)}",
        ]
        return "\n".join(lines)
