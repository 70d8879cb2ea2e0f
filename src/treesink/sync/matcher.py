"""Move detection: relocate target folders that were moved on the source.

An orphan (target-only folder) and a widow (source-only folder) with the
same fingerprint are taken to be one folder that moved.  Within each
fingerprint the paths are sorted and paired by position; surplus
orphans or widows stay unmatched and are left to the delete and copy
phases.
"""

from __future__ import annotations

import logging

from treesink.sync.context import SyncContext
from treesink.sync.models import ScanResult, SyncAction
from treesink.sync.quarantine import delete_file_or_folder

logger = logging.getLogger(__name__)


def pair_moves(scan: ScanResult) -> list[tuple[str, str]]:
    """Return ``(orphan, widow)`` pairs with matching fingerprints.

    Pairs are ordered by fingerprint, then by position in the sorted
    path lists, so the result is the same for the same trees.
    """
    pairs: list[tuple[str, str]] = []
    for fingerprint in sorted(scan.orphans):
        widows = scan.widows.get(fingerprint)
        if not widows:
            continue
        orphans = sorted(scan.orphans[fingerprint])
        pairs.extend(zip(orphans, sorted(widows)))
    return pairs


def move_folders(ctx: SyncContext, scan: ScanResult) -> int:
    """Rename every matched orphan to its widow's path under the target.

    Whatever already sits at the destination (necessarily not a folder,
    or it would not be a widow) is quarantined first.

    Returns:
        Number of folders moved.

    Raises:
        OSError: If a quarantine or rename fails.
    """
    pairs = pair_moves(scan)
    for orphan, widow in pairs:
        if ctx.view.exists(widow):
            delete_file_or_folder(ctx, widow)

        ctx.record(SyncAction.MOVE, orphan, destination=widow)
        ctx.view.record_move(orphan, widow)
        if ctx.dry_run:
            continue

        destination = ctx.target / widow
        destination.parent.mkdir(parents=True, exist_ok=True)
        (ctx.target / orphan).rename(destination)

    logger.debug("Moved %d folders", len(pairs))
    return len(pairs)
