"""Lost-and-found quarantine: the only way anything leaves the target.

Items are never erased.  ``delete_file_or_folder`` renames a file or a
whole folder into the run's quarantine directory, at the same path it
had relative to the target root.  A single rename per item means no
half-copied state exists for that step.
"""

from __future__ import annotations

import logging
from pathlib import Path

from treesink.config import Config
from treesink.sync.context import SyncContext
from treesink.sync.models import SyncAction

logger = logging.getLogger(__name__)


def make_lost_and_found(config: Config) -> Path:
    """Create the run's quarantine directory and return its path."""
    path = config.lost_and_found_path()
    path.mkdir(parents=True, exist_ok=True)
    logger.info("Lost and found: %s", path)
    return path


def quarantine_path(config: Config, relpath: str) -> Path:
    """Where *relpath* ends up once quarantined."""
    return config.lost_and_found_path() / relpath


def delete_file_or_folder(ctx: SyncContext, relpath: str) -> None:
    """Move the target entry at *relpath* into quarantine.

    The DELETE line is logged in every mode; the rename only happens
    outside dry runs.

    Never renames over an earlier quarantined entry.

    Raises:
        FileExistsError: If the quarantine path is already taken.
        OSError: If the parent folders cannot be created or the rename
            fails.
    """
    destination = quarantine_path(ctx.config, relpath)
    if not ctx.dry_run and (destination.exists() or destination.is_symlink()):
        # a run started in the same second already quarantined this path
        raise FileExistsError(f"Already in lost and found: {destination}")

    ctx.record(SyncAction.DELETE, relpath)
    ctx.view.record_removal(relpath)
    if ctx.dry_run:
        return

    destination.parent.mkdir(parents=True, exist_ok=True)
    (ctx.target / relpath).rename(destination)
