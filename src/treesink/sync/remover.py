"""Quarantine target entries that have no counterpart in the source."""

from __future__ import annotations

import logging

from treesink.sync.context import SyncContext
from treesink.sync.quarantine import delete_file_or_folder
from treesink.sync.scanner import join_relpath

logger = logging.getLogger(__name__)


def remove_orphans(ctx: SyncContext, relpath: str = "") -> None:
    """Walk the target folder *relpath* and quarantine what source lacks.

    A folder present as a folder on both sides is descended into.  Any
    other entry is quarantined in one piece when nothing at all exists
    at its source path; an entry whose source counterpart has another
    type (file vs. folder) is left for the copy phase.

    Raises:
        OSError: On any read or rename failure.
    """
    for name in ctx.view.listdir(relpath):
        child = join_relpath(relpath, name)
        source_path = ctx.source / child

        if ctx.view.is_dir(child) and source_path.is_dir():
            remove_orphans(ctx, child)
        elif not (source_path.exists() or source_path.is_symlink()):
            logger.debug("No source entry for %s", child)
            delete_file_or_folder(ctx, child)
