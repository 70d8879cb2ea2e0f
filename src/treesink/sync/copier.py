"""Copy new and changed files from the source tree to the target tree.

Folders are handled before files so every file's target folder exists
(or, in a dry run, would exist) by the time it is copied.  A target file
is replaced only when ``check_need_update`` says it changed; with
``keep_versions`` the old version goes to quarantine first.
"""

from __future__ import annotations

import hashlib
import logging
import shutil
from pathlib import Path

from treesink.sync.context import SyncContext
from treesink.sync.models import SyncAction
from treesink.sync.quarantine import delete_file_or_folder
from treesink.sync.scanner import join_relpath, list_entries

logger = logging.getLogger(__name__)

_HASH_CHUNK_SIZE = 1024 * 1024


def file_md5(path: Path) -> str:
    """Return the hex MD5 digest of the file at *path*."""
    digest = hashlib.md5()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def check_need_update(source: Path, target: Path, checksum: bool) -> bool:
    """Decide whether *target* must be replaced by *source*.

    Checks, in order, stopping at the first that fires:

    1. The sizes differ.
    2. The source was modified strictly later than the target.
    3. With *checksum*, the MD5 digests differ.

    A target newer than its source with the same size is only caught by
    the checksum step.
    """
    source_stat = source.stat()
    target_stat = target.stat()

    if source_stat.st_size != target_stat.st_size:
        return True
    if source_stat.st_mtime > target_stat.st_mtime:
        return True
    if checksum and file_md5(source) != file_md5(target):
        return True
    return False


def _copy_file(ctx: SyncContext, relpath: str) -> None:
    ctx.record(SyncAction.COPY, relpath)
    if not ctx.dry_run:
        # copy2 keeps the mtime, so an unchanged file is skipped next run
        shutil.copy2(ctx.source / relpath, ctx.target / relpath)


def sync_files(ctx: SyncContext, relpath: str = "") -> None:
    """Bring the target folder *relpath* up to date with the source.

    An entry whose target counterpart has the other type (a file where a
    folder belongs, or the reverse) is quarantined before the source
    entry is copied.

    Raises:
        OSError: On any read, copy or rename failure.
    """
    source_dir = ctx.source / relpath
    names = list_entries(source_dir)
    folders = [n for n in names if (source_dir / n).is_dir()]
    files = sorted(set(names).difference(folders))

    for name in folders:
        child = join_relpath(relpath, name)
        if not ctx.view.is_dir(child):
            if ctx.view.exists(child):
                delete_file_or_folder(ctx, child)
            ctx.record(SyncAction.COPY, child, is_folder=True)
            if not ctx.dry_run:
                (ctx.target / child).mkdir()
        sync_files(ctx, child)

    for name in files:
        child = join_relpath(relpath, name)
        if not (source_dir / name).is_file():
            logger.warning("Skipping %s: not a regular file", child)
            continue

        if not ctx.view.exists(child):
            _copy_file(ctx, child)
        elif not ctx.view.is_file(child):
            delete_file_or_folder(ctx, child)
            _copy_file(ctx, child)
        elif check_need_update(
            source_dir / name, ctx.view.path(child), ctx.config.checksum
        ):
            if ctx.config.keep_versions:
                delete_file_or_folder(ctx, child)
            _copy_file(ctx, child)
        else:
            logger.debug("Unchanged: %s", child)
