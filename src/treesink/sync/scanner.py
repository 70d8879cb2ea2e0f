"""Folder identity and the source/target tree walk.

A folder's *fingerprint* is the sorted list of its immediate entry names
joined with ``", "``.  Two folders with byte-equal fingerprints are
treated as the same folder, possibly moved.  The signature is shallow on
purpose: subtrees that differ only below the first level collide.

``scan_tree`` walks every relative path that is a directory on both
sides and records the folders found on one side only:

* **orphan**: directory under target, missing (or not a directory)
  under source.  Fingerprinted from the target listing.
* **widow**: directory under source, missing (or not a directory)
  under target.  Fingerprinted from the source listing.

Orphans and widows are indexed by fingerprint and never descended into.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from treesink.config import TOOL_NAME
from treesink.sync.models import FolderNode, ScanResult

logger = logging.getLogger(__name__)

FINGERPRINT_DELIMITER = ", "

# Run artifacts under the target root, named from Config.start_time
_ARTIFACT_PATTERNS = (
    re.compile(rf"^{TOOL_NAME.upper()}_LOST_AND_FOUND_\d{{8}}T\d{{6}}$"),
    re.compile(rf"^{TOOL_NAME}_\d{{8}}T\d{{6}}\.log$"),
)


def is_artifact(name: str) -> bool:
    """Return True if *name* is a quarantine folder or run log name."""
    return any(pattern.match(name) for pattern in _ARTIFACT_PATTERNS)


def join_relpath(parent: str, name: str) -> str:
    """Append *name* to a posix relative path ("" is the root)."""
    return f"{parent}/{name}" if parent else name


def list_entries(directory: Path) -> list[str]:
    """Return the sorted names of the entries directly inside *directory*.

    Files and folders are mixed; run artifacts are left out.

    Raises:
        OSError: If the directory cannot be read.
    """
    return sorted(
        name for name in os.listdir(directory) if not is_artifact(name)
    )


def fingerprint(directory: Path) -> str:
    """Return the identity string of *directory*."""
    return FINGERPRINT_DELIMITER.join(list_entries(directory))


def _subfolder_names(directory: Path) -> set[str]:
    return {
        name
        for name in list_entries(directory)
        if (directory / name).is_dir()
    }


def scan_tree(source_root: Path, target_root: Path) -> ScanResult:
    """Walk both trees and index their orphan and widow folders.

    Args:
        source_root: Root of the source tree.
        target_root: Root of the target tree.

    Returns:
        A ``ScanResult`` with the folder tree and both indices.

    Raises:
        NotADirectoryError: If either root is not a directory.
        OSError: On any failure to read a directory.
    """
    for root, name in ((source_root, "Source"), (target_root, "Target")):
        if not root.is_dir():
            raise NotADirectoryError(f"{name} folder not found: {root}")

    orphans: dict[str, list[str]] = {}
    widows: dict[str, list[str]] = {}
    root = _scan_folder(source_root, target_root, "", orphans, widows)

    logger.debug(
        "Scan found %d orphan and %d widow folders",
        sum(len(p) for p in orphans.values()),
        sum(len(p) for p in widows.values()),
    )
    return ScanResult(root=root, orphans=orphans, widows=widows)


def _scan_folder(
    source_root: Path,
    target_root: Path,
    relpath: str,
    orphans: dict[str, list[str]],
    widows: dict[str, list[str]],
) -> FolderNode:
    source_dir = source_root / relpath
    target_dir = target_root / relpath

    if not source_dir.is_dir():
        node_id = fingerprint(target_dir)
        orphans.setdefault(node_id, []).append(relpath)
        return FolderNode(relpath=relpath, fingerprint=node_id, is_orphan=True)

    if not target_dir.is_dir():
        node_id = fingerprint(source_dir)
        widows.setdefault(node_id, []).append(relpath)
        return FolderNode(relpath=relpath, fingerprint=node_id, is_widow=True)

    node_id = fingerprint(source_dir)
    names = sorted(_subfolder_names(source_dir) | _subfolder_names(target_dir))
    children = [
        _scan_folder(
            source_root,
            target_root,
            join_relpath(relpath, name),
            orphans,
            widows,
        )
        for name in names
    ]
    return FolderNode(relpath=relpath, fingerprint=node_id, children=children)
