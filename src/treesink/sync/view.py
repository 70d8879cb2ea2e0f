"""Target tree as seen by the mutating phases.

In a real run this is a thin layer over the filesystem.  In a dry run
nothing is moved or quarantined, yet later phases must decide exactly as
they would after those changes happened, so that the dry-run log matches
a real run line for line.  ``TargetView`` therefore journals the moves
and removals a dry run skipped and answers path queries through that
journal.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from treesink.sync.scanner import join_relpath, list_entries


class _Operation(NamedTuple):
    source: str
    destination: str | None  # None for a removal


def _is_within(relpath: str, base: str) -> bool:
    return relpath == base or relpath.startswith(base + "/")


def _parent(relpath: str) -> str:
    return relpath.rpartition("/")[0]


class TargetView:
    """Resolve target-relative paths, honouring skipped dry-run changes.

    Args:
        root: Target root directory.
        dry_run: Journal moves and removals instead of assuming they
            happened on disk.
    """

    def __init__(self, root: Path, dry_run: bool = False) -> None:
        self.root = root
        self.dry_run = dry_run
        self._journal: list[_Operation] = []

    # ------------------------------------------------------------------
    # Journal
    # ------------------------------------------------------------------

    def record_move(self, source: str, destination: str) -> None:
        """Note that *source* now lives at *destination*."""
        if self.dry_run:
            self._journal.append(_Operation(source, destination))

    def record_removal(self, relpath: str) -> None:
        """Note that *relpath* has left the target tree."""
        if self.dry_run:
            self._journal.append(_Operation(relpath, None))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def resolve(self, relpath: str) -> str | None:
        """Map a virtual relative path to where its content is on disk.

        Returns ``None`` when the path was moved away or removed.
        """
        current = relpath
        for op in reversed(self._journal):
            if op.destination is not None and _is_within(
                current, op.destination
            ):
                current = op.source + current[len(op.destination):]
            elif _is_within(current, op.source):
                return None
        return current

    def path(self, relpath: str) -> Path | None:
        """Return the on-disk path for *relpath*, or ``None`` if absent."""
        real = self.resolve(relpath)
        if real is None:
            return None
        candidate = self.root / real
        if not (candidate.exists() or candidate.is_symlink()):
            return None
        return candidate

    def exists(self, relpath: str) -> bool:
        return self.path(relpath) is not None

    def is_dir(self, relpath: str) -> bool:
        found = self.path(relpath)
        return found is not None and found.is_dir()

    def is_file(self, relpath: str) -> bool:
        found = self.path(relpath)
        return found is not None and found.is_file()

    def listdir(self, relpath: str) -> list[str]:
        """Sorted entry names of a virtual folder, artifacts excluded."""
        found = self.path(relpath)
        names = set(list_entries(found)) if found is not None else set()
        for op in self._journal:
            if op.destination is not None and _parent(op.destination) == relpath:
                names.add(op.destination.rpartition("/")[2])
        return sorted(
            name for name in names if self.exists(join_relpath(relpath, name))
        )
