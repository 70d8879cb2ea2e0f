"""Append-only run log written under the target root.

Every line is ``<UTC timestamp>: <event>``.  The log is the audit record
of a run: it is written in dry runs too, and it is what a dry run
previews.  In verbose mode each line is also echoed to stdout.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from treesink import __version__
from treesink.config import Config, TOOL_NAME

logger = logging.getLogger(__name__)


class RunLog:
    """Single writer for one run's log file.

    Args:
        path: Log file to append to.
        verbose: Echo every line to stdout.
    """

    def __init__(self, path: Path, verbose: bool = False) -> None:
        self.path = path
        self.verbose = verbose
        self._fh: TextIO | None = None

    @classmethod
    def create(cls, config: Config) -> RunLog:
        """Open the log for *config*'s run and write its header."""
        log = cls(config.log_file_path(), verbose=config.verbose)
        log.open()
        log.write_raw(
            f"{TOOL_NAME} {__version__} log file, "
            f"run started at: {config.start_time}"
        )
        log.write_raw(f"Configuration: {config!r}")
        return log

    def open(self) -> None:
        self._fh = open(self.path, "a", encoding="utf-8")
        logger.info("Run log: %s", self.path)

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def __enter__(self) -> RunLog:
        if self._fh is None:
            self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def write_raw(self, text: str) -> None:
        """Append *text* as-is (used for the header)."""
        if self._fh is None:
            raise RuntimeError(f"Run log is not open: {self.path}")
        self._fh.write(text + "\n")
        self._fh.flush()

    def write_line(self, event: str) -> str:
        """Append a timestamped event line and return it."""
        stamp = datetime.now(timezone.utc).isoformat()
        line = f"{stamp}: {event}"
        self.write_raw(line)
        logger.debug(event)
        if self.verbose:
            print(line, flush=True)
        return line
