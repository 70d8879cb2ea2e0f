"""Per-run state handed to every phase that touches the target."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from treesink.config import Config
from treesink.sync.models import SyncAction, SyncResult
from treesink.sync.runlog import RunLog
from treesink.sync.view import TargetView


@dataclass
class SyncContext:
    """Configuration, run log and target view for one run.

    ``results`` collects every logged action so the orchestrator can
    build its report.
    """

    config: Config
    log: RunLog
    view: TargetView
    results: list[SyncResult] = field(default_factory=list)

    @classmethod
    def for_run(cls, config: Config, log: RunLog) -> SyncContext:
        return cls(
            config=config,
            log=log,
            view=TargetView(config.target, dry_run=config.dry_run),
        )

    @property
    def source(self) -> Path:
        return self.config.source

    @property
    def target(self) -> Path:
        return self.config.target

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def record(
        self,
        action: SyncAction,
        path: str,
        destination: str | None = None,
        is_folder: bool = False,
    ) -> SyncResult:
        """Log an action and keep it for the report."""
        result = SyncResult(
            action=action,
            path=path,
            destination=destination,
            is_folder=is_folder,
        )
        self.log.write_line(result.log_line())
        self.results.append(result)
        return result
