"""Unified configuration schema for treesink.

Defines Pydantic models for the YAML config structure with dedicated
sections for the sync run and for diagnostic logging, plus the adapter
that turns a validated file config into the runtime ``Config``.

Usage:
    from treesink.config_schema import build_config, to_runtime_config

    raw = load_hierarchical_config()
    unified = build_config(raw)
    config = to_runtime_config(unified, source="/data", toggles={"delete": True})
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .config import Config, load_config


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class SyncSection(BaseModel):
    """Source/target roots and feature toggles.

    Every field is optional: ``None`` means "not set in any file", so the
    environment and built-in defaults still apply.  Unknown keys are
    rejected to catch typos such as ``dryrun``.
    """

    source: str | None = Field(default=None, description="Source folder")
    target: str | None = Field(default=None, description="Target folder")
    move_folders: bool | None = Field(
        default=None,
        description="Relocate folders that were moved on the source",
    )
    sync_files: bool | None = Field(
        default=None, description="Copy new and changed files"
    )
    delete: bool | None = Field(
        default=None,
        description="Quarantine target entries missing from the source",
    )
    keep_versions: bool | None = Field(
        default=None,
        description="Quarantine the old version of a replaced file",
    )
    checksum: bool | None = Field(
        default=None,
        description="Compare MD5 digests when size and time agree",
    )
    dry_run: bool | None = Field(
        default=None, description="Log actions without touching files"
    )
    verbose: bool | None = Field(
        default=None, description="Echo the run log to stdout"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    def toggles(self) -> dict[str, bool]:
        """Return the toggles that are explicitly set."""
        data = self.model_dump(exclude={"source", "target"})
        return {k: v for k, v in data.items() if v is not None}


class LoggingConfig(BaseModel):
    """Diagnostic logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional diagnostic log file path.
        format: "text" or "json".
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")
    format: Literal["text", "json"] = Field(
        default="text", description="Log line format"
    )

    model_config = {"frozen": True}


class UnifiedConfig(BaseModel):
    """Top-level configuration file model.

    ``UnifiedConfig()`` (zero-config) is always valid.
    """

    sync: SyncSection = Field(default_factory=SyncSection)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Factory function
# ---------------------------------------------------------------------------


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the dict returned by
    ``load_hierarchical_config()``.

    Missing sections get defaults.

    Raises:
        pydantic.ValidationError: On unknown sync keys or bad values.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)


# ---------------------------------------------------------------------------
# Adapter: UnifiedConfig -> runtime Config dataclass
# ---------------------------------------------------------------------------


def to_runtime_config(
    unified: UnifiedConfig,
    source: str | None = None,
    target: str | None = None,
    toggles: dict[str, bool | None] | None = None,
) -> Config:
    """Resolve a runtime ``Config`` from the file config plus CLI values.

    Delegates to ``load_config()`` with the ``sync`` section as YAML
    fallbacks, so the precedence is CLI > env > file > default and the
    result is validated.

    Args:
        unified: The unified config produced by ``build_config()``.
        source: CLI source folder, if given.
        target: CLI target folder, if given.
        toggles: CLI toggle values keyed by field name.

    Returns:
        Validated ``Config`` instance.
    """
    fallbacks: dict = dict(unified.sync.toggles())
    if unified.sync.source:
        fallbacks["source"] = unified.sync.source
    if unified.sync.target:
        fallbacks["target"] = unified.sync.target

    return load_config(
        source=source,
        target=target,
        toggles=toggles,
        yaml_fallbacks=fallbacks,
    )
