"""
Hierarchical configuration loader for treesink.

Finds YAML config files by convention, merges them with "project wins"
semantics and expands ``${VAR}`` references so that roots can be written
relative to the environment (``source: ${HOME}/photos``).

Usage:
    from treesink.config_loader import load_hierarchical_config

    raw = load_hierarchical_config()
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".treesink"

# ---------------------------------------------------------------------------
# Env var interpolation
# ---------------------------------------------------------------------------

# Matches ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+?)(?::-(.*?))?\}")


def interpolate_env_vars(value: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` patterns with env values.

    * ``${VAR}`` becomes the value of VAR, or ``""`` when unset.
    * ``${VAR:-default}`` uses *default* when VAR is unset or empty.
    * A ``${`` without a closing ``}`` is left as is.
    """

    def _replace(match: re.Match) -> str:
        env_val = os.environ.get(match.group(1))
        if env_val:
            return env_val
        return match.group(2) or ""

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _interpolate_recursive(obj: Any) -> Any:
    """Interpolate env vars in every string of a nested dict/list."""
    if isinstance(obj, str):
        return interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _interpolate_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_interpolate_recursive(item) for item in obj]
    return obj


def _load_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh)


# ---------------------------------------------------------------------------
# Convention-based file discovery
# ---------------------------------------------------------------------------


def discover_config_files(explicit: Path | None = None) -> list[Path]:
    """Return existing config file paths in precedence order (highest first).

    Search order:
        1. ``explicit`` (the ``--config`` CLI argument).  When given it is
           the only file used and it must exist.
        2. ``TREESINK_CONFIG`` env var.
        3. ``.treesink/config.yml`` in CWD (project-level)
        4. ``.treesink/config.yaml`` in CWD (alternate extension)
        5. ``~/.config/treesink/config.yml`` (XDG global)

    Raises:
        FileNotFoundError: If ``explicit`` does not exist.
    """
    if explicit is not None:
        explicit = explicit.expanduser().resolve()
        if not explicit.is_file():
            raise FileNotFoundError(f"Config file not found: {explicit}")
        return [explicit]

    candidates: list[Path] = []

    env_path = os.environ.get("TREESINK_CONFIG")
    if env_path:
        candidates.append(Path(env_path).expanduser().resolve())

    project_dir = Path.cwd() / CONFIG_DIR_NAME
    candidates.append(project_dir / "config.yml")
    candidates.append(project_dir / "config.yaml")
    candidates.append(Path.home() / ".config" / "treesink" / "config.yml")

    return [p for p in candidates if p.exists()]


# ---------------------------------------------------------------------------
# Config bootstrapping
# ---------------------------------------------------------------------------

_STARTER_CONFIG = """\
# treesink configuration
#
# Every sync setting can also come from the environment:
#   TREESINK_SOURCE, TREESINK_TARGET, TREESINK_MOVE_FOLDERS,
#   TREESINK_SYNC_FILES, TREESINK_DELETE, TREESINK_KEEP_VERSIONS,
#   TREESINK_CHECKSUM, TREESINK_DRY_RUN, TREESINK_VERBOSE
#
# sync:
#   source: ${HOME}/photos
#   target: /mnt/backup/photos
#   move_folders: true
#   sync_files: true
#   delete: false
#   keep_versions: true
#   checksum: true
#   dry_run: false
#   verbose: false
#
# logging:
#   level: INFO
#   file: null
#   format: text
"""


def ensure_config(target: Path | None = None) -> Path:
    """Return the active config file, writing a starter one if none exists.

    Args:
        target: Where to write the starter file.  Defaults to
            ``CWD / .treesink / config.yml``.

    Returns:
        Path to the config file (existing or newly created).
    """
    existing = discover_config_files()
    if existing:
        logger.debug("Config file already exists: %s", existing[0])
        return existing[0]

    config_path = target or Path.cwd() / CONFIG_DIR_NAME / "config.yml"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(_STARTER_CONFIG, encoding="utf-8")
    logger.info("Created starter config: %s", config_path)

    return config_path


# ---------------------------------------------------------------------------
# Hierarchical merge
# ---------------------------------------------------------------------------


def load_hierarchical_config(
    explicit: Path | None = None,
) -> dict[str, Any]:
    """Load and merge all discovered config files.

    Files are applied from lowest precedence to highest, and each file's
    top-level keys replace (not deep-merge) those loaded before it.  Env
    var interpolation runs once on the merged result.

    Args:
        explicit: Single config file to use instead of the search.

    Returns:
        The merged dict, empty when no config file exists.
    """
    paths = discover_config_files(explicit)
    if not paths:
        logger.debug("No config files found, using built-in defaults")
        return {}

    merged: dict[str, Any] = {}
    for path in reversed(paths):
        logger.debug("Loading config: %s", path)
        try:
            data = _load_yaml(path)
        except yaml.YAMLError:
            logger.exception("Failed to parse config file %s", path)
            raise

        if isinstance(data, dict):
            merged.update(data)
        elif data is not None:
            logger.warning(
                "Config file %s has non-dict root (%s), skipping",
                path,
                type(data).__name__,
            )

    return _interpolate_recursive(merged)
