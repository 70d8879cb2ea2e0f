"""Runtime configuration for a single treesink run.

Reads the source/target roots and feature toggles from CLI args,
environment variables, .env files, and YAML config file fallbacks.

Precedence (highest to lowest):
    CLI args > Environment variables > .env file > YAML config > Built-in defaults

Environment variables:
    TREESINK_SOURCE: Source folder, never modified (required)
    TREESINK_TARGET: Target folder brought in line with the source (required)
    TREESINK_MOVE_FOLDERS: Relocate folders moved on the source (default: true)
    TREESINK_SYNC_FILES: Copy new and changed files (default: true)
    TREESINK_DELETE: Quarantine target entries missing from source (default: false)
    TREESINK_KEEP_VERSIONS: Quarantine old versions of replaced files (default: true)
    TREESINK_CHECKSUM: Compare MD5 digests when size and time agree (default: true)
    TREESINK_DRY_RUN: Log every action without touching files (default: false)
    TREESINK_VERBOSE: Echo the run log to stdout (default: false)
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .validators import validate_folder, validate_roots

logger = logging.getLogger(__name__)

TOOL_NAME = "treesink"
START_TIME_FORMAT = "%Y%m%dT%H%M%S"

# Toggle name -> built-in default
TOGGLE_DEFAULTS: dict[str, bool] = {
    "move_folders": True,
    "sync_files": True,
    "delete": False,
    "keep_versions": True,
    "checksum": True,
    "dry_run": False,
    "verbose": False,
}


def make_start_time() -> str:
    """Return the local run-start timestamp used to name run artifacts."""
    return datetime.now().strftime(START_TIME_FORMAT)


@dataclass
class Config:
    source: Path
    target: Path
    move_folders: bool = True
    sync_files: bool = True
    delete: bool = False
    keep_versions: bool = True
    checksum: bool = True
    dry_run: bool = False
    verbose: bool = False
    start_time: str = field(default_factory=make_start_time)

    def lost_and_found_path(self) -> Path:
        """Quarantine directory for this run, directly under the target."""
        return self.target / f"{TOOL_NAME.upper()}_LOST_AND_FOUND_{self.start_time}"

    def log_file_path(self) -> Path:
        """Run log file for this run, directly under the target."""
        return self.target / f"{TOOL_NAME}_{self.start_time}.log"


def parse_bool(value: str) -> bool:
    """Convert a string to a boolean.

    Accepts "true", "yes", "on", "1" for True and "false", "no", "off",
    "0" for False, ignoring case and surrounding whitespace.

    Raises:
        ValueError: For any other value.
    """
    normalized = value.strip().lower()
    if normalized in ("true", "yes", "on", "1"):
        return True
    if normalized in ("false", "no", "off", "0"):
        return False
    raise ValueError(f"Invalid boolean value {value}")


def validate_config(config: Config) -> None:
    """Validate configuration values and raise ValueError if invalid.

    Args:
        config: Config instance to validate.

    Raises:
        ValueError: If a root is missing, is not a directory, or the two
            roots overlap.
    """
    for path, name in (
        (config.source, "Source folder"),
        (config.target, "Target folder"),
    ):
        is_valid, message = validate_folder(path, name)
        if not is_valid:
            raise ValueError(message)

    is_valid, message = validate_roots(config.source, config.target)
    if not is_valid:
        raise ValueError(message)

    if config.dry_run:
        logger.info("Dry run: no files will be created, moved or copied")


def load_config(
    source: str | None = None,
    target: str | None = None,
    toggles: dict[str, bool | None] | None = None,
    yaml_fallbacks: dict | None = None,
) -> Config:
    """Load configuration with unified precedence.

    Resolution order for each field (highest to lowest):
        CLI arg > env var / .env > yaml_fallbacks > built-in default

    The caller is responsible for calling ``load_dotenv()`` before this
    function so that .env values are available via ``os.getenv()``.

    Args:
        source: Override source folder (takes precedence over env var and YAML).
        target: Override target folder (takes precedence over env var and YAML).
        toggles: CLI values for the boolean toggles, keyed by field name.
            ``None`` values mean "not given on the command line".
        yaml_fallbacks: Dict of values from the YAML config file ``sync``
            section. Used as fallback when CLI arg and env var are both unset.

    Returns:
        Validated Config instance.

    Raises:
        ValueError: If source or target is missing after checking all
            sources, if an env var holds an invalid boolean, or if
            validation fails.
    """
    fb = yaml_fallbacks or {}
    cli = toggles or {}

    # --- Path fields: CLI > env > YAML > error ---

    source_path = source or os.getenv("TREESINK_SOURCE") or fb.get("source")
    if not source_path:
        raise ValueError(
            "Source folder not specified. Set TREESINK_SOURCE environment "
            "variable, pass --source CLI argument, or add 'source' to config.yml."
        )

    target_path = target or os.getenv("TREESINK_TARGET") or fb.get("target")
    if not target_path:
        raise ValueError(
            "Target folder not specified. Set TREESINK_TARGET environment "
            "variable, pass --target CLI argument, or add 'target' to config.yml."
        )

    # --- Boolean fields: CLI > env > YAML > default ---

    def get_bool_env(key: str) -> bool | None:
        """Return True/False from env var, or None if unset."""
        val = os.getenv(key)
        if val is None:
            return None
        return parse_bool(val)

    resolved: dict[str, bool] = {}
    for name, default in TOGGLE_DEFAULTS.items():
        if cli.get(name) is not None:
            resolved[name] = bool(cli[name])
            continue
        env_value = get_bool_env(f"TREESINK_{name.upper()}")
        if env_value is not None:
            resolved[name] = env_value
        elif fb.get(name) is not None:
            resolved[name] = bool(fb[name])
        else:
            resolved[name] = default

    config = Config(
        source=Path(source_path.strip()),
        target=Path(target_path.strip()),
        **resolved,
    )
    validate_config(config)
    return config
