"""Command line entry point for treesink."""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from . import __version__
from .config import TOGGLE_DEFAULTS
from .config_loader import ensure_config, load_hierarchical_config
from .config_schema import build_config, to_runtime_config
from .logger import setup_logging
from .sync import (
    SyncEngine,
    format_dry_run_preview,
    format_sync_report,
    report_to_json,
)

logger = logging.getLogger(__name__)

_TOGGLE_HELP = {
    "move_folders": "relocate target folders that were moved or renamed on the source",
    "sync_files": "copy new and changed files from source to target",
    "delete": "quarantine target entries that no longer exist in the source",
    "keep_versions": "quarantine the old version of every replaced file",
    "checksum": "compare MD5 digests when size and modification time agree",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treesink",
        description="One-way, non-destructive sync of a target folder toward a source folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview what a sync would do
  treesink --source ~/photos --target /mnt/backup/photos --dry-run --verbose

  # Sync, quarantining anything the source no longer has
  treesink --source ~/photos --target /mnt/backup/photos --delete

  # Use settings from .treesink/config.yml (or TREESINK_* env vars)
  treesink

  # Write a starter config file
  treesink --init-config

Note: the source is never modified.  Removed or replaced target entries
are moved into TREESINK_LOST_AND_FOUND_<timestamp>/ under the target,
next to the run's treesink_<timestamp>.log.
        """,
    )

    parser.add_argument(
        "--source",
        help="Source folder (takes precedence over TREESINK_SOURCE and config files)",
    )
    parser.add_argument(
        "--target",
        help="Target folder (takes precedence over TREESINK_TARGET and config files)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file to use instead of the .treesink/config.yml search",
    )
    for name, text in _TOGGLE_HELP.items():
        default = "on" if TOGGLE_DEFAULTS[name] else "off"
        parser.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"{text} (default: {default})",
        )
    parser.add_argument(
        "--dry-run",
        action="store_const",
        const=True,
        default=None,
        help="Log every action without creating, moving or copying anything",
    )
    parser.add_argument(
        "--verbose",
        action="store_const",
        const=True,
        default=None,
        help="Echo the run log to stdout",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final report as JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug diagnostics on stderr",
    )
    parser.add_argument(
        "--log-file",
        help="Also write diagnostics to this file",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        help="Diagnostic log format (default: text)",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Create a starter .treesink/config.yml and exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"treesink version {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run treesink with *argv* and return the process exit status."""
    args = build_parser().parse_args(argv)
    load_dotenv()

    try:
        unified = build_config(load_hierarchical_config(args.config))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1

    setup_logging(
        debug=args.debug,
        log_file=args.log_file or unified.logging.file,
        debug_format=args.log_format or unified.logging.format,
        level=unified.logging.level,
    )

    if args.init_config:
        path = ensure_config()
        print(f"Config file: {path}")
        return 0

    toggles = {name: getattr(args, name) for name in TOGGLE_DEFAULTS}

    try:
        config = to_runtime_config(
            unified,
            source=args.source,
            target=args.target,
            toggles=toggles,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.debug("Resolved configuration: %r", config)

    try:
        report = SyncEngine(config).run()
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(
            f"See {config.log_file_path()} for the actions taken before the failure.",
            file=sys.stderr,
        )
        return 1

    if args.json:
        print(json.dumps(report_to_json(report), indent=2))
    elif report.dry_run:
        print(format_dry_run_preview(report))
    else:
        print(format_sync_report(report))
    return 0


def run() -> None:
    """Entry point that handles errors gracefully and parses CLI arguments."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    run()
