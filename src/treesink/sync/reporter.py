"""Sync report formatting functions.

Provides human-readable and machine-readable output for a run:

- ``format_sync_report`` -- full post-run summary.
- ``format_dry_run_preview`` -- dry-run preview grouped by action.
- ``report_to_json`` -- structured dict for ``--json`` output.
"""

from __future__ import annotations

from collections import defaultdict

from .models import SyncAction, SyncReport, SyncResult

# ------------------------------------------------------------------
# Human-readable report
# ------------------------------------------------------------------


def _describe(result: SyncResult) -> str:
    if result.action == SyncAction.MOVE:
        return f"{result.path} -> {result.destination}"
    if result.is_folder:
        return f"{result.path}/"
    return result.path


def format_sync_report(report: SyncReport) -> str:
    """Format a complete run report as human-readable text.

    Sections are only included when they contain at least one result.

    Args:
        report: The completed run report.

    Returns:
        Multi-line formatted string.
    """
    lines = report.summary().splitlines()
    lines.append("")
    lines.append(f"Started: {report.started_at}")
    if report.completed_at:
        lines.append(f"Completed: {report.completed_at}")
    lines.append(f"Log file: {report.log_file}")
    lines.append("")

    sections = (
        ("Moved folders:", report.moved),
        (f"Quarantined to {report.lost_and_found}:", report.deleted),
        ("Copied:", report.copied),
    )
    for title, results in sections:
        if not results:
            continue
        lines.append(title)
        for r in results:
            lines.append(f"  {_describe(r)}")
        lines.append("")

    return "\n".join(lines).rstrip()


# ------------------------------------------------------------------
# Dry-run preview
# ------------------------------------------------------------------


def format_dry_run_preview(report: SyncReport) -> str:
    """Format a dry-run preview grouped by action type.

    Args:
        report: A dry-run report (``dry_run=True``).

    Returns:
        Multi-line formatted string.
    """
    lines: list[str] = []
    lines.append("DRY RUN -- No changes will be made")
    lines.append(f"Source: {report.source}")
    lines.append(f"Target: {report.target}")
    lines.append("")

    groups: dict[SyncAction, list[SyncResult]] = defaultdict(list)
    for r in report.results:
        groups[r.action].append(r)

    for action in (SyncAction.MOVE, SyncAction.DELETE, SyncAction.COPY):
        if action not in groups:
            continue
        lines.append(f"[{action.value.upper()}]")
        for r in groups[action]:
            lines.append(f"  {_describe(r)}")
        lines.append("")

    if not groups:
        lines.append("No changes needed.")
        lines.append("")

    return "\n".join(lines).rstrip()


# ------------------------------------------------------------------
# JSON output
# ------------------------------------------------------------------


def report_to_json(report: SyncReport) -> dict:
    """Convert a run report to a structured dict for JSON serialisation.

    Args:
        report: The run report.

    Returns:
        Dict with run info, counts, and per-action details.
    """
    results_list = []
    for r in report.results:
        entry: dict = {
            "action": r.action.value,
            "path": r.path,
        }
        if r.destination is not None:
            entry["destination"] = r.destination
        if r.is_folder:
            entry["is_folder"] = True
        results_list.append(entry)

    return {
        "source": report.source,
        "target": report.target,
        "dry_run": report.dry_run,
        "started_at": report.started_at,
        "completed_at": report.completed_at,
        "log_file": report.log_file,
        "lost_and_found": report.lost_and_found,
        "counts": {
            "orphans_found": report.orphans_found,
            "widows_found": report.widows_found,
            "moved": len(report.moved),
            "deleted": len(report.deleted),
            "copied": len(report.copied),
        },
        "results": results_list,
    }
