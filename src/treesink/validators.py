"""
Input validation functions for treesink.

Provides validation for the source and target roots handed to the sync
engine, so that problems are reported before anything under the target
is touched.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Error message formatting helpers
# ---------------------------------------------------------------------------


def format_validation_error(field_name: str, reason: str) -> str:
    """
    Generate consistent error message for validation failures.

    Args:
        field_name: Human-readable field name (e.g., "Source folder")
        reason: Description of validation failure (e.g., "not specified")

    Returns:
        Formatted error message string
    """
    return f"{field_name} {reason}"


def validate_folder(path: Path | None, field_name: str) -> tuple[bool, str]:
    """
    Validate that a sync root is given and is an existing directory.

    Args:
        path: The folder path to validate (``None`` or empty if unset)
        field_name: Human-readable name used in the error message

    Returns:
        Tuple of (is_valid, error_message).
        Returns (True, "") if valid, (False, reason) if invalid.
    """
    if path is None or not str(path).strip():
        return (False, format_validation_error(field_name, "not specified"))

    if not path.is_dir():
        return (
            False,
            format_validation_error(field_name, f"not found: {str(path)!r}"),
        )

    return (True, "")


def validate_roots(source: Path, target: Path) -> tuple[bool, str]:
    """
    Validate that source and target do not overlap.

    Args:
        source: Existing source directory
        target: Existing target directory

    Returns:
        Tuple of (is_valid, error_message).

    Validation rules:
        - Source and target cannot be the same directory
        - Target cannot live inside source (the source is never written)
        - Source cannot live inside target (it would be quarantined)
    """
    source_resolved = source.resolve()
    target_resolved = target.resolve()

    if source_resolved == target_resolved:
        return (
            False,
            format_validation_error(
                "Target folder", "cannot be the same as the source folder"
            ),
        )

    if target_resolved.is_relative_to(source_resolved):
        return (
            False,
            format_validation_error(
                "Target folder", "cannot be inside the source folder"
            ),
        )

    if source_resolved.is_relative_to(target_resolved):
        return (
            False,
            format_validation_error(
                "Source folder", "cannot be inside the target folder"
            ),
        )

    return (True, "")
