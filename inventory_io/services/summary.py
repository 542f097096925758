from __future__ import annotations

from ..models.import_result import ImportResult

"""Result surface rendering for import runs.

Turns an ImportResult into the lines shown to the operator: a SUMMARY line,
a capped list of row errors, and guidance for categories that were not found.

SUMMARY line format:
SUMMARY file={name} rows={total} valid={valid} invalid={invalid} missing_categories={n}
"""

DEFAULT_ERROR_DISPLAY_LIMIT = 10


def render_summary_line(file_name: str, result: ImportResult) -> str:
    """Render the SUMMARY line for one imported file.

    Examples:
        >>> render_summary_line("stock.xlsx", ImportResult())
        'SUMMARY file=stock.xlsx rows=0 valid=0 invalid=0 missing_categories=0'
    """
    return (
        f"SUMMARY file={file_name} "
        f"rows={result.total_rows} "
        f"valid={result.successful} "
        f"invalid={result.failed} "
        f"missing_categories={len(result.missing_categories)}"
    )


def format_error_list(errors: list[str], limit: int = DEFAULT_ERROR_DISPLAY_LIMIT) -> list[str]:
    """Return at most ``limit`` errors plus a trailing "... and N more errors" line."""
    if limit < 0:
        raise ValueError("limit must be >= 0")
    shown = errors[:limit]
    remaining = len(errors) - len(shown)
    if remaining > 0:
        shown = shown + [f"... and {remaining} more errors"]
    return shown


def format_missing_categories(names: list[str]) -> str | None:
    """Guidance text for unresolved categories, or None when there are none."""
    if not names:
        return None
    quoted = ", ".join(f'"{n}"' for n in names)
    return (
        f"Categories not found: {quoted}. Rows using these categories were not imported; "
        "create the categories or rename them in the file and import again."
    )
