from __future__ import annotations

from collections.abc import Sized

from ..models.cleaning_stats import CleaningStats

"""SUMMARY line rendering for the cleaning CLI."""

__all__ = [
    "render_summary_line",
]


def render_summary_line(stats: CleaningStats, issues: Sized | int, duplicates: Sized | int) -> str:
    """Render the single-line run summary.

    Format:
    SUMMARY rows={n} cells_modified={n} emails={n} phones={n} names={n}
    empty_cleared={n} empty_rows={n} empty_cols={n} addresses={n}
    issues={n} duplicates={n}

    ``issues`` / ``duplicates`` accept either a count or the collection
    itself (validations, duplicate groups).

    Examples:
        >>> render_summary_line(CleaningStats(total_rows=3), 1, 0)  # doctest: +ELLIPSIS
        'SUMMARY rows=3 cells_modified=0 emails=0 ... issues=1 duplicates=0'
    """
    issue_count = issues if isinstance(issues, int) else len(issues)
    duplicate_count = duplicates if isinstance(duplicates, int) else len(duplicates)
    return (
        f"SUMMARY rows={stats.total_rows} "
        f"cells_modified={stats.total_cells_modified} "
        f"emails={stats.emails_cleaned} "
        f"phones={stats.phones_normalized} "
        f"names={stats.names_to_proper_case} "
        f"empty_cleared={stats.empty_values_cleared} "
        f"empty_rows={stats.empty_rows_removed} "
        f"empty_cols={stats.empty_columns_removed} "
        f"addresses={stats.addresses_consolidated} "
        f"issues={issue_count} "
        f"duplicates={duplicate_count}"
    )
