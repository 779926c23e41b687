from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field

from ..cleaning.birthday import BirthdayFormat, count_reformatted, reformat_birthdays
from ..models.cleaning_stats import CleaningStats
from ..models.parsed_file import ProcessResult
from ..models.validation import DuplicateGroup, RowValidation
from .validator import detect_duplicates, validate_rows

"""Resolution steps applied to cleaned rows after ``process_data``.

Each step takes a ``Snapshot`` and returns a new one: rows are rebuilt (never
mutated), stats are folded in through ``CleaningStats.merge`` and validations
and duplicate groups are recomputed from the whole new row set. Row indices
always refer to the snapshot passed in.

Edit payloads use the column names as keys, e.g.
``{3: {"First Name": "Jo"}}`` for ``apply_name_edits``.
"""

__all__ = [
    "Snapshot",
    "build_snapshot",
    "remove_rows",
    "keep_first_duplicates",
    "assign_field",
    "apply_name_edits",
    "apply_contact_edits",
    "apply_birthday_format",
    "edit_rows",
    "rows_for_export",
]

logger = logging.getLogger(__name__)

# Field backfill -> counter credited per assignment
_ASSIGN_COUNTERS = {
    "Time Zone": "time_zone_validated",
    "Status": "status_validated",
}

_NAME_COUNTERS = {
    "First Name": "names_to_proper_case",
    "Last Name": "names_to_proper_case",
}

_CONTACT_COUNTERS = {
    "Email": "emails_cleaned",
    "Phone": "phones_normalized",
}


@dataclass(frozen=True)
class Snapshot:
    """Rows plus the stats and diagnostics computed for exactly those rows."""
    rows: list[dict[str, str]]
    stats: CleaningStats = field(default_factory=CleaningStats)
    validations: list[RowValidation] = field(default_factory=list)
    duplicates: list[DuplicateGroup] = field(default_factory=list)


def _snapshot(rows: list[dict[str, str]], stats: CleaningStats) -> Snapshot:
    return Snapshot(
        rows=rows,
        stats=stats,
        validations=validate_rows(rows),
        duplicates=detect_duplicates(rows),
    )


def build_snapshot(result: ProcessResult) -> Snapshot:
    return _snapshot(list(result.data), result.stats)


def remove_rows(snapshot: Snapshot, indices: Collection[int]) -> Snapshot:
    """Drop rows by index (duplicate removal); ``total_rows`` shrinks to match."""
    drop = set(indices)
    rows = [row for i, row in enumerate(snapshot.rows) if i not in drop]
    removed = len(snapshot.rows) - len(rows)
    logger.debug("removed %d rows", removed)
    return _snapshot(rows, snapshot.stats.with_total_rows(snapshot.stats.total_rows - removed))


def keep_first_duplicates(duplicates: Iterable[DuplicateGroup]) -> set[int]:
    """Default duplicate choice: keep the first row of each group, remove the rest."""
    remove: set[int] = set()
    for group in duplicates:
        remove.update(group.row_indices[1:])
    return remove


def assign_field(snapshot: Snapshot, field_name: str, assignments: Mapping[int, str]) -> Snapshot:
    """Backfill ``Time Zone`` or ``Status`` for the given rows.

    Every assignment counts as one modification, whether or not the value
    differed.

    Raises:
        ValueError: field other than Time Zone / Status
    """
    counter = _ASSIGN_COUNTERS.get(field_name)
    if counter is None:
        raise ValueError(f"cannot backfill field '{field_name}'")
    rows = [
        {**row, field_name: assignments[i]} if i in assignments else row
        for i, row in enumerate(snapshot.rows)
    ]
    applied = sum(1 for i in assignments if 0 <= i < len(snapshot.rows))
    stats = snapshot.stats.merge({counter: applied, "total_cells_modified": applied})
    return _snapshot(rows, stats)


def _apply_edits(
    snapshot: Snapshot, updates: Mapping[int, Mapping[str, str]], counters: Mapping[str, str]
) -> Snapshot:
    changes = {name: 0 for name in set(counters.values())}
    total = 0
    rows: list[dict[str, str]] = []
    for i, row in enumerate(snapshot.rows):
        update = updates.get(i)
        if not update:
            rows.append(row)
            continue
        new_row = dict(row)
        for column, value in update.items():
            if column not in counters:
                raise ValueError(f"column '{column}' cannot be edited in this step")
            if value != row.get(column):
                changes[counters[column]] += 1
                total += 1
            new_row[column] = value
        rows.append(new_row)
    stats = snapshot.stats.merge({**changes, "total_cells_modified": total})
    return _snapshot(rows, stats)


def apply_name_edits(snapshot: Snapshot, updates: Mapping[int, Mapping[str, str]]) -> Snapshot:
    """Manual First Name / Last Name fixes; only real changes are counted."""
    return _apply_edits(snapshot, updates, _NAME_COUNTERS)


def apply_contact_edits(snapshot: Snapshot, updates: Mapping[int, Mapping[str, str]]) -> Snapshot:
    """Manual Email / Phone fixes; only real changes are counted."""
    return _apply_edits(snapshot, updates, _CONTACT_COUNTERS)


def apply_birthday_format(snapshot: Snapshot, fmt: BirthdayFormat | str) -> Snapshot:
    rows = reformat_birthdays(snapshot.rows, fmt)
    changed = count_reformatted(snapshot.rows, rows)
    stats = snapshot.stats.merge({"birthday_formatted": changed, "total_cells_modified": changed})
    return _snapshot(rows, stats)


def edit_rows(snapshot: Snapshot, rows: list[dict[str, str]]) -> Snapshot:
    """Replace the row set wholesale (manual table edit); stats are kept as-is."""
    return _snapshot([dict(row) for row in rows], snapshot.stats)


def rows_for_export(snapshot: Snapshot, skipped: Collection[int] = ()) -> list[dict[str, str]]:
    skip = set(skipped)
    return [row for i, row in enumerate(snapshot.rows) if i not in skip]
