from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace

"""Cleaning statistics models.

``CleaningStats`` is an immutable summary of exactly one processing run.
Counts produced by steps outside ``process_data`` (address consolidation,
resolver edits) are folded in with ``merge`` instead of mutating counters.
``StatsAccumulator`` is the mutable helper used while a run is in progress.
"""

__all__ = [
    "CleaningStats",
    "StatsAccumulator",
]

# snake_case field -> camelCase key used by the UI/report layer
_CAMEL_KEYS = {
    "total_rows": "totalRows",
    "emails_cleaned": "emailsCleaned",
    "phones_normalized": "phonesNormalized",
    "empty_values_cleared": "emptyValuesCleared",
    "names_to_proper_case": "namesToProperCase",
    "status_validated": "statusValidated",
    "time_zone_validated": "timeZoneValidated",
    "tags_formatted": "tagsFormatted",
    "birthday_formatted": "birthdayFormatted",
    "addresses_consolidated": "addressesConsolidated",
    "empty_rows_removed": "emptyRowsRemoved",
    "empty_columns_removed": "emptyColumnsRemoved",
    "total_cells_modified": "totalCellsModified",
}
_SNAKE_KEYS = {v: k for k, v in _CAMEL_KEYS.items()}


@dataclass(frozen=True)
class CleaningStats:
    """Per-run counters for the cleaning summary."""
    total_rows: int = 0
    emails_cleaned: int = 0
    phones_normalized: int = 0
    empty_values_cleared: int = 0
    names_to_proper_case: int = 0
    status_validated: int = 0
    time_zone_validated: int = 0
    tags_formatted: int = 0
    birthday_formatted: int = 0
    addresses_consolidated: int = 0
    empty_rows_removed: int = 0
    empty_columns_removed: int = 0
    total_cells_modified: int = 0

    def merge(self, partial: CleaningStats | Mapping[str, int]) -> CleaningStats:
        """Return a new instance with ``partial`` counts added.

        ``partial`` may be another ``CleaningStats`` or a mapping keyed by
        snake_case or camelCase counter names.

        Raises:
            ValueError: unknown counter name in ``partial``
        """
        if isinstance(partial, CleaningStats):
            increments = asdict(partial)
        else:
            increments = {}
            for key, value in partial.items():
                name = _SNAKE_KEYS.get(key, key)
                if name not in _CAMEL_KEYS:
                    raise ValueError(f"unknown cleaning stat: {key}")
                increments[name] = increments.get(name, 0) + int(value)
        current = asdict(self)
        return CleaningStats(**{k: current[k] + increments.get(k, 0) for k in current})

    def with_total_rows(self, total_rows: int) -> CleaningStats:
        return replace(self, total_rows=total_rows)

    def to_dict(self) -> dict[str, int]:
        return {_CAMEL_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


class StatsAccumulator:
    """Mutable counter set for a single ``process_data`` call."""

    def __init__(self) -> None:
        self.counts: dict[str, int] = {name: 0 for name in _CAMEL_KEYS}

    def add(self, name: str, amount: int = 1) -> None:
        self.counts[name] += amount

    def snapshot(self) -> CleaningStats:
        return CleaningStats(**self.counts)
