from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..cleaning.values import clean_cell
from ..models.cleaning_stats import StatsAccumulator
from ..models.parsed_file import ProcessResult
from ..models.schema import TARGET_HEADERS, HeaderMapping, StandardField, TargetField

"""Row processor: apply a header mapping to raw rows and clean every cell.

Processing order (per call):
1. Resolve every mapping target (unknown non-custom targets raise
   ``MappingError`` before any row is touched)
2. Build one output row per input row, pre-filled with "" for every target
3. Clean mapped cells and count modifications per field
4. Drop rows with no non-blank value, then drop target columns that are blank
   in every surviving row
5. ``total_rows`` = surviving row count
"""

__all__ = [
    "process_data",
]

logger = logging.getLogger(__name__)

# Per-field counter bumped when a cell of that field is modified.
# Address, Notes and custom fields only count toward total_cells_modified.
_FIELD_COUNTERS: dict[StandardField, str] = {
    StandardField.EMAIL: "emails_cleaned",
    StandardField.PHONE: "phones_normalized",
    StandardField.FIRST_NAME: "names_to_proper_case",
    StandardField.LAST_NAME: "names_to_proper_case",
    StandardField.STATUS: "status_validated",
    StandardField.TIME_ZONE: "time_zone_validated",
    StandardField.TAGS: "tags_formatted",
    StandardField.BIRTHDAY: "birthday_formatted",
}


def _resolve_mappings(mappings: Iterable[HeaderMapping]) -> list[tuple[HeaderMapping, TargetField]]:
    resolved: list[tuple[HeaderMapping, TargetField]] = []
    for mapping in mappings:
        if not mapping.target_header or not mapping.source_header:
            continue
        resolved.append((mapping, mapping.target))
    return resolved


def _target_headers(resolved: list[tuple[HeaderMapping, TargetField]]) -> list[str]:
    headers = list(TARGET_HEADERS)
    for mapping, target in resolved:
        if not isinstance(target, StandardField) and mapping.target_header not in headers:
            headers.append(mapping.target_header)
    return headers


def _is_blank(value: str) -> bool:
    return not value or not value.strip()


def process_data(rows: Iterable[Mapping[str, Any]], mappings: Iterable[HeaderMapping]) -> ProcessResult:
    """Clean raw rows into the target schema.

    The input rows are never modified. Output rows are new dicts keyed by
    target header, in input order minus the dropped empty rows.

    Raises:
        MappingError: a mapping targets an unknown header not marked custom
    """
    resolved = _resolve_mappings(mappings)
    headers = _target_headers(resolved)
    acc = StatsAccumulator()

    built: list[dict[str, str]] = []
    for row in rows:
        out = dict.fromkeys(headers, "")
        for mapping, target in resolved:
            raw = row.get(mapping.source_header)
            cleaned, was_modified = clean_cell(raw, target)
            out[mapping.target_header] = cleaned
            if not was_modified:
                continue
            acc.add("total_cells_modified")
            counter = _FIELD_COUNTERS.get(target) if isinstance(target, StandardField) else None
            if counter is not None:
                acc.add(counter)
            if cleaned == "" and raw:
                acc.add("empty_values_cleared")
        built.append(out)

    surviving: list[dict[str, str]] = []
    for out in built:
        if all(_is_blank(v) for v in out.values()):
            acc.add("empty_rows_removed")
            continue
        surviving.append(out)

    if surviving:
        keep = [h for h in surviving[0] if any(not _is_blank(r.get(h, "")) for r in surviving)]
        acc.add("empty_columns_removed", len(surviving[0]) - len(keep))
        surviving = [{h: r[h] for h in keep} for r in surviving]

    stats = acc.snapshot().with_total_rows(len(surviving))
    logger.debug(
        "processed rows: kept=%d empty_rows=%d empty_cols=%d",
        stats.total_rows, stats.empty_rows_removed, stats.empty_columns_removed,
    )
    return ProcessResult(data=surviving, stats=stats)
