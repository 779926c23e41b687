from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ..models.parsed_file import ParsedFile
from ..models.schema import AddressComponent, HeaderMapping

"""Address consolidation: join address fragment columns into one Address."""

__all__ = [
    "SEPARATOR_OPTIONS",
    "consolidate_address",
    "apply_address_consolidation",
]

logger = logging.getLogger(__name__)

# separator -> label shown by the interactive resolver
SEPARATOR_OPTIONS: dict[str, str] = {
    ", ": "Comma (123 Main St, Austin, TX)",
    " ": "Space (123 Main St Austin TX)",
    " - ": "Dash (123 Main St - Austin - TX)",
}

_REPEATED_COMMA_RE = re.compile(r",\s*,+")
_WHITESPACE_RUN_RE = re.compile(r"\s+")


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def consolidate_address(
    row: Mapping[str, Any], components: Iterable[AddressComponent], separator: str = ", "
) -> str:
    """Join the row's non-empty component values in ``order``.

    Repeated commas collapse to one, whitespace runs collapse to a single
    space and the result is trimmed. No non-empty component yields "".
    """
    ordered = sorted(components, key=lambda c: c.order)
    parts = [_cell_text(row.get(c.source_header)) for c in ordered]
    joined = separator.join(p for p in parts if p)
    joined = _REPEATED_COMMA_RE.sub(",", joined)
    return _WHITESPACE_RUN_RE.sub(" ", joined).strip()


def apply_address_consolidation(
    parsed: ParsedFile,
    components: list[AddressComponent],
    separator: str,
    mappings: list[HeaderMapping],
) -> tuple[ParsedFile, list[HeaderMapping], int]:
    """Write a consolidated Address into every row and drop the consumed columns.

    Component columns are matched case-insensitively. Afterwards exactly one
    ``Address`` source column exists and it maps to the Address target.

    Returns:
        (parsed, mappings, consolidated_row_count)
    """
    remove = {c.source_header.lower() for c in components}

    rows: list[dict[str, Any]] = []
    for row in parsed.rows:
        address = consolidate_address(row, components, separator)
        new_row = {k: v for k, v in row.items() if k.lower() not in remove or k.lower() == "address"}
        new_row = {("Address" if k.lower() == "address" else k): v for k, v in new_row.items()}
        new_row["Address"] = address
        rows.append(new_row)

    headers = [h for h in parsed.headers if h.lower() not in remove or h.lower() == "address"]
    if any(h.lower() == "address" for h in headers):
        headers = ["Address" if h.lower() == "address" else h for h in headers]
    else:
        headers.append("Address")

    kept = [m for m in mappings if m.source_header.lower() not in remove or m.source_header.lower() == "address"]
    if any(m.source_header.lower() == "address" for m in kept):
        new_mappings = [
            HeaderMapping("Address", "Address", 1.0) if m.source_header.lower() == "address" else m
            for m in kept
        ]
    else:
        new_mappings = [*kept, HeaderMapping("Address", "Address", 1.0)]
    # the Address target now belongs to the consolidated column only
    new_mappings = [
        HeaderMapping(m.source_header, None, 0.0) if m.target_header == "Address" and m.source_header != "Address" else m
        for m in new_mappings
    ]

    logger.debug("consolidated %d address columns for %d rows", len(components), len(rows))
    return ParsedFile(headers=headers, rows=rows, file_name=parsed.file_name), new_mappings, len(rows)
