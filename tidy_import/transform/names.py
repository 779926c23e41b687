from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..models.parsed_file import ParsedFile
from ..models.schema import HeaderMapping

"""Full-name splitting.

``split_full_name`` is a heuristic, not a parser: it strips one leading
title and one trailing suffix, then assigns tokens by count. It is not comma
aware ("Smith, John" -> first "Smith,", last "John").

Token-count policy after stripping:
    0 -> both empty
    1 -> first only
    2 -> first, last
    3 -> middle initial dropped ("John Q. Public" -> John / Public),
         otherwise first + two-word last name
    4+ -> two-word first name, remainder is the last name
"""

__all__ = [
    "NAME_PREFIXES",
    "NAME_SUFFIXES",
    "SplitNameResult",
    "split_full_name",
    "split_name_stats",
    "apply_name_split",
]

logger = logging.getLogger(__name__)

NAME_PREFIXES: tuple[str, ...] = (
    "Mr", "Mr.", "Mrs", "Mrs.", "Ms", "Ms.", "Miss",
    "Dr", "Dr.", "Prof", "Prof.", "Professor",
    "Rev", "Rev.", "Reverend",
    "Hon", "Hon.", "Honorable",
    "Sir", "Dame", "Lady", "Lord",
)

NAME_SUFFIXES: tuple[str, ...] = (
    "Jr", "Jr.", "Junior",
    "Sr", "Sr.", "Senior",
    "I", "II", "III", "IV", "V",
    "PhD", "Ph.D", "Ph.D.",
    "MD", "M.D", "M.D.",
    "DDS", "D.D.S.",
    "Esq", "Esq.",
    "CPA", "RN", "MBA",
)

_PREFIX_BY_LOWER = {p.lower(): p for p in NAME_PREFIXES}
_SUFFIX_BY_LOWER = {s.lower(): s for s in NAME_SUFFIXES}


@dataclass(frozen=True)
class SplitNameResult:
    first_name: str
    last_name: str
    removed_prefix: str | None = None  # canonical spelling from NAME_PREFIXES
    removed_suffix: str | None = None  # canonical spelling from NAME_SUFFIXES


def _is_initial(token: str) -> bool:
    return len(token) == 1 or (len(token) == 2 and token.endswith("."))


def split_full_name(full_name: str | None) -> SplitNameResult:
    """Split a combined name into first/last (see module docstring for policy)."""
    if not full_name or not isinstance(full_name, str):
        return SplitNameResult("", "")

    words = full_name.split()
    if not words:
        return SplitNameResult("", "")

    removed_prefix = _PREFIX_BY_LOWER.get(words[0].lower())
    if removed_prefix is not None:
        words = words[1:]

    removed_suffix = None
    if words:
        removed_suffix = _SUFFIX_BY_LOWER.get(words[-1].lower())
        if removed_suffix is not None:
            words = words[:-1]

    if not words:
        return SplitNameResult("", "", removed_prefix, removed_suffix)

    if len(words) == 1:
        first, last = words[0], ""
    elif len(words) == 2:
        first, last = words
    elif len(words) == 3:
        if _is_initial(words[1]):
            first, last = words[0], words[2]
        else:
            first, last = words[0], " ".join(words[1:])
    else:
        first, last = " ".join(words[:2]), " ".join(words[2:])

    return SplitNameResult(first, last, removed_prefix, removed_suffix)


def split_name_stats(rows: list[dict[str, Any]], source_header: str) -> dict[str, int]:
    """Counts for the split preview: rows with a name, prefixes and suffixes removed."""
    with_name = with_prefix = with_suffix = 0
    for row in rows:
        value = row.get(source_header)
        if not value or not str(value).strip():
            continue
        with_name += 1
        result = split_full_name(str(value).strip())
        if result.removed_prefix:
            with_prefix += 1
        if result.removed_suffix:
            with_suffix += 1
    return {"rows_with_name": with_name, "with_prefix": with_prefix, "with_suffix": with_suffix}


def apply_name_split(
    parsed: ParsedFile, source_header: str, mappings: list[HeaderMapping]
) -> tuple[ParsedFile, list[HeaderMapping]]:
    """Replace a combined name column with First Name / Last Name columns.

    Returns new parsed data and mappings; the inputs are left untouched. The
    combined column disappears from headers, rows and mappings, and identity
    First Name / Last Name mappings are added when missing.
    """
    rows: list[dict[str, Any]] = []
    for row in parsed.rows:
        new_row = {k: v for k, v in row.items() if k != source_header}
        value = row.get(source_header)
        if value is not None and str(value).strip():
            result = split_full_name(str(value).strip())
            new_row["First Name"] = result.first_name
            new_row["Last Name"] = result.last_name
        else:
            new_row["First Name"] = ""
            new_row["Last Name"] = ""
        rows.append(new_row)

    headers = list(parsed.headers)
    lowered = [h.lower() for h in headers]
    if "first name" not in lowered:
        headers.insert(0, "First Name")
        lowered.insert(0, "first name")
    if "last name" not in lowered:
        headers.insert(lowered.index("first name") + 1, "Last Name")
    headers = [h for h in headers if h != source_header]

    new_mappings = [m for m in mappings if m.source_header != source_header]
    sources = {m.source_header for m in new_mappings}
    if "First Name" not in sources:
        new_mappings.insert(0, HeaderMapping("First Name", "First Name", 1.0))
    if "Last Name" not in sources:
        idx = next(i for i, m in enumerate(new_mappings) if m.source_header == "First Name")
        new_mappings.insert(idx + 1, HeaderMapping("Last Name", "Last Name", 1.0))

    logger.debug("split '%s' into First Name / Last Name for %d rows", source_header, len(rows))
    return ParsedFile(headers=headers, rows=rows, file_name=parsed.file_name), new_mappings
