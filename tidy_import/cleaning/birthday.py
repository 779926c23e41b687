from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

"""Birthday parsing and rendering.

``parse_birthday`` recognises, in order:

1. ISO-like ``YYYY-MM-DD`` / ``YYYY/MM/DD`` (always wins)
2. ``A/B/YYYY`` or ``A-B-YYYY``. ``A > 12`` means day-first, ``B > 12`` means
   month-first, and the ambiguous case defaults to month-first (US). Callers
   that want day-first for ambiguous input pick a format explicitly and call
   ``reformat_birthdays``.
3. ``Month D, YYYY`` and ``D Month, YYYY`` (full or abbreviated month names,
   comma optional)
"""

__all__ = [
    "BirthdayFormat",
    "BirthdayParts",
    "MONTH_NAMES",
    "parse_birthday",
    "format_birthday",
    "clean_birthday",
    "reformat_birthdays",
    "count_reformatted",
]


class BirthdayFormat(Enum):
    MM_DD_YYYY = "MM/DD/YYYY"
    DD_MM_YYYY = "DD/MM/YYYY"
    YYYY_MM_DD = "YYYY/MM/DD"


@dataclass(frozen=True)
class BirthdayParts:
    """Zero-padded month/day and four-digit year, all as strings."""
    month: str
    day: str
    year: str


MONTH_NAMES: dict[str, str] = {
    "jan": "01", "january": "01",
    "feb": "02", "february": "02",
    "mar": "03", "march": "03",
    "apr": "04", "april": "04",
    "may": "05",
    "jun": "06", "june": "06",
    "jul": "07", "july": "07",
    "aug": "08", "august": "08",
    "sep": "09", "sept": "09", "september": "09",
    "oct": "10", "october": "10",
    "nov": "11", "november": "11",
    "dec": "12", "december": "12",
}

_ISO_RE = re.compile(r"^([0-9]{4})[/-]([0-9]{1,2})[/-]([0-9]{1,2})$")
_NUMERIC_RE = re.compile(r"^([0-9]{1,2})[/-]([0-9]{1,2})[/-]([0-9]{4})$")
_MONTH_FIRST_RE = re.compile(r"^([a-zA-Z]+)\s+([0-9]{1,2}),?\s+([0-9]{4})$")
_DAY_FIRST_RE = re.compile(r"^([0-9]{1,2})\s+([a-zA-Z]+),?\s+([0-9]{4})$")


def parse_birthday(birthday: str | None) -> BirthdayParts | None:
    """Parse a birthday string into components, or None when unrecognised."""
    if not birthday or not isinstance(birthday, str):
        return None
    trimmed = birthday.strip()

    m = _ISO_RE.match(trimmed)
    if m:
        year, month, day = m.groups()
        return BirthdayParts(month=month.zfill(2), day=day.zfill(2), year=year)

    m = _NUMERIC_RE.match(trimmed)
    if m:
        first, second, year = m.groups()
        if int(first) > 12 and int(second) <= 12:
            return BirthdayParts(month=second.zfill(2), day=first.zfill(2), year=year)
        # month-first: either unambiguous (second > 12) or the US default
        return BirthdayParts(month=first.zfill(2), day=second.zfill(2), year=year)

    m = _MONTH_FIRST_RE.match(trimmed)
    if m:
        month_text, day, year = m.groups()
        month = MONTH_NAMES.get(month_text.lower())
        if month:
            return BirthdayParts(month=month, day=day.zfill(2), year=year)

    m = _DAY_FIRST_RE.match(trimmed)
    if m:
        day, month_text, year = m.groups()
        month = MONTH_NAMES.get(month_text.lower())
        if month:
            return BirthdayParts(month=month, day=day.zfill(2), year=year)

    return None


def format_birthday(parts: BirthdayParts, fmt: BirthdayFormat | str = BirthdayFormat.MM_DD_YYYY) -> str:
    """Render parsed components using one of the three supported templates."""
    fmt = BirthdayFormat(fmt)
    if fmt is BirthdayFormat.DD_MM_YYYY:
        return f"{parts.day}/{parts.month}/{parts.year}"
    if fmt is BirthdayFormat.YYYY_MM_DD:
        return f"{parts.year}/{parts.month}/{parts.day}"
    return f"{parts.month}/{parts.day}/{parts.year}"


def clean_birthday(birthday: str | None) -> str:
    """Normalize to MM/DD/YYYY; unparseable values pass through trimmed."""
    parts = parse_birthday(birthday)
    if parts is not None:
        return format_birthday(parts)
    return birthday.strip() if birthday else ""


def reformat_birthdays(rows: list[dict[str, str]], fmt: BirthdayFormat | str) -> list[dict[str, str]]:
    """Re-render every parseable Birthday in ``fmt``.

    Rows with an empty or unparseable Birthday are returned unchanged. The
    input list and its rows are not modified.
    """
    fmt = BirthdayFormat(fmt)
    out: list[dict[str, str]] = []
    for row in rows:
        birthday = row.get("Birthday")
        parts = parse_birthday(birthday) if birthday else None
        if parts is None:
            out.append(row)
            continue
        out.append({**row, "Birthday": format_birthday(parts, fmt)})
    return out


def count_reformatted(before: list[dict[str, str]], after: list[dict[str, str]]) -> int:
    """Number of rows whose non-empty Birthday differs between two snapshots."""
    changed = 0
    for old, new in zip(before, after, strict=False):
        old_value = old.get("Birthday") or ""
        new_value = new.get("Birthday") or ""
        if old_value and new_value and old_value != new_value:
            changed += 1
    return changed
