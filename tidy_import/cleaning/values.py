from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

from ..models.schema import CustomField, StandardField, TargetField
from .birthday import clean_birthday
from .timezones import TIMEZONE_ALIASES, VALID_TIME_ZONES

"""Per-field value cleaners.

Every cleaner maps a raw string to a normalized string, never raises, maps
``None`` to ``""`` and is idempotent. ``clean_cell`` applies the empty-value
rule first and then dispatches on the target field.
"""

__all__ = [
    "VALID_STATUSES",
    "MAX_NAME_LENGTH",
    "EMPTY_SENTINELS",
    "is_empty_value",
    "clean_email",
    "clean_phone",
    "to_proper_case",
    "clean_status",
    "clean_tags",
    "clean_time_zone",
    "clean_birthday",
    "clean_cell",
    "validate_email_format",
    "validate_status",
    "validate_time_zone",
    "get_valid_statuses",
]

VALID_STATUSES: tuple[str, ...] = ("Lead", "Customer", "VIP")

# Max characters accepted by the CRM for First Name / Last Name
MAX_NAME_LENGTH = 26

# Compared against the trimmed, lowercased value
EMPTY_SENTINELS = frozenset({"", "n/a", "null", "undefined"})

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_NON_DIGIT_RE = re.compile(r"[^0-9]")
_WHITESPACE_RE = re.compile(r"\s")
_TAG_SEPARATOR_RE = re.compile(r"[,;|]")

_STATUS_BY_LOWER = {s.lower(): s for s in VALID_STATUSES}
_TIME_ZONE_BY_LOWER = {tz.lower(): tz for tz in VALID_TIME_ZONES}


def is_empty_value(value: Any) -> bool:
    """True for None/NaN and for strings that are blank or an empty sentinel."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if not isinstance(value, str):
        return False
    return value.strip().lower() in EMPTY_SENTINELS


def clean_email(email: str | None) -> str:
    """Lowercase and remove every whitespace character (internal ones too)."""
    if not email:
        return ""
    return _WHITESPACE_RE.sub("", email.lower())


def clean_phone(phone: str | None) -> str:
    """Keep ASCII digits only; no length assumptions (international safe)."""
    if not phone:
        return ""
    return _NON_DIGIT_RE.sub("", phone)


def to_proper_case(name: str | None) -> str:
    """Proper-case each single-space-delimited token ("JOHN" -> "John").

    Apostrophes, hyphens and prefixes are not special-cased, so "McDonald"
    becomes "Mcdonald".
    """
    if not name:
        return ""
    return " ".join(word[:1].upper() + word[1:] for word in name.lower().split(" "))


def clean_status(status: str | None) -> str:
    """Canonical casing for Lead/Customer/VIP; anything else is returned trimmed."""
    if not status:
        return ""
    trimmed = status.strip()
    return _STATUS_BY_LOWER.get(trimmed.lower(), trimmed)


def clean_tags(tags: str | None) -> str:
    """Split on , ; or |, drop blanks and rejoin with |."""
    if not tags:
        return ""
    pieces = (piece.strip() for piece in _TAG_SEPARATOR_RE.split(tags))
    return "|".join(piece for piece in pieces if piece)


def clean_time_zone(time_zone: str | None) -> str:
    """Map a time-zone spelling onto a canonical CRM label.

    Lookup order: canonical label, exact alias, then the first alias that
    contains or is contained by the value. Unknown values come back trimmed
    and are flagged by validation.
    """
    if not time_zone:
        return ""
    trimmed = time_zone.strip()
    lowered = trimmed.lower()

    canonical = _TIME_ZONE_BY_LOWER.get(lowered)
    if canonical is not None:
        return canonical

    alias = TIMEZONE_ALIASES.get(lowered)
    if alias is not None:
        return alias

    for key, canonical in TIMEZONE_ALIASES.items():
        if key in lowered or lowered in key:
            return canonical

    return trimmed


def validate_email_format(email: str | None) -> bool:
    if not email:
        return False
    return EMAIL_RE.match(email) is not None


def validate_status(status: str | None) -> bool:
    """Empty is valid; otherwise must be a known status (case-insensitive)."""
    if not status:
        return True
    return status.lower() in _STATUS_BY_LOWER


def validate_time_zone(time_zone: str | None) -> bool:
    """Empty is valid; otherwise exact case-insensitive canonical match only."""
    if not time_zone:
        return True
    return time_zone.lower() in _TIME_ZONE_BY_LOWER


def get_valid_statuses() -> list[str]:
    return list(VALID_STATUSES)


def _identity(value: str) -> str:
    return value


STANDARD_CLEANERS: dict[StandardField, Callable[[str], str]] = {
    StandardField.EMAIL: clean_email,
    StandardField.FIRST_NAME: to_proper_case,
    StandardField.LAST_NAME: to_proper_case,
    StandardField.PHONE: clean_phone,
    StandardField.ADDRESS: _identity,
    StandardField.BIRTHDAY: clean_birthday,
    StandardField.TIME_ZONE: clean_time_zone,
    StandardField.STATUS: clean_status,
    StandardField.TAGS: clean_tags,
    StandardField.NOTES: _identity,
}

# Import-time guard: every standard column needs a cleaner
_missing = set(StandardField) - set(STANDARD_CLEANERS)
if _missing:  # pragma: no cover
    raise RuntimeError(f"no cleaner registered for: {sorted(f.value for f in _missing)}")


def _as_text(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip()


def clean_cell(value: Any, target: TargetField | None) -> tuple[str, bool]:
    """Clean one raw cell for ``target``.

    Returns:
        (cleaned_value, was_modified) where ``was_modified`` compares against
        the trimmed string form of the raw value
    """
    original = _as_text(value)

    if is_empty_value(value):
        return "", original != ""

    if target is None or isinstance(target, CustomField):
        return original, False

    cleaned = STANDARD_CLEANERS[target](original)
    return cleaned, cleaned != original
