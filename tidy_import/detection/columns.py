from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from ..models.schema import AddressComponent, AddressRole

"""Header-level structure detection.

- ``detect_full_name_column``: a single combined name column that should be
  split into First Name / Last Name.
- ``detect_address_component_columns``: address fragments (street, city,
  zip, ...) that can be consolidated into one Address value.

Both functions only look at header text, never at cell values.
"""

__all__ = [
    "NameSplitDetection",
    "ADDRESS_CONSOLIDATION_THRESHOLD",
    "detect_full_name_column",
    "detect_address_component_columns",
]

logger = logging.getLogger(__name__)

# Callers offer consolidation only when at least this many fragments exist
ADDRESS_CONSOLIDATION_THRESHOLD = 2

_SEPARATOR_RE = re.compile(r"[_\-\s]+")


@dataclass(frozen=True)
class NameSplitDetection:
    source_header: str
    type: Literal["full_name", "combined_name"]


# Checked in order against each header; first match wins
_COMBINED_NAME_PATTERNS: tuple[tuple[re.Pattern[str], Literal["full_name", "combined_name"]], ...] = (
    (re.compile(r"^fullname$", re.IGNORECASE), "full_name"),
    (re.compile(r"^full[\s_-]?name$", re.IGNORECASE), "full_name"),
    (re.compile(r"^name$", re.IGNORECASE), "combined_name"),
    (re.compile(r"^client[\s_-]?name$", re.IGNORECASE), "combined_name"),
    (re.compile(r"^customer[\s_-]?name$", re.IGNORECASE), "combined_name"),
    (re.compile(r"^contact[\s_-]?name$", re.IGNORECASE), "combined_name"),
    (re.compile(r"^client$", re.IGNORECASE), "combined_name"),
    (re.compile(r"^contact$", re.IGNORECASE), "combined_name"),
)

# Priority order per header; the role's enum order is the join order
_ADDRESS_PATTERNS: tuple[tuple[AddressRole, re.Pattern[str]], ...] = (
    (AddressRole.STREET1, re.compile(
        r"^(street|addr(ess)?[\s_]?1|street[\s_]?1|line[\s_]?1|address[\s_]line[\s_]?1)$", re.IGNORECASE)),
    (AddressRole.ADDRESS, re.compile(r"^address$", re.IGNORECASE)),
    (AddressRole.STREET2, re.compile(
        r"^(addr(ess)?[\s_]?2|street[\s_]?2|line[\s_]?2|apt|suite|unit|apartment|address[\s_]line[\s_]?2)$",
        re.IGNORECASE)),
    (AddressRole.CITY, re.compile(r"^(city|town|municipality|locality)$", re.IGNORECASE)),
    (AddressRole.STATE, re.compile(r"^(state|province|region|st|prov)$", re.IGNORECASE)),
    (AddressRole.ZIP, re.compile(r"^(zip|postal|postcode|zip[\s_]?code|postal[\s_]?code)$", re.IGNORECASE)),
    (AddressRole.COUNTRY, re.compile(r"^(country|nation|ctry)$", re.IGNORECASE)),
)


def _has_first_and_last(headers: list[str]) -> bool:
    squashed = [_SEPARATOR_RE.sub("", h.lower()) for h in headers]
    has_first = any("firstname" in h or h in ("fname", "first") for h in squashed)
    has_last = any("lastname" in h or h in ("lname", "last") for h in squashed)
    return has_first and has_last


def detect_full_name_column(headers: list[str]) -> NameSplitDetection | None:
    """Find a combined name column when separate first/last columns are absent.

    Returns None when both a first-name-like and a last-name-like header are
    already present, or when no header matches a combined-name pattern.
    """
    if _has_first_and_last(headers):
        return None

    for header in headers:
        candidate = header.strip()
        for pattern, kind in _COMBINED_NAME_PATTERNS:
            if pattern.match(candidate):
                logger.debug("combined name column detected: %s (%s)", header, kind)
                return NameSplitDetection(source_header=header, type=kind)
    return None


def detect_address_component_columns(headers: list[str]) -> list[AddressComponent]:
    """Classify address fragment headers, sorted by join order.

    Each header gets at most one role (first matching pattern). Whether the
    result is worth consolidating is the caller's call
    (see ``ADDRESS_CONSOLIDATION_THRESHOLD``).
    """
    components: list[AddressComponent] = []
    for header in headers:
        candidate = header.strip()
        for role, pattern in _ADDRESS_PATTERNS:
            if pattern.match(candidate):
                components.append(AddressComponent(source_header=header, role=role, order=role.order))
                break
    components.sort(key=lambda c: c.order)
    return components
