from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Target schema models for the CRM client-list cleaner.

The CRM import format is a closed, ordered list of ten standard columns that
callers may extend with custom fields. A target is therefore modelled as a
tagged union: ``StandardField`` (closed enum) or ``CustomField`` (open set of
names). Cleaner dispatch in ``tidy_import.cleaning.values`` is keyed on the
union, so adding a standard column without a cleaner fails loudly.
"""

__all__ = [
    "StandardField",
    "CustomField",
    "TargetField",
    "TARGET_HEADERS",
    "MappingError",
    "HeaderMapping",
    "AddressRole",
    "AddressComponent",
    "resolve_target",
    "Row",
]

# Column name -> string value
Row = dict[str, str]


class MappingError(Exception):
    """Raised when a header mapping references an unknown, non-custom target."""


class StandardField(Enum):
    """The ten canonical CRM columns, in export order."""
    EMAIL = "Email"
    FIRST_NAME = "First Name"
    LAST_NAME = "Last Name"
    PHONE = "Phone"
    ADDRESS = "Address"
    BIRTHDAY = "Birthday"
    TIME_ZONE = "Time Zone"
    STATUS = "Status"
    TAGS = "Tags"
    NOTES = "Notes"


TARGET_HEADERS: tuple[str, ...] = tuple(f.value for f in StandardField)

_STANDARD_BY_NAME = {f.value: f for f in StandardField}


@dataclass(frozen=True)
class CustomField:
    """Caller-declared passthrough column (identity cleaning)."""
    name: str


TargetField = StandardField | CustomField


def resolve_target(name: str, is_custom: bool = False) -> TargetField:
    """Resolve a target header name into the tagged union.

    Standard names always resolve to ``StandardField`` even when flagged
    custom. Unknown names are only accepted when ``is_custom`` is set.

    Raises:
        MappingError: unknown target that was not registered as custom
    """
    standard = _STANDARD_BY_NAME.get(name)
    if standard is not None:
        return standard
    if is_custom and name.strip():
        return CustomField(name)
    raise MappingError(f"unknown target header '{name}' (not a standard field and not marked custom)")


@dataclass(frozen=True)
class HeaderMapping:
    """Assignment of one source column to a target column (or to nothing).

    ``confidence`` is 0-1. ``from_dict``/``to_dict`` use the camelCase wire
    shape produced by the mapping-suggestion collaborator.
    """
    source_header: str
    target_header: str | None
    confidence: float = 0.0
    is_custom: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= float(self.confidence) <= 1.0:
            raise MappingError(
                f"confidence for '{self.source_header}' must be within [0, 1], got {self.confidence}"
            )

    @property
    def target(self) -> TargetField | None:
        if not self.target_header:
            return None
        return resolve_target(self.target_header, self.is_custom)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> HeaderMapping:
        return HeaderMapping(
            source_header=str(data.get("sourceHeader", "")),
            target_header=data.get("targetHeader") or None,
            confidence=float(data.get("confidence") or 0.0),
            is_custom=bool(data.get("isCustom", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "sourceHeader": self.source_header,
            "targetHeader": self.target_header,
            "confidence": self.confidence,
        }
        if self.is_custom:
            out["isCustom"] = True
        return out


class AddressRole(Enum):
    """Address fragment roles; ``order`` is the join position."""
    STREET1 = "street1"
    ADDRESS = "address"
    STREET2 = "street2"
    CITY = "city"
    STATE = "state"
    ZIP = "zip"
    COUNTRY = "country"

    @property
    def order(self) -> int:
        return _ROLE_ORDER[self]


_ROLE_ORDER = {role: i for i, role in enumerate(AddressRole)}


@dataclass(frozen=True)
class AddressComponent:
    """One source column contributing to the consolidated Address value."""
    source_header: str
    role: AddressRole
    order: int
