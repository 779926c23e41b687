from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

"""Diagnostic models produced by the validators and duplicate detectors.

All diagnostics are recomputed from scratch after every row mutation; none
of these objects is ever patched in place.
"""

__all__ = [
    "RowValidation",
    "DuplicateGroup",
    "DataIssue",
]


@dataclass(frozen=True)
class RowValidation:
    """Issues found on one row; rows without issues produce no instance."""
    row_index: int
    missing_fields: list[str] = field(default_factory=list)
    invalid_email: bool = False
    invalid_status: bool = False
    invalid_time_zone: bool = False
    missing_time_zone: bool = False
    first_name_required: bool = False
    first_name_too_long: bool = False
    last_name_too_long: bool = False

    @property
    def has_issues(self) -> bool:
        return bool(self.missing_fields) or any((
            self.invalid_email,
            self.invalid_status,
            self.invalid_time_zone,
            self.missing_time_zone,
            self.first_name_too_long,
            self.last_name_too_long,
        ))

    def issue_types(self) -> list[str]:
        """UPPER_SNAKE issue labels used by the issue log."""
        labels: list[str] = []
        if self.first_name_required:
            labels.append("FIRST_NAME_REQUIRED")
        for name in self.missing_fields:
            if name == "First Name" and self.first_name_required:
                continue
            labels.append("MISSING_" + name.upper().replace(" ", "_"))
        if self.first_name_too_long:
            labels.append("FIRST_NAME_TOO_LONG")
        if self.last_name_too_long:
            labels.append("LAST_NAME_TOO_LONG")
        if self.invalid_email:
            labels.append("INVALID_EMAIL")
        if self.invalid_status:
            labels.append("INVALID_STATUS")
        if self.missing_time_zone:
            labels.append("MISSING_TIME_ZONE")
        if self.invalid_time_zone:
            labels.append("INVALID_TIME_ZONE")
        return labels


@dataclass(frozen=True)
class DuplicateGroup:
    """Rows sharing one (case-insensitive) value; always two or more rows."""
    field: Literal["Email", "Phone"]
    value: str
    row_indices: list[int]


@dataclass(frozen=True)
class DataIssue:
    """Row-level issue for the phone-duplicate / missing-email review."""
    row_index: int
    type: Literal["phone_duplicate", "missing_email"]
    value: str | None = None  # duplicated phone digits
    duplicate_indices: list[int] | None = None  # other rows with the same phone
