from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

from ..cleaning.values import (
    MAX_NAME_LENGTH,
    clean_phone,
    validate_email_format,
    validate_status,
    validate_time_zone,
)
from ..models.validation import DataIssue, DuplicateGroup, RowValidation

"""Row validation and duplicate detection over cleaned rows.

Everything here is recomputed from the full row set on every call. Two
duplicate detectors exist with different output shapes:

- ``detect_duplicates``: Email groups (``DuplicateGroup``), drives the
  duplicate-removal step
- ``detect_phone_duplicates`` / ``collect_data_issues``: phone-level and
  missing-email issues (``DataIssue``), drives the data-issues review

The ``get_rows_with_*`` selectors use the same predicates as
``validate_rows`` so both always agree on a given row set.
"""

__all__ = [
    "validate_rows",
    "detect_duplicates",
    "get_rows_with_missing_timezone",
    "get_rows_with_missing_status",
    "get_rows_with_invalid_status",
    "get_rows_with_status_issues",
    "get_rows_with_name_too_long",
    "detect_phone_duplicates",
    "find_missing_emails",
    "collect_data_issues",
]

Rows = Sequence[Mapping[str, str]]

# Flagged (not required) when blank; First Name is handled separately
_CRITICAL_FIELDS = ("Email", "Phone", "Last Name")


def _text(row: Mapping[str, str], field: str) -> str:
    return (row.get(field) or "").strip()


def _time_zone_missing(row: Mapping[str, str]) -> bool:
    return not _text(row, "Time Zone")


def _status_missing(row: Mapping[str, str]) -> bool:
    return not _text(row, "Status")


def _status_invalid(row: Mapping[str, str]) -> bool:
    status = _text(row, "Status")
    return bool(status) and not validate_status(status)


def _name_too_long(row: Mapping[str, str], field: str) -> bool:
    return len(_text(row, field)) > MAX_NAME_LENGTH


def validate_rows(rows: Rows) -> list[RowValidation]:
    """One ``RowValidation`` per row with at least one issue, in row order."""
    results: list[RowValidation] = []
    for index, row in enumerate(rows):
        missing: list[str] = []
        first_name_required = first_name_too_long = False

        if not _text(row, "First Name"):
            missing.append("First Name")
            first_name_required = True
        elif _name_too_long(row, "First Name"):
            first_name_too_long = True

        last_name_too_long = _name_too_long(row, "Last Name")

        for field in _CRITICAL_FIELDS:
            if not _text(row, field):
                missing.append(field)

        email = _text(row, "Email")
        invalid_email = bool(email) and not validate_email_format(row.get("Email"))

        time_zone = _text(row, "Time Zone")
        missing_time_zone = not time_zone
        invalid_time_zone = bool(time_zone) and not validate_time_zone(time_zone)

        validation = RowValidation(
            row_index=index,
            missing_fields=missing,
            invalid_email=invalid_email,
            invalid_status=_status_invalid(row),
            invalid_time_zone=invalid_time_zone,
            missing_time_zone=missing_time_zone,
            first_name_required=first_name_required,
            first_name_too_long=first_name_too_long,
            last_name_too_long=last_name_too_long,
        )
        if validation.has_issues:
            results.append(validation)
    return results


def detect_duplicates(rows: Rows) -> list[DuplicateGroup]:
    """Email duplicate groups (case-insensitive, trimmed), first-seen order."""
    by_email: dict[str, list[int]] = {}
    for index, row in enumerate(rows):
        email = _text(row, "Email").lower()
        if email:
            by_email.setdefault(email, []).append(index)
    return [
        DuplicateGroup(field="Email", value=email, row_indices=indices)
        for email, indices in by_email.items()
        if len(indices) > 1
    ]


def _indices(rows: Rows, predicate: Callable[[Mapping[str, str]], bool]) -> list[int]:
    return [i for i, row in enumerate(rows) if predicate(row)]


def get_rows_with_missing_timezone(rows: Rows) -> list[int]:
    return _indices(rows, _time_zone_missing)


def get_rows_with_missing_status(rows: Rows) -> list[int]:
    return _indices(rows, _status_missing)


def get_rows_with_invalid_status(rows: Rows) -> list[int]:
    return _indices(rows, _status_invalid)


def get_rows_with_status_issues(rows: Rows) -> list[int]:
    """Missing or invalid status, sorted (the status backfill step's input)."""
    return _indices(rows, lambda row: _status_missing(row) or _status_invalid(row))


def get_rows_with_name_too_long(rows: Rows) -> list[int]:
    """Rows whose First Name or Last Name exceeds the CRM limit."""
    return _indices(
        rows, lambda row: _name_too_long(row, "First Name") or _name_too_long(row, "Last Name")
    )


def detect_phone_duplicates(rows: Rows) -> dict[str, list[int]]:
    """Phone digits -> row indices, only for numbers used by two or more rows."""
    by_phone: dict[str, list[int]] = {}
    for index, row in enumerate(rows):
        phone = clean_phone(_text(row, "Phone"))
        if phone:
            by_phone.setdefault(phone, []).append(index)
    return {phone: indices for phone, indices in by_phone.items() if len(indices) > 1}


def find_missing_emails(rows: Rows) -> list[int]:
    return _indices(rows, lambda row: not _text(row, "Email"))


def collect_data_issues(rows: Rows) -> list[DataIssue]:
    """Phone-duplicate and missing-email issues, sorted by row index.

    A row in a phone-duplicate group gets one issue whose
    ``duplicate_indices`` lists the other rows of that group.
    """
    issues: list[DataIssue] = []
    for phone, indices in detect_phone_duplicates(rows).items():
        for index in indices:
            issues.append(DataIssue(
                row_index=index,
                type="phone_duplicate",
                value=phone,
                duplicate_indices=[i for i in indices if i != index],
            ))
    for index in find_missing_emails(rows):
        issues.append(DataIssue(row_index=index, type="missing_email"))
    issues.sort(key=lambda issue: issue.row_index)
    return issues
