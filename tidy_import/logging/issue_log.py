from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.issue_record import IssueRecord
from ..models.validation import DuplicateGroup, RowValidation

"""Issue log generation & buffering.

- JSON Lines, fixed schema (no extra keys)
- One ``logs/issues-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on first flush
- Records are buffered and written in one go by ``flush``
"""

__all__ = [
    "IssueRecord",
    "IssueLogBuffer",
    "issue_records_from_validations",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

_MESSAGES = {
    "FIRST_NAME_REQUIRED": "First Name is required",
    "MISSING_EMAIL": "Email is empty",
    "MISSING_PHONE": "Phone is empty",
    "MISSING_LAST_NAME": "Last Name is empty",
    "FIRST_NAME_TOO_LONG": "First Name exceeds 26 characters",
    "LAST_NAME_TOO_LONG": "Last Name exceeds 26 characters",
    "INVALID_EMAIL": "Email is not a valid address",
    "INVALID_STATUS": "Status must be Lead, Customer or VIP",
    "MISSING_TIME_ZONE": "Time Zone is empty",
    "INVALID_TIME_ZONE": "Time Zone is not a recognised CRM zone",
}


def issue_records_from_validations(
    file: str,
    validations: Iterable[RowValidation],
    duplicates: Iterable[DuplicateGroup] = (),
) -> list[IssueRecord]:
    """One record per issue label per row, then one file-level record per duplicate group."""
    records: list[IssueRecord] = []
    for v in validations:
        for issue_type in v.issue_types():
            message = _MESSAGES.get(issue_type, issue_type.replace("_", " ").lower())
            records.append(IssueRecord.create(file, v.row_index, issue_type, message))
    for group in duplicates:
        rows = ",".join(str(i) for i in group.row_indices)
        records.append(IssueRecord.create(
            file,
            -1,
            f"DUPLICATE_{group.field.upper()}",
            f"{group.field} '{group.value}' appears in rows {rows}",
        ))
    return records


class IssueLogBuffer:
    """In-memory buffer for issue records. Flush writes JSON Lines.

    - flush() appends everything buffered to the run's file (created if needed)
    - the file path is fixed on first access
    - single-threaded use only
    """

    def __init__(self) -> None:
        self._records: list[IssueRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            LOGS_DIR.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = LOGS_DIR / f"issues-{stamp}.log"
        return self._file_path

    def append(self, record: IssueRecord) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[IssueRecord]) -> None:
        self._records.extend(records)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
