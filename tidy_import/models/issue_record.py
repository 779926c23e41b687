from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""IssueRecord model for the JSON Lines issue log.

One record per data-quality issue left in the cleaned row set. ``row`` is the
0-based index into the cleaned rows; -1 marks a file-level record (for
example a duplicate group, which spans several rows).
"""

__all__ = [
    "IssueRecord",
]


@dataclass(frozen=True)
class IssueRecord:
    """Structured issue record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file name
        row: Cleaned-row index (0-based). -1 for file-level issues
        issue_type: Issue classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    issue_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, row: int, issue_type: str, message: str) -> IssueRecord:
        """Create a new IssueRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(
            timestamp=ts,
            file=file,
            row=row,
            issue_type=issue_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON line containing exactly the dataclass fields."""
        return json.dumps(asdict(self), ensure_ascii=False)
