from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .cleaning_stats import CleaningStats

"""Row-set containers passed between the reader, the engine and the exporter.

``ParsedFile`` is what the file-reading collaborator hands to the engine:
ordered headers plus raw rows (header -> raw cell). ``ProcessResult`` is the
output of ``process_data``: cleaned rows keyed by target header plus stats.
"""

__all__ = [
    "ParsedFile",
    "ProcessResult",
]


@dataclass(frozen=True)
class ParsedFile:
    """Raw tabular input (headers in file order)."""
    headers: list[str]
    rows: list[dict[str, Any]]
    file_name: str = ""


@dataclass(frozen=True)
class ProcessResult:
    """Cleaned rows plus the stats of the run that produced them."""
    data: list[dict[str, str]]
    stats: CleaningStats = field(default_factory=CleaningStats)
