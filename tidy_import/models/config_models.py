from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclass for the client-list cleaner.

Populated by ``tidy_import.config.loader.load_config``; every field has a
default so an absent config file still yields a usable configuration.
"""

__all__ = [
    "CleanerConfig",
    "DEFAULT_MAX_ROWS",
]

DEFAULT_MAX_ROWS = 5000


@dataclass(frozen=True)
class CleanerConfig:
    """Run options shared by the CLI and the resolution steps."""
    max_rows: int = DEFAULT_MAX_ROWS  # row cap enforced before the engine runs
    birthday_format: str = "MM/DD/YYYY"
    address_separator: str = ", "
    custom_fields: tuple[str, ...] = field(default_factory=tuple)
    export_format: str = "xlsx"  # xlsx | csv
    split_full_name: bool = True
    consolidate_address: bool = True
    drop_duplicate_emails: bool = False  # keep first row of each duplicate group
    skip_long_names: bool = False  # exclude rows with names over the length limit
    issue_log: bool = True
