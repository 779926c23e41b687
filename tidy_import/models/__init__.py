"""Domain models for the CRM client-list cleaner.

Rows are plain ``dict[str, str]`` mappings; everything else the engine
produces or consumes is one of the immutable records below.
"""

from .cleaning_stats import CleaningStats, StatsAccumulator
from .config_models import CleanerConfig
from .issue_record import IssueRecord
from .parsed_file import ParsedFile, ProcessResult
from .schema import (
    TARGET_HEADERS,
    AddressComponent,
    AddressRole,
    CustomField,
    HeaderMapping,
    MappingError,
    StandardField,
    TargetField,
    resolve_target,
)
from .validation import DataIssue, DuplicateGroup, RowValidation

__all__ = [
    # Target schema
    "TARGET_HEADERS",
    "StandardField",
    "CustomField",
    "TargetField",
    "HeaderMapping",
    "MappingError",
    "AddressRole",
    "AddressComponent",
    "resolve_target",
    # Processing models
    "CleaningStats",
    "StatsAccumulator",
    "ParsedFile",
    "ProcessResult",
    # Diagnostics
    "RowValidation",
    "DuplicateGroup",
    "DataIssue",
    "IssueRecord",
    # Configuration
    "CleanerConfig",
]
