from __future__ import annotations

import logging
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.parsed_file import ParsedFile

"""Client-list file reader (CSV / XLSX -> ParsedFile).

Every cell reaches the engine as text and pandas' NA coercion is disabled,
so values such as "N/A" or "null" reach the cleaners untouched and are
handled by the empty-value rule there. The first line / first sheet row is
the header.

- CSV: text-blank lines are skipped; delimiter-only lines (",,,") are kept
  as rows so ``process_data`` drops and counts them
- XLSX: rows without any value are skipped; date cells become ISO
  ``YYYY-MM-DD`` text (``YYYY-MM-DD HH:MM:SS`` when a time is set)
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "FileReadError",
    "RowLimitError",
    "read_client_file",
    "enforce_row_limit",
]

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


class FileReadError(Exception):
    """Raised when the input file is missing, unsupported or unreadable."""


class RowLimitError(Exception):
    """Raised when the input has more data rows than the configured cap."""


def _cell_text(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _frame_to_parsed(df: pd.DataFrame, file_name: str, skip_empty_rows: bool) -> ParsedFile:
    headers = [str(c).strip() for c in df.columns]
    rows: list[dict[str, str]] = []
    for values in df.itertuples(index=False, name=None):
        cells = [_cell_text(v) for v in values]
        if skip_empty_rows and not any(cells):
            continue
        rows.append(dict(zip(headers, cells, strict=False)))
    return ParsedFile(headers=headers, rows=rows, file_name=file_name)


def read_client_file(path: str | Path) -> ParsedFile:
    """Read a CSV or XLSX (first sheet) client list.

    Raises:
        FileReadError: missing file, unsupported extension or parse failure
    """
    p = Path(path)
    if not p.exists():
        raise FileReadError(f"file not found: {p}")
    suffix = p.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise FileReadError(f"unsupported file type '{p.suffix}' (expected .csv or .xlsx)")

    try:
        if suffix == ".csv":
            df = pd.read_csv(p, dtype=str, keep_default_na=False, skip_blank_lines=True, encoding="utf-8-sig")
        else:
            # object dtype keeps typed cells (dates, numbers) for _cell_text
            df = pd.read_excel(p, sheet_name=0, dtype=object, keep_default_na=False, engine="openpyxl")
    except pd.errors.EmptyDataError:
        logger.debug("empty input file: %s", p)
        return ParsedFile(headers=[], rows=[], file_name=p.name)
    except (ValueError, OSError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise FileReadError(f"failed to read {p.name}: {e}") from e

    parsed = _frame_to_parsed(df, p.name, skip_empty_rows=suffix == ".xlsx")
    logger.debug("read %s: %d columns, %d rows", p.name, len(parsed.headers), len(parsed.rows))
    return parsed


def enforce_row_limit(parsed: ParsedFile, max_rows: int) -> None:
    """Reject inputs above ``max_rows`` data rows (checked before cleaning).

    Raises:
        RowLimitError: too many rows
    """
    if len(parsed.rows) > max_rows:
        raise RowLimitError(
            f"{parsed.file_name or 'input'} has {len(parsed.rows)} rows; the limit is {max_rows}"
        )
