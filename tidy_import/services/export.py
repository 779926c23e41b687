from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

import pandas as pd
from openpyxl.styles import Font, PatternFill

from ..models.schema import TARGET_HEADERS

"""Export preparation and serialization.

``sanitize_rows`` is the last transform before bytes are written: phone
cells are rendered for display, then every cell is defused against
spreadsheet formula injection. Display formatting happens here only and is
never written back into the working rows.
"""

__all__ = [
    "FORMULA_PREFIXES",
    "EXPORT_SHEET_NAME",
    "ExportError",
    "sanitize_for_export",
    "format_phone_number",
    "export_headers",
    "sanitize_rows",
    "write_export",
]

logger = logging.getLogger(__name__)

FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")
EXPORT_SHEET_NAME = "Cleaned Data"
SUPPORTED_FORMATS = ("xlsx", "csv")

_NON_DIGIT_RE = re.compile(r"[^0-9]")
_HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFE0E0E0")


class ExportError(Exception):
    """Raised when the export cannot be produced (empty row set, bad format)."""


def sanitize_for_export(value: str) -> str:
    """Prefix a single apostrophe when the value would start a formula."""
    if not value or not isinstance(value, str):
        return value
    if value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def format_phone_number(phone: str) -> str:
    """Dashed display form of a digits-only phone.

    10 digits -> 555-555-5555, 11 digits with a leading 1 -> 1-555-555-5555,
    7 digits -> 555-5555. Any other length is returned as given.
    """
    if not phone:
        return ""
    digits = _NON_DIGIT_RE.sub("", phone)
    if len(digits) == 10:
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"1-{digits[1:4]}-{digits[4:7]}-{digits[7:]}"
    if len(digits) == 7:
        return f"{digits[:3]}-{digits[3:]}"
    return phone


def export_headers(custom_fields: Iterable[str] = ()) -> list[str]:
    """Standard headers in schema order, then custom fields in the order added."""
    headers = list(TARGET_HEADERS)
    for name in custom_fields:
        if name and name not in headers:
            headers.append(name)
    return headers


def sanitize_rows(rows: Iterable[Mapping[str, str]], headers: Sequence[str]) -> list[dict[str, str]]:
    """Rectangular export rows: every header present, phones formatted, cells defused."""
    out: list[dict[str, str]] = []
    for row in rows:
        clean: dict[str, str] = {}
        for header in headers:
            value = row.get(header) or ""
            if header == "Phone" and value:
                value = format_phone_number(value)
            clean[header] = sanitize_for_export(value)
        out.append(clean)
    return out


def _style_header(worksheet, headers: Sequence[str]) -> None:
    for idx, header in enumerate(headers, start=1):
        cell = worksheet.cell(row=1, column=idx)
        cell.font = Font(bold=True)
        cell.fill = _HEADER_FILL
        worksheet.column_dimensions[cell.column_letter].width = max(len(header) + 2, 15)


def write_export(
    rows: Iterable[Mapping[str, str]], headers: Sequence[str], path: str | Path, fmt: str = "xlsx"
) -> Path:
    """Sanitize ``rows`` and write them to ``path`` as XLSX or CSV.

    Raises:
        ExportError: unsupported format or no rows to write
    """
    fmt = fmt.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ExportError(f"unsupported export format '{fmt}' (expected xlsx or csv)")
    data = sanitize_rows(rows, headers)
    if not data:
        raise ExportError("no rows to export")

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(data, columns=list(headers))

    if fmt == "csv":
        df.to_csv(target, index=False, encoding="utf-8")
    else:
        with pd.ExcelWriter(target, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=EXPORT_SHEET_NAME, index=False)
            _style_header(writer.sheets[EXPORT_SHEET_NAME], headers)

    logger.debug("wrote %d rows to %s (%s)", len(data), target, fmt)
    return target
