from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable
from typing import Any

from ..cleaning.values import is_empty_value
from ..models.parsed_file import ParsedFile
from ..models.schema import TARGET_HEADERS, HeaderMapping, StandardField

"""Source -> target header mapping helpers.

Mapping suggestions normally come from an external service as data; this
module turns that payload into ``HeaderMapping`` records and provides the
deterministic keyword fallback used when no suggestions are available.
"""

__all__ = [
    "fallback_mapping",
    "mappings_from_suggestions",
    "update_mapping",
    "rename_source_header",
    "find_duplicate_targets",
    "collect_custom_headers",
    "get_sample_values",
]

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r"[_\-\s]+")

SAMPLE_MAX_LENGTH = 30


def _keyword_target(normalized: str) -> tuple[StandardField | None, float]:
    # Tiers are checked top-down; the first hit wins
    if "firstname" in normalized or normalized in ("first", "fname"):
        return StandardField.FIRST_NAME, 0.8
    if "lastname" in normalized or normalized in ("last", "lname"):
        return StandardField.LAST_NAME, 0.8
    if "email" in normalized or "mail" in normalized:
        return StandardField.EMAIL, 0.9
    if any(k in normalized for k in ("phone", "cell", "mobile")) or normalized == "ph":
        return StandardField.PHONE, 0.8
    if "address" in normalized or "street" in normalized:
        return StandardField.ADDRESS, 0.7
    if any(k in normalized for k in ("birthday", "dob", "birthdate")):
        return StandardField.BIRTHDAY, 0.8
    if "timezone" in normalized or "tz" in normalized:
        return StandardField.TIME_ZONE, 0.8
    if any(k in normalized for k in ("status", "type", "category")):
        return StandardField.STATUS, 0.6
    if any(k in normalized for k in ("tag", "source", "lead")):
        return StandardField.TAGS, 0.6
    if any(k in normalized for k in ("note", "comment", "info")):
        return StandardField.NOTES, 0.6
    return None, 0.0


def fallback_mapping(source_headers: Iterable[str]) -> list[HeaderMapping]:
    """Keyword-based mapping, one entry per source header."""
    mappings: list[HeaderMapping] = []
    for header in source_headers:
        normalized = _SEPARATOR_RE.sub("", header.lower())
        target, confidence = _keyword_target(normalized)
        mappings.append(HeaderMapping(
            source_header=header,
            target_header=target.value if target else None,
            confidence=confidence,
        ))
    return mappings


def mappings_from_suggestions(
    source_headers: list[str], suggestions: dict[str, Any] | None
) -> list[HeaderMapping]:
    """Build mappings from a suggestion payload ``{"mappings": [{source, target, confidence}]}``.

    Sources are matched case-insensitively. Suggested targets outside the
    standard schema are dropped (the source stays unmapped). Without a usable
    payload the keyword fallback is used.
    """
    entries = (suggestions or {}).get("mappings")
    if not isinstance(entries, list):
        logger.debug("no mapping suggestions supplied; using keyword fallback")
        return fallback_mapping(source_headers)

    by_source: dict[str, dict[str, Any]] = {}
    for entry in entries:
        if isinstance(entry, dict) and isinstance(entry.get("source"), str):
            by_source.setdefault(entry["source"].lower(), entry)

    mappings: list[HeaderMapping] = []
    for header in source_headers:
        entry = by_source.get(header.lower(), {})
        target = entry.get("target")
        if target not in TARGET_HEADERS:
            if target:
                logger.debug("ignoring suggested non-standard target %r for %r", target, header)
            target = None
        try:
            confidence = float(entry.get("confidence") or 0.0)
        except (TypeError, ValueError):
            confidence = 0.0
        confidence = min(max(confidence, 0.0), 1.0)
        mappings.append(HeaderMapping(
            source_header=header,
            target_header=target,
            confidence=confidence if target else 0.0,
        ))
    return mappings


def update_mapping(
    mappings: list[HeaderMapping], source_header: str, target: str | None, is_custom: bool = False
) -> list[HeaderMapping]:
    """Return new mappings with ``source_header`` reassigned (confidence 1)."""
    return [
        HeaderMapping(source_header=m.source_header, target_header=target, confidence=1.0, is_custom=is_custom)
        if m.source_header == source_header else m
        for m in mappings
    ]


def rename_source_header(
    parsed: ParsedFile, mappings: list[HeaderMapping], old: str, new: str
) -> tuple[ParsedFile, list[HeaderMapping]]:
    """Rename a source column in headers, row keys and mappings."""
    headers = [new if h == old else h for h in parsed.headers]
    rows = [{(new if k == old else k): v for k, v in row.items()} for row in parsed.rows]
    renamed = [
        HeaderMapping(new, m.target_header, m.confidence, m.is_custom) if m.source_header == old else m
        for m in mappings
    ]
    return ParsedFile(headers=headers, rows=rows, file_name=parsed.file_name), renamed


def find_duplicate_targets(mappings: Iterable[HeaderMapping]) -> list[str]:
    """Targets assigned to more than one source column (must be fixed by the caller)."""
    counts = Counter(m.target_header for m in mappings if m.target_header)
    return [target for target, n in counts.items() if n > 1]


def collect_custom_headers(mappings: Iterable[HeaderMapping]) -> list[str]:
    """Custom target names in first-seen order, excluding standard headers."""
    seen: list[str] = []
    for m in mappings:
        if m.target_header and m.is_custom and m.target_header not in TARGET_HEADERS and m.target_header not in seen:
            seen.append(m.target_header)
    return seen


def get_sample_values(rows: list[dict[str, Any]], header: str, max_samples: int = 3) -> list[str]:
    """Up to ``max_samples`` distinct non-empty values, long ones truncated."""
    samples: list[str] = []
    for row in rows:
        if len(samples) >= max_samples:
            break
        value = row.get(header)
        if not value or is_empty_value(value):
            continue
        text = str(value).strip()
        if len(text) > SAMPLE_MAX_LENGTH:
            text = text[:27] + "..."
        if text and text not in samples:
            samples.append(text)
    return samples
