from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from tidy_import.cleaning.birthday import BirthdayFormat
from tidy_import.config.loader import ConfigError, load_config
from tidy_import.detection.columns import (
    ADDRESS_CONSOLIDATION_THRESHOLD,
    detect_address_component_columns,
    detect_full_name_column,
)
from tidy_import.detection.header_mapping import (
    collect_custom_headers,
    fallback_mapping,
    find_duplicate_targets,
    get_sample_values,
    mappings_from_suggestions,
    update_mapping,
)
from tidy_import.excel.reader import FileReadError, RowLimitError, enforce_row_limit, read_client_file
from tidy_import.logging.init import enable_debug, log_issue_breakdown, log_summary, setup_logging
from tidy_import.logging.issue_log import IssueLogBuffer, issue_records_from_validations
from tidy_import.models.config_models import CleanerConfig
from tidy_import.models.parsed_file import ProcessResult
from tidy_import.models.schema import HeaderMapping, MappingError
from tidy_import.services.export import ExportError, export_headers, write_export
from tidy_import.services.processor import process_data
from tidy_import.services.resolution import (
    apply_birthday_format,
    build_snapshot,
    keep_first_duplicates,
    remove_rows,
    rows_for_export,
)
from tidy_import.services.summary import render_summary_line
from tidy_import.services.validator import detect_duplicates, get_rows_with_name_too_long, validate_rows
from tidy_import.transform.address import apply_address_consolidation
from tidy_import.transform.names import apply_name_split

"""CLI entrypoint: clean one client-list file into the CRM import layout.

Flow:
config -> read -> row cap -> name split -> address consolidation ->
mapping -> process_data -> birthday format -> duplicates / long names ->
validation -> export -> issue log -> SUMMARY -> exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2  # exported, but validation issues remain
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (TIDY_IMPORT_CONFIG may be set there)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="tidy-import", description="Clean a client list (CSV/XLSX) into the CRM import layout"
    )
    p.add_argument("input", help="Client list file (.csv or .xlsx)")
    p.add_argument("-o", "--output", help="Output path (default: cleaned_<name>.<format> next to the input)")
    p.add_argument("--format", choices=["xlsx", "csv"], help="Export format (overrides config)")
    p.add_argument("--config", help="YAML config path (default: config/tidy_import.yml)")
    p.add_argument("--birthday-format", choices=[f.value for f in BirthdayFormat], help="Birthday render format")
    p.add_argument("--address-separator", help="Separator used when consolidating address columns")
    p.add_argument("--mapping", help="JSON file with header mapping suggestions")
    p.add_argument(
        "--custom-field", action="append", default=[], metavar="NAME",
        help="Keep source column NAME as a custom passthrough field (repeatable)",
    )
    p.add_argument("--drop-duplicates", action="store_true", help="Keep only the first row per duplicate email")
    p.add_argument("--skip-long-names", action="store_true", help="Leave rows with over-long names out of the export")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, samples and detections then exit")
    return p.parse_args(argv)


def _effective_config(cfg: CleanerConfig, args: argparse.Namespace) -> CleanerConfig:
    overrides: dict[str, Any] = {}
    if args.format:
        overrides["export_format"] = args.format
    if args.birthday_format:
        overrides["birthday_format"] = args.birthday_format
    if args.address_separator:
        overrides["address_separator"] = args.address_separator
    if args.custom_field:
        overrides["custom_fields"] = tuple(dict.fromkeys([*cfg.custom_fields, *args.custom_field]))
    if args.drop_duplicates:
        overrides["drop_duplicate_emails"] = True
    if args.skip_long_names:
        overrides["skip_long_names"] = True
    return replace(cfg, **overrides) if overrides else cfg


def _load_suggestions(path: str | None) -> dict[str, Any] | None:
    if path is None:
        return None
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise MappingError(f"cannot read mapping file {path}: {e}") from e
    if not isinstance(data, dict):
        raise MappingError("mapping file must contain a JSON object with a 'mappings' list")
    return data


def _dedupe_targets(mappings: list[HeaderMapping], logger) -> list[HeaderMapping]:
    """Keep the most confident source per target; unmap the rest."""
    for target in find_duplicate_targets(mappings):
        claimants = [m for m in mappings if m.target_header == target]
        winner = max(claimants, key=lambda m: m.confidence)
        for m in claimants:
            if m is not winner:
                logger.warning(f"mapping: '{m.source_header}' also targets '{target}'; left unmapped")
                mappings = update_mapping(mappings, m.source_header, None)
    return mappings


def _build_mappings(
    headers: list[str],
    step_mappings: list[HeaderMapping],
    suggestions: dict[str, Any] | None,
    custom_fields: tuple[str, ...],
    logger,
) -> list[HeaderMapping]:
    mappings = mappings_from_suggestions(headers, suggestions)
    # mappings produced by the split / consolidation steps take precedence
    fixed = {m.source_header: m for m in step_mappings}
    mappings = [fixed.get(m.source_header, m) for m in mappings]

    by_lower = {h.lower(): h for h in headers}
    for name in custom_fields:
        source = by_lower.get(name.lower())
        if source is None:
            logger.warning(f"custom field '{name}' has no matching source column")
            continue
        mappings = update_mapping(mappings, source, name, is_custom=True)
    return _dedupe_targets(mappings, logger)


def _inspect_data(path: Path) -> int:
    try:
        parsed = read_client_file(path)
    except FileReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {parsed.file_name} rows={len(parsed.rows)}")
    for m in fallback_mapping(parsed.headers):
        samples = get_sample_values(parsed.rows, m.source_header)
        print(f"  COLUMN: {m.source_header} -> {m.target_header} ({m.confidence}) samples={samples}")
    detection = detect_full_name_column(parsed.headers)
    if detection is not None:
        print(f"  NAME_SPLIT: {detection.source_header} ({detection.type})")
    components = detect_address_component_columns(parsed.headers)
    if components:
        print("  ADDRESS: " + ", ".join(f"{c.source_header}={c.role.value}" for c in components))
    return EXIT_SUCCESS_ALL


def _default_output(input_path: Path, fmt: str) -> Path:
    return input_path.with_name(f"cleaned_{input_path.stem}.{fmt}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no argument list was given (tests call main([...]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    input_path = Path(args.input)
    if args.inspect_data:
        return _inspect_data(input_path)

    try:
        cfg = _effective_config(load_config(args.config), args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        parsed = read_client_file(input_path)
        enforce_row_limit(parsed, cfg.max_rows)
    except (FileReadError, RowLimitError) as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL
    logger.info(f"Read {len(parsed.rows)} rows from {parsed.file_name}")

    step_mappings: list[HeaderMapping] = []
    if cfg.split_full_name:
        detection = detect_full_name_column(parsed.headers)
        if detection is not None:
            parsed, step_mappings = apply_name_split(parsed, detection.source_header, step_mappings)
            logger.info(f"Split '{detection.source_header}' into First Name / Last Name")

    consolidated = 0
    if cfg.consolidate_address:
        components = detect_address_component_columns(parsed.headers)
        if len(components) >= ADDRESS_CONSOLIDATION_THRESHOLD:
            parsed, step_mappings, consolidated = apply_address_consolidation(
                parsed, components, cfg.address_separator, step_mappings
            )
            logger.info(f"Consolidated {len(components)} address columns")

    try:
        suggestions = _load_suggestions(args.mapping)
        mappings = _build_mappings(parsed.headers, step_mappings, suggestions, cfg.custom_fields, logger)
        result = process_data(parsed.rows, mappings)
    except MappingError as e:
        logger.error(f"mapping: {e}")
        return EXIT_FATAL

    stats = result.stats.merge({"addresses_consolidated": consolidated})
    snapshot = build_snapshot(ProcessResult(data=result.data, stats=stats))
    snapshot = apply_birthday_format(snapshot, cfg.birthday_format)

    if cfg.drop_duplicate_emails and snapshot.duplicates:
        drop = keep_first_duplicates(snapshot.duplicates)
        snapshot = remove_rows(snapshot, drop)
        logger.info(f"Removed {len(drop)} duplicate rows")

    skipped: list[int] = []
    if cfg.skip_long_names:
        skipped = get_rows_with_name_too_long(snapshot.rows)
        if skipped:
            logger.warning(f"{len(skipped)} rows skipped: name longer than the CRM limit")

    export_rows = rows_for_export(snapshot, skipped)
    validations = validate_rows(export_rows)
    duplicates = detect_duplicates(export_rows)

    headers = export_headers(collect_custom_headers(mappings))
    output = Path(args.output) if args.output else _default_output(input_path, cfg.export_format)
    try:
        write_export(export_rows, headers, output, cfg.export_format)
    except (ExportError, OSError) as e:
        logger.error(f"export: {e}")
        return EXIT_FATAL
    logger.info(f"Wrote {len(export_rows)} rows to {output}")

    if cfg.issue_log:
        buffer = IssueLogBuffer()
        buffer.extend(issue_records_from_validations(parsed.file_name, validations, duplicates))
        log_path = buffer.flush()
        if log_path is not None:
            logger.info(f"Issue log: {log_path}")

    log_issue_breakdown(validations, duplicates)
    summary_line = render_summary_line(snapshot.stats.with_total_rows(len(export_rows)), validations, duplicates)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if validations or duplicates:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
