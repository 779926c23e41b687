from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import DEFAULT_MAX_ROWS, CleanerConfig
from ..models.schema import TARGET_HEADERS

"""Config loader for the client-list cleaner.

Responsibilities:
- Resolve the config path (explicit path > TIDY_IMPORT_CONFIG > default)
- Load YAML and validate it against ``config_schema.json`` (unknown keys rejected)
- Apply defaults and return a frozen ``CleanerConfig``

A missing file at the default location is not an error; every key has a
default. A missing file that was asked for explicitly is.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "resolve_config_path",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/tidy_import.yml")
CONFIG_ENV_VAR = "TIDY_IMPORT_CONFIG"
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        location = ".".join(str(p) for p in e.absolute_path)
        prefix = f"{location}: " if location else ""
        raise ConfigError(f"config validation failed: {prefix}{e.message}") from e


def resolve_config_path(path: str | Path | None = None) -> tuple[Path, bool]:
    """Return ``(path, explicit)``; explicit paths must exist."""
    if path is not None:
        return Path(path), True
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: str | Path | None = None, explicit: bool | None = None) -> CleanerConfig:
    """Load and validate the YAML config.

    Raises:
        ConfigError: explicit path missing, invalid YAML or schema violation
    """
    resolved, is_explicit = resolve_config_path(path)
    if explicit is not None:
        is_explicit = explicit

    if not resolved.exists():
        if is_explicit:
            raise ConfigError(f"config file not found: {resolved}")
        return CleanerConfig()

    try:
        data = yaml.safe_load(resolved.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping")

    _validate_config_schema(data)

    custom_fields = tuple(data.get("custom_fields", []))
    clashes = [name for name in custom_fields if name in TARGET_HEADERS]
    if clashes:
        raise ConfigError(f"custom_fields may not repeat standard headers: {clashes}")

    return CleanerConfig(
        max_rows=data.get("max_rows", DEFAULT_MAX_ROWS),
        birthday_format=data.get("birthday_format", "MM/DD/YYYY"),
        address_separator=data.get("address_separator", ", "),
        custom_fields=custom_fields,
        export_format=data.get("export_format", "xlsx"),
        split_full_name=data.get("split_full_name", True),
        consolidate_address=data.get("consolidate_address", True),
        drop_duplicate_emails=data.get("drop_duplicate_emails", False),
        skip_long_names=data.get("skip_long_names", False),
        issue_log=data.get("issue_log", True),
    )
