from __future__ import annotations

import json

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from tidy_import.config.loader import SCHEMA_PATH, ConfigError, load_config

"""Config schema contract: the bundled JSON schema accepts every documented
key and rejects unknown keys and out-of-range values."""


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_config_schema_valid_example(sample_config_yaml: str):
    jsonschema.validate(yaml.safe_load(sample_config_yaml), _schema())


def test_config_schema_empty_is_valid():
    jsonschema.validate({}, _schema())


@pytest.mark.parametrize("config", [
    {"extra_field": 1},
    {"max_rows": 0},
    {"max_rows": "5000"},
    {"birthday_format": "DD-MM-YY"},
    {"export_format": "pdf"},
    {"custom_fields": ["A", "A"]},
    {"custom_fields": [""]},
    {"address_separator": ""},
    {"issue_log": "yes"},
])
def test_config_schema_rejects(config):
    with pytest.raises(ValidationError):
        jsonschema.validate(config, _schema())


def test_loader_reports_schema_violation(write_config):
    write_config.write_text("max_rows: 5000\nunknown: true\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)
