# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from tidy_import.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("TIDY_IMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """max_rows: 100
birthday_format: MM/DD/YYYY
address_separator: ", "
custom_fields: [Referral]
export_format: csv
split_full_name: true
consolidate_address: true
drop_duplicate_emails: false
skip_long_names: false
issue_log: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "tidy_import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def client_rows() -> list[dict[str, str]]:
    """Raw rows as a messy CRM export would hand them over."""
    return [
        {
            "E-mail": " John.Doe @ Example.com ", "First": "JOHN", "Last": "doe",
            "Cell": "(555) 123-4567", "DOB": "1990-01-15", "TZ": "PST",
            "Type": "lead", "Tags": "a, b;;c", "Comments": "likes golf",
        },
        {
            "E-mail": "jane@example.com", "First": "jane", "Last": "SMITH",
            "Cell": "555.987.6543", "DOB": "15/01/1985", "TZ": "Eastern Time (US & Canada)",
            "Type": "VIP", "Tags": "", "Comments": "",
        },
        {
            "E-mail": "n/a", "First": "", "Last": "", "Cell": "", "DOB": "",
            "TZ": "", "Type": "", "Tags": "", "Comments": "",
        },
    ]


@pytest.fixture()
def make_csv(temp_workdir: Path):
    def _make(rows: list[dict[str, str]], name: str = "clients.csv") -> Path:
        path = temp_workdir / "data" / name
        pd.DataFrame(rows).to_csv(path, index=False)
        return path
    return _make


@pytest.fixture()
def make_excel(temp_workdir: Path):
    def _make(rows: list[dict[str, str]], name: str = "clients.xlsx") -> Path:
        path = temp_workdir / "data" / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name="Clients", index=False)
        return path
    return _make


@pytest.fixture()
def fresh_logging():
    reset_logging()
    yield
    reset_logging()
