from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
from openpyxl import load_workbook

from tidy_import.cli.__main__ import main as cli_main
from tidy_import.logging.init import reset_logging
from tidy_import.models.schema import TARGET_HEADERS

CLEAN_ROW = {
    "Email": "Ann@Example.com",
    "First Name": "ann",
    "Last Name": "LEE",
    "Phone": "(555) 123-4567",
    "Time Zone": "PST",
    "Status": "lead",
}


def _read_csv(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def test_cli_clean_file_success(write_config, make_csv, capsys):
    reset_logging()
    source = make_csv([CLEAN_ROW])
    code = cli_main([str(source)])
    out = capsys.readouterr().out
    assert code == 0
    output = source.with_name("cleaned_clients.csv")
    df = _read_csv(output)
    assert list(df.columns) == list(TARGET_HEADERS)
    row = df.iloc[0].to_dict()
    assert row["Email"] == "ann@example.com"
    assert row["First Name"] == "Ann"
    assert row["Last Name"] == "Lee"
    assert row["Phone"] == "555-123-4567"
    assert row["Time Zone"] == "Pacific Time (US & Canada)"
    assert row["Status"] == "Lead"
    assert "SUMMARY rows=1 " in out
    assert "issues=0 duplicates=0" in out
    assert "WARN issues:" not in out


def test_cli_missing_input(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([str(temp_workdir / "data" / "nope.csv")])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR read: file not found" in out


def test_cli_row_limit(write_config, make_csv, capsys):
    reset_logging()
    write_config.write_text("max_rows: 1\n", encoding="utf-8")
    source = make_csv([CLEAN_ROW, {**CLEAN_ROW, "Email": "bo@example.com"}])
    code = cli_main([str(source)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR read:" in out
    assert not source.with_name("cleaned_clients.csv").exists()


def test_cli_format_override_and_output_path(write_config, make_csv, temp_workdir: Path, capsys):
    reset_logging()
    source = make_csv([CLEAN_ROW])
    target = temp_workdir / "out" / "crm.xlsx"
    target.parent.mkdir()
    code = cli_main([str(source), "--format", "xlsx", "-o", str(target)])
    assert code == 0
    wb = load_workbook(target)
    assert wb.sheetnames == ["Cleaned Data"]
    assert wb["Cleaned Data"]["A2"].value == "ann@example.com"


def test_cli_custom_field_passthrough(write_config, make_csv, capsys):
    reset_logging()
    source = make_csv([{**CLEAN_ROW, "Referral": "  Bob  ", "Shoe Size": "9"}])
    code = cli_main([str(source)])
    assert code == 0
    df = _read_csv(source.with_name("cleaned_clients.csv"))
    # Referral comes from config; unmapped columns are not exported
    assert list(df.columns) == [*TARGET_HEADERS, "Referral"]
    assert df.iloc[0]["Referral"] == "Bob"


def test_cli_mapping_file(write_config, make_csv, temp_workdir: Path, capsys):
    reset_logging()
    source = make_csv([{"Col A": "ann@example.com", "Col B": "Ann", "Col C": "Lee", "Col D": "5551234567", "Col E": "EST"}])
    mapping = temp_workdir / "mapping.json"
    mapping.write_text(json.dumps({"mappings": [
        {"source": "col a", "target": "Email", "confidence": 0.95},
        {"source": "Col B", "target": "First Name", "confidence": 0.9},
        {"source": "Col C", "target": "Last Name", "confidence": 0.9},
        {"source": "Col D", "target": "Phone", "confidence": 0.9},
        {"source": "Col E", "target": "Time Zone", "confidence": 0.9},
    ]}), encoding="utf-8")
    code = cli_main([str(source), "--mapping", str(mapping)])
    assert code == 0
    row = _read_csv(source.with_name("cleaned_clients.csv")).iloc[0]
    assert row["Email"] == "ann@example.com"
    assert row["Time Zone"] == "Eastern Time (US & Canada)"


def test_cli_bad_mapping_file(write_config, make_csv, temp_workdir: Path, capsys):
    reset_logging()
    source = make_csv([CLEAN_ROW])
    mapping = temp_workdir / "mapping.json"
    mapping.write_text("[1, 2]", encoding="utf-8")
    code = cli_main([str(source), "--mapping", str(mapping)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR mapping:" in out


def test_cli_duplicate_target_keeps_first_confident_source(write_config, make_csv, capsys):
    reset_logging()
    source = make_csv([{**CLEAN_ROW, "E-mail Address": "other@example.com"}])
    code = cli_main([str(source)])
    out = capsys.readouterr().out
    assert code == 0
    assert "WARN mapping: 'E-mail Address' also targets 'Email'; left unmapped" in out
    row = _read_csv(source.with_name("cleaned_clients.csv")).iloc[0]
    assert row["Email"] == "ann@example.com"


def test_cli_skip_long_names(write_config, make_csv, capsys):
    reset_logging()
    long_row = {**CLEAN_ROW, "Email": "long@example.com", "Last Name": "X" * 30}
    source = make_csv([CLEAN_ROW, long_row])
    code = cli_main([str(source), "--skip-long-names"])
    out = capsys.readouterr().out
    assert code == 0
    assert "WARN 1 rows skipped" in out
    df = _read_csv(source.with_name("cleaned_clients.csv"))
    assert df["Email"].tolist() == ["ann@example.com"]


def test_cli_counts_delimiter_only_rows_as_removed(write_config, temp_workdir: Path, capsys):
    reset_logging()
    source = temp_workdir / "data" / "clients.csv"
    source.write_text(
        "Email,First Name,Last Name,Phone,Time Zone\n"
        ",,,,\n"
        "ann@example.com,Ann,Lee,5551234567,EST\n"
        "\n"
        ",,,,\n",
        encoding="utf-8",
    )
    code = cli_main([str(source)])
    out = capsys.readouterr().out
    assert code == 0
    assert " rows=1 " in out
    assert " empty_rows=2 " in out
