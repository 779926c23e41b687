from __future__ import annotations

from openpyxl import load_workbook

from tidy_import.cli.__main__ import main as cli_main
from tidy_import.logging.init import reset_logging
from tidy_import.models.schema import TARGET_HEADERS

"""Export layout contract: one 'Cleaned Data' sheet, standard headers first,
custom fields after them, spreadsheet formulas neutralized."""


def test_xlsx_layout(make_csv, capsys):
    reset_logging()
    source = make_csv([{
        "Referral": "=HYPERLINK(\"http://x\")",
        "Email": "ann@example.com",
        "First Name": "Ann",
        "Last Name": "Lee",
        "Phone": "5551234567",
        "Time Zone": "EST",
        "Comments": "+1 call back",
    }])
    code = cli_main([str(source), "--custom-field", "Referral", "--format", "xlsx"])
    assert code == 0
    wb = load_workbook(source.with_name("cleaned_clients.xlsx"))
    assert wb.sheetnames == ["Cleaned Data"]
    ws = wb["Cleaned Data"]
    header = [c.value for c in ws[1]]
    assert header == [*TARGET_HEADERS, "Referral"]
    assert all(c.font.bold for c in ws[1])
    values = dict(zip(header, [c.value for c in ws[2]], strict=True))
    assert values["Notes"] == "'+1 call back"
    assert values["Referral"] == "'=HYPERLINK(\"http://x\")"
    assert values["Phone"] == "555-123-4567"
    assert ws.max_row == 2


def test_csv_layout_without_custom_fields(make_csv, capsys):
    reset_logging()
    source = make_csv([{"Email": "ann@example.com", "First Name": "Ann"}])
    cli_main([str(source), "--format", "csv"])
    header = source.with_name("cleaned_clients.csv").read_text(encoding="utf-8").splitlines()[0]
    assert header.split(",") == list(TARGET_HEADERS)
