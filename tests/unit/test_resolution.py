from __future__ import annotations

import pytest

from tidy_import.models.cleaning_stats import CleaningStats
from tidy_import.models.parsed_file import ProcessResult
from tidy_import.services.resolution import (
    apply_birthday_format,
    apply_contact_edits,
    apply_name_edits,
    assign_field,
    build_snapshot,
    edit_rows,
    keep_first_duplicates,
    remove_rows,
    rows_for_export,
)


def _rows() -> list[dict[str, str]]:
    return [
        {"Email": "a@x.com", "First Name": "Ann", "Last Name": "Lee", "Phone": "1",
         "Time Zone": "", "Status": "", "Birthday": "03/04/1990"},
        {"Email": "A@X.com", "First Name": "Bo", "Last Name": "Ray", "Phone": "2",
         "Time Zone": "London", "Status": "VIP", "Birthday": ""},
        {"Email": "c@x.com", "First Name": "Cy", "Last Name": "Oh", "Phone": "3",
         "Time Zone": "London", "Status": "Lead", "Birthday": "n/a"},
    ]


@pytest.fixture()
def snapshot():
    return build_snapshot(ProcessResult(data=_rows(), stats=CleaningStats(total_rows=3)))


def test_build_snapshot_computes_diagnostics(snapshot):
    assert [g.row_indices for g in snapshot.duplicates] == [[0, 1]]
    assert [v.row_index for v in snapshot.validations] == [0]


def test_remove_duplicates_keeps_first(snapshot):
    drop = keep_first_duplicates(snapshot.duplicates)
    assert drop == {1}
    after = remove_rows(snapshot, drop)
    assert [r["First Name"] for r in after.rows] == ["Ann", "Cy"]
    assert after.stats.total_rows == 2
    assert after.duplicates == []
    # previous snapshot untouched
    assert len(snapshot.rows) == 3 and snapshot.stats.total_rows == 3


def test_assign_time_zone_recomputes_validations(snapshot):
    after = assign_field(snapshot, "Time Zone", {0: "London"})
    assert after.rows[0]["Time Zone"] == "London"
    assert after.stats.time_zone_validated == 1
    assert after.stats.total_cells_modified == 1
    assert after.validations == []
    assert snapshot.rows[0]["Time Zone"] == ""


def test_assign_status(snapshot):
    after = assign_field(snapshot, "Status", {0: "Customer", 2: "Lead"})
    assert after.stats.status_validated == 2
    assert after.stats.total_cells_modified == 2


def test_assign_field_rejects_other_columns(snapshot):
    with pytest.raises(ValueError):
        assign_field(snapshot, "Email", {0: "x@y.com"})


def test_name_edits_count_only_real_changes(snapshot):
    after = apply_name_edits(snapshot, {0: {"First Name": "Ann", "Last Name": "Leigh"}})
    assert after.rows[0]["Last Name"] == "Leigh"
    assert after.stats.names_to_proper_case == 1
    assert after.stats.total_cells_modified == 1


def test_contact_edits_resolve_duplicate(snapshot):
    after = apply_contact_edits(snapshot, {1: {"Email": "bo@x.com", "Phone": "2"}})
    assert after.stats.emails_cleaned == 1
    assert after.stats.phones_normalized == 0
    assert after.duplicates == []


def test_contact_edits_reject_name_columns(snapshot):
    with pytest.raises(ValueError):
        apply_contact_edits(snapshot, {0: {"First Name": "X"}})


def test_birthday_format(snapshot):
    after = apply_birthday_format(snapshot, "DD/MM/YYYY")
    assert [r["Birthday"] for r in after.rows] == ["04/03/1990", "", "n/a"]
    assert after.stats.birthday_formatted == 1


def test_edit_rows_recomputes_everything(snapshot):
    rows = [dict(r) for r in snapshot.rows]
    rows[2]["Email"] = "a@x.com"
    after = edit_rows(snapshot, rows)
    assert [g.row_indices for g in after.duplicates] == [[0, 1, 2]]
    assert after.stats == snapshot.stats


def test_rows_for_export_skips(snapshot):
    assert [r["First Name"] for r in rows_for_export(snapshot, {0, 2})] == ["Bo"]
    assert len(rows_for_export(snapshot)) == 3
