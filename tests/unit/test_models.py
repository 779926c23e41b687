from __future__ import annotations

import pytest

from tidy_import.models.cleaning_stats import CleaningStats, StatsAccumulator
from tidy_import.models.schema import (
    TARGET_HEADERS,
    AddressRole,
    CustomField,
    HeaderMapping,
    MappingError,
    StandardField,
    resolve_target,
)
from tidy_import.models.validation import RowValidation


def test_target_headers_order():
    assert TARGET_HEADERS == (
        "Email", "First Name", "Last Name", "Phone", "Address",
        "Birthday", "Time Zone", "Status", "Tags", "Notes",
    )


def test_resolve_target():
    assert resolve_target("Email") is StandardField.EMAIL
    assert resolve_target("Email", is_custom=True) is StandardField.EMAIL
    assert resolve_target("Referral", is_custom=True) == CustomField("Referral")
    with pytest.raises(MappingError):
        resolve_target("Referral")


def test_header_mapping_wire_shape():
    m = HeaderMapping.from_dict({"sourceHeader": "E-mail", "targetHeader": "Email", "confidence": 0.9})
    assert m == HeaderMapping("E-mail", "Email", 0.9)
    assert m.to_dict() == {"sourceHeader": "E-mail", "targetHeader": "Email", "confidence": 0.9}
    custom = HeaderMapping("Ref", "Referral", 1.0, is_custom=True)
    assert custom.to_dict()["isCustom"] is True
    assert custom.target == CustomField("Referral")
    assert HeaderMapping.from_dict({"sourceHeader": "X", "targetHeader": None}).target is None


def test_header_mapping_rejects_bad_confidence_and_unknown_target():
    with pytest.raises(MappingError):
        HeaderMapping("A", "Email", 1.5)
    with pytest.raises(MappingError):
        HeaderMapping("A", "Nickname", 0.5).target


def test_address_role_order():
    assert [r.order for r in AddressRole] == list(range(7))
    assert AddressRole.STREET1.order < AddressRole.CITY.order < AddressRole.COUNTRY.order


def test_cleaning_stats_merge_and_to_dict():
    stats = CleaningStats(total_rows=2, emails_cleaned=1)
    merged = stats.merge({"addressesConsolidated": 2, "total_cells_modified": 3})
    assert merged.addresses_consolidated == 2
    assert merged.total_cells_modified == 3
    assert stats.addresses_consolidated == 0
    assert merged.merge(CleaningStats(emails_cleaned=4)).emails_cleaned == 5
    d = merged.to_dict()
    assert d["totalRows"] == 2 and d["addressesConsolidated"] == 2
    assert len(d) == 13
    with pytest.raises(ValueError):
        stats.merge({"bogus": 1})


def test_stats_accumulator_snapshot():
    acc = StatsAccumulator()
    acc.add("emails_cleaned")
    acc.add("total_cells_modified", 3)
    snap = acc.snapshot()
    assert snap == CleaningStats(emails_cleaned=1, total_cells_modified=3)
    assert snap.with_total_rows(9).total_rows == 9


def test_row_validation_issue_types():
    clean = RowValidation(row_index=0)
    assert not clean.has_issues
    v = RowValidation(
        row_index=1,
        missing_fields=["First Name", "Email", "Last Name"],
        first_name_required=True,
        invalid_time_zone=True,
        last_name_too_long=True,
    )
    assert v.has_issues
    assert v.issue_types() == [
        "FIRST_NAME_REQUIRED", "MISSING_EMAIL", "MISSING_LAST_NAME",
        "LAST_NAME_TOO_LONG", "INVALID_TIME_ZONE",
    ]
