from __future__ import annotations

import pytest

from tidy_import.detection.header_mapping import (
    collect_custom_headers,
    fallback_mapping,
    find_duplicate_targets,
    get_sample_values,
    mappings_from_suggestions,
    rename_source_header,
    update_mapping,
)
from tidy_import.models.parsed_file import ParsedFile
from tidy_import.models.schema import HeaderMapping


@pytest.mark.parametrize("header, target, confidence", [
    ("E-mail Address", "Email", 0.9),
    ("first_name", "First Name", 0.8),
    ("LName", "Last Name", 0.8),
    ("Mobile", "Phone", 0.8),
    ("Street", "Address", 0.7),
    ("DOB", "Birthday", 0.8),
    ("Time Zone", "Time Zone", 0.8),
    ("Client Type", "Status", 0.6),
    ("Lead Source", "Tags", 0.6),
    ("Comments", "Notes", 0.6),
    ("Favourite Colour", None, 0.0),
])
def test_fallback_mapping_tiers(header, target, confidence):
    [mapping] = fallback_mapping([header])
    assert (mapping.source_header, mapping.target_header, mapping.confidence) == (header, target, confidence)


def test_mappings_from_suggestions_matches_case_insensitively_and_clamps():
    payload = {"mappings": [
        {"source": "EMAIL", "target": "Email", "confidence": 0.95},
        {"source": "fav", "target": "Favourite", "confidence": 0.9},
        {"source": "Tel", "target": "Phone", "confidence": 3},
    ]}
    mappings = mappings_from_suggestions(["Email", "fav", "Tel", "Other"], payload)
    assert [(m.source_header, m.target_header, m.confidence) for m in mappings] == [
        ("Email", "Email", 0.95),
        ("fav", None, 0.0),
        ("Tel", "Phone", 1.0),
        ("Other", None, 0.0),
    ]


def test_mappings_from_suggestions_falls_back_without_payload():
    assert mappings_from_suggestions(["Email"], None) == fallback_mapping(["Email"])
    assert mappings_from_suggestions(["Email"], {"error": "rate limited"}) == fallback_mapping(["Email"])


def test_update_mapping_sets_full_confidence():
    mappings = [HeaderMapping("Ref", None), HeaderMapping("Mail", "Email", 0.9)]
    updated = update_mapping(mappings, "Ref", "Referral", is_custom=True)
    assert updated[0] == HeaderMapping("Ref", "Referral", 1.0, True)
    assert updated[1] is mappings[1]


def test_rename_source_header():
    parsed = ParsedFile(headers=["Mail"], rows=[{"Mail": "a@x.com"}])
    new_parsed, mappings = rename_source_header(parsed, [HeaderMapping("Mail", "Email", 0.9)], "Mail", "Email")
    assert new_parsed.headers == ["Email"]
    assert new_parsed.rows == [{"Email": "a@x.com"}]
    assert mappings[0].source_header == "Email"


def test_find_duplicate_targets_and_custom_headers():
    mappings = [
        HeaderMapping("Mail", "Email", 0.9),
        HeaderMapping("Email 2", "Email", 0.9),
        HeaderMapping("Ref", "Referral", 1.0, is_custom=True),
        HeaderMapping("Ref2", "Referral", 1.0, is_custom=True),
        HeaderMapping("Misc", None),
    ]
    assert sorted(find_duplicate_targets(mappings)) == ["Email", "Referral"]
    assert collect_custom_headers(mappings) == ["Referral"]


def test_get_sample_values():
    rows = [
        {"Notes": "n/a"}, {"Notes": "short"}, {"Notes": "short"},
        {"Notes": "x" * 40}, {"Notes": "third"}, {"Notes": "fourth"},
    ]
    assert get_sample_values(rows, "Notes") == ["short", "x" * 27 + "...", "third"]
