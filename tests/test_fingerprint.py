"""
Tests for request canonicalization and fingerprinting.
"""

from datetime import date

import pytest
from conftest import make_request

from trip_suggestions.entities import Category
from trip_suggestions.fingerprint import canonicalize, compute_fingerprint, fingerprint_request


def test_case_and_order_do_not_change_fingerprint():
    """Test the Rome example: casing and cuisine order are irrelevant."""
    first = make_request(city="Rome", cuisines=("Italian", "Japanese"))
    second = make_request(city="rome", cuisines=("Japanese", "Italian"))

    assert fingerprint_request(first)[1] == fingerprint_request(second)[1]


def test_canonicalize_is_idempotent():
    """Test canonicalizing a canonical request returns the same value."""
    request = make_request(
        city="  New   York ",
        country="USA",
        interests=("Museums", "jazz", "museums"),
        budget_min=10.129,
        budget_max=250,
    )

    canonical = canonicalize(request)

    assert canonicalize(canonical) == canonical
    assert canonicalize(canonicalize(canonical)) == canonical


def test_canonical_form():
    """Test the normalization applied to each field."""
    request = make_request(
        city=" Rome ",
        country="ITALY",
        interests=("Street Food", "wine", "  street   food"),
        venue_types=(),
        budget_min=19.999,
        budget_max=80,
    )

    canonical = canonicalize(request)

    assert canonical == {
        "city": "rome",
        "country": "italy",
        "start_date": "2026-05-01",
        "end_date": "2026-05-05",
        "category": "food",
        "interests": ["street food", "wine"],
        "cuisines": [],
        "venue_types": [],
        "budget_min": 20.0,
        "budget_max": 80.0,
    }


def test_budget_rounding_precision():
    """Test budgets equal after rounding share a fingerprint."""
    a = make_request(budget_max=100.004)
    b = make_request(budget_max=100)
    c = make_request(budget_max=100.01)

    assert fingerprint_request(a)[1] == fingerprint_request(b)[1]
    assert fingerprint_request(a)[1] != fingerprint_request(c)[1]
    assert canonicalize(a, precision=0)["budget_max"] == 100.0


def test_negative_zero_budget_matches_zero():
    """Test -0.0 and 0.0 budgets share a fingerprint."""
    a = make_request(budget_min=0.0, budget_max=0.0)
    b = make_request(budget_min=-0.0, budget_max=-0.0004)

    assert fingerprint_request(a)[1] == fingerprint_request(b)[1]
    assert str(canonicalize(b)["budget_max"]) == "0.0"


def test_trip_id_is_not_part_of_fingerprint():
    """Test different trips asking the same question share an entry."""
    assert (
        fingerprint_request(make_request(trip_id="trip-1"))[1]
        == fingerprint_request(make_request(trip_id="trip-2"))[1]
    )


@pytest.mark.parametrize(
    "overrides",
    [
        {"category": Category.SHOPPING},
        {"city": "Milan"},
        {"end_date": date(2026, 5, 6)},
        {"cuisines": ("Italian",)},
        {"budget_min": 5.0},
    ],
)
def test_semantic_changes_change_fingerprint(overrides):
    """Test any semantic difference yields a different fingerprint."""
    assert fingerprint_request(make_request())[1] != fingerprint_request(make_request(**overrides))[1]


def test_fingerprint_is_sha256_hex():
    """Test the digest has a fixed length."""
    _, fingerprint = fingerprint_request(make_request())

    assert len(fingerprint) == 64
    assert all(ch in "0123456789abcdef" for ch in fingerprint)


def test_category_tag_is_digested():
    """Test the category tag takes part in the digest."""
    canonical = canonicalize(make_request())

    assert compute_fingerprint(canonical, Category.FOOD) != compute_fingerprint(canonical, "places")
    assert compute_fingerprint(canonical, Category.FOOD) == compute_fingerprint(canonical, "food")


def test_mapping_input_accepts_iso_dates():
    """Test plain mappings with string dates canonicalize like entities."""
    mapping = {
        "city": "ROME",
        "country": "Italy",
        "start_date": "2026-05-01",
        "end_date": "2026-05-05",
        "category": "food",
        "cuisines": ["Japanese", "Italian"],
    }

    assert canonicalize(mapping) == canonicalize(make_request(cuisines=("Italian", "Japanese")))


def test_unknown_category_is_rejected():
    """Test an unknown category cannot be canonicalized."""
    mapping = canonicalize(make_request())
    mapping["category"] = "nightlife"

    with pytest.raises(ValueError):
        canonicalize(mapping)
