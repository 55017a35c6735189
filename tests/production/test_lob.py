import pytest

from production.lob import canonical_lob, lob_to_bucket, normalize_lob
from production.models import sanitize_statuses


@pytest.mark.parametrize("name, expected", [
    ("Auto", "Auto"),
    ("  personal auto ", "Auto"),
    ("PA", "Auto"),
    ("Homeowners HO-3", "Fire"),
    ("Term Life", "Life"),
    ("Health", "Health"),
    ("investment", "IPS"),
])
def test_known_names_fold_onto_canonical_lobs(name, expected):
    assert normalize_lob(name) == expected


def test_short_aliases_only_match_whole_names():
    assert canonical_lob("Spa coverage") is None


def test_unmatched_names_pass_through(caplog):
    assert normalize_lob("Boat") == "Boat"
    assert "does not map" in caplog.text


def test_blank_names_are_unknown():
    assert normalize_lob("") == "Unknown"
    assert normalize_lob(None) == "Unknown"


@pytest.mark.parametrize("lob, bucket", [
    ("Auto", "PC"),
    ("Fire", "PC"),
    ("Life", "FS"),
    ("Health", "FS"),
    ("IPS", "IPS"),
    ("Boat", "PC"),
])
def test_lob_to_bucket(lob, bucket):
    assert lob_to_bucket(lob) == bucket


def test_sanitize_statuses_keeps_known_values_in_order():
    assert sanitize_statuses(["paid", "WRITTEN", "bogus", "PAID"]) == ["PAID", "WRITTEN"]
    assert sanitize_statuses("issued, cancelled") == ["ISSUED", "CANCELLED"]


def test_sanitize_statuses_falls_back_to_counted():
    assert sanitize_statuses(None) == ["WRITTEN", "ISSUED", "PAID"]
    assert sanitize_statuses(["nope"]) == ["WRITTEN", "ISSUED", "PAID"]
