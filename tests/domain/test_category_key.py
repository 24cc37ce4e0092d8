"""Tests for case-insensitive category keys."""

from finance_tracker.domain.models import CategoryKey


def test_keys_compare_and_hash_case_insensitively():
    assert CategoryKey("Food") == CategoryKey("FOOD")
    assert hash(CategoryKey("Food")) == hash(CategoryKey("food"))
    assert CategoryKey("Food") != CategoryKey("Transport")


def test_key_keeps_display_spelling():
    key = CategoryKey("Food")

    assert key.name == "Food"
    assert key.folded == "food"


def test_matches_raw_strings():
    key = CategoryKey("Food")

    assert key.matches("fOoD")
    assert not key.matches("Foods")


def test_dict_lookup_ignores_case():
    totals = {CategoryKey("Food"): 1}

    assert totals[CategoryKey("food")] == 1
