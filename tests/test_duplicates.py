# tests/test_duplicates.py
from ingredient_audit.core.duplicates import find_duplicates, is_plural_pair
from ingredient_audit.core.models import DuplicateReason, IngredientRecord


def rec(name, key, category="produce"):
    return IngredientRecord(name=name, normalized_name=key, category=category)


def test_exact_normalized_match_reports_one_pair():
    out = find_duplicates([rec("Tomato", "tomato"), rec("tomato", "tomato")])
    assert len(out) == 1
    assert out[0].reason == DuplicateReason.EXACT_NORMALIZED_MATCH
    assert (out[0].name1, out[0].name2, out[0].category) == ("Tomato", "tomato", "produce")


def test_singular_plural_variant_is_detected():
    out = find_duplicates([rec("Berry", "berry"), rec("Berries", "berries")])
    assert [p.reason for p in out] == [DuplicateReason.SINGULAR_PLURAL_VARIANT]
    assert (out[0].name1, out[0].name2) == ("Berry", "Berries")


def test_trailing_s_plural_is_detected():
    out = find_duplicates([rec("Onion", "onion"), rec("Onions", "onions")])
    assert [p.reason for p in out] == [DuplicateReason.SINGULAR_PLURAL_VARIANT]


def test_single_typo_in_same_category_is_near_duplicate():
    out = find_duplicates([rec("Tomato", "tomato"), rec("Tomatoe", "tomatoe")])
    assert [p.reason for p in out] == [DuplicateReason.SIMILAR_NAME_SAME_CATEGORY]


def test_broth_and_stock_are_not_near_duplicates():
    out = find_duplicates([
        rec("Chicken Broth", "chicken broth", "cooking_essentials"),
        rec("Chicken Stock", "chicken stock", "cooking_essentials"),
    ])
    assert out == []


def test_similar_names_in_different_categories_are_ignored():
    out = find_duplicates([rec("Tomato", "tomato", "produce"), rec("Tomatoe", "tomatoe", "pantry")])
    assert out == []


def test_plural_and_similarity_can_both_fire_for_one_pair():
    out = find_duplicates([rec("Tomatoe", "tomatoe"), rec("Tomatoes", "tomatoes")])
    assert [p.reason for p in out] == [
        DuplicateReason.SINGULAR_PLURAL_VARIANT,
        DuplicateReason.SIMILAR_NAME_SAME_CATEGORY,
    ]


def test_first_seen_record_stays_canonical():
    out = find_duplicates([rec("Tomato", "tomato"), rec("tomato", "tomato"), rec("TOMATO", "tomato")])
    assert [(p.name1, p.name2) for p in out] == [("Tomato", "tomato"), ("Tomato", "TOMATO")]


def test_detection_only_compares_against_earlier_records():
    records = [rec("Tomato", "tomato"), rec("Tomatoes", "tomatoes")]
    forward = find_duplicates(records)
    backward = find_duplicates(list(reversed(records)))
    assert (forward[0].name1, forward[0].name2) == ("Tomato", "Tomatoes")
    assert (backward[0].name1, backward[0].name2) == ("Tomatoes", "Tomato")


def test_report_category_comes_from_later_record():
    out = find_duplicates([rec("Lemon", "lemon", "produce"), rec("Lemons", "lemons", "citrus")])
    assert len(out) == 1
    assert out[0].category == "citrus"


def test_seen_mapping_carries_state_across_batches():
    seen = {}
    assert find_duplicates([rec("Onion", "onion")], seen=seen) == []
    assert list(seen) == ["onion"]
    out = find_duplicates([rec("Onions", "onions")], seen=seen)
    assert [p.reason for p in out] == [DuplicateReason.SINGULAR_PLURAL_VARIANT]
    assert list(seen) == ["onion", "onions"]


def test_calls_without_seen_are_independent():
    find_duplicates([rec("Onion", "onion")])
    assert find_duplicates([rec("Onions", "onions")]) == []


def test_threshold_is_configurable():
    records = [
        rec("Chicken Broth", "chicken broth", "cooking_essentials"),
        rec("Chicken Stock", "chicken stock", "cooking_essentials"),
    ]
    out = find_duplicates(records, threshold=0.5)
    assert [p.reason for p in out] == [DuplicateReason.SIMILAR_NAME_SAME_CATEGORY]


def test_missing_normalized_name_is_derived_from_name():
    out = find_duplicates([
        IngredientRecord(name="Crème Fraîche", category="dairy_cold"),
        IngredientRecord(name="creme fraiche", category="dairy_cold"),
    ])
    assert [p.reason for p in out] == [DuplicateReason.EXACT_NORMALIZED_MATCH]


def test_is_plural_pair():
    assert is_plural_pair("berry", "berries")
    assert is_plural_pair("potatoes", "potato")
    assert is_plural_pair("egg", "eggs")
    assert not is_plural_pair("egg", "egg")
    assert not is_plural_pair("", "s")
