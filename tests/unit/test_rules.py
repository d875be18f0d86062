# tests/unit/test_rules.py
import pytest
from ingredient_audit.core.analysis import analyze
from ingredient_audit.core.models import IngredientRecord
from ingredient_audit.core.rules import find_generics, find_miscategorized, is_generic


def rec(name, category):
    return IngredientRecord(name=name, category=category)


@pytest.mark.parametrize("name", ["berries", "Nuts", "Frozen Vegetables", "cereal", "SOUP", "pasta"])
def test_generic_names(name):
    assert is_generic(name)


@pytest.mark.parametrize("name", ["blueberries", "penne pasta", "tomato soup", "", "nut"])
def test_specific_names_are_not_generic(name):
    assert not is_generic(name)


def test_find_generics_reports_reason():
    out = find_generics([rec("Pasta", "bakery_grains"), rec("Penne", "bakery_grains")])
    assert len(out) == 1
    assert out[0].name == "Pasta"
    assert out[0].reason == "Overly generic - specific varieties exist"


def test_alliums_in_flavor_builders_move_to_fresh_produce():
    records = [
        rec("garlic powder", "flavor_builders"),
        rec("onion", "flavor_builders"),
        rec("leeks", "flavor_builders"),
    ]
    out = find_miscategorized(records)
    assert [m.name for m in out] == ["garlic powder", "onion", "leeks"]
    for m in out:
        assert m.current_category == "flavor_builders"
        assert (m.suggested_category, m.suggested_subcategory) == ("fresh_produce", "alliums")


def test_rules_only_apply_to_their_category():
    out = find_miscategorized([rec("onion", "fresh_produce"), rec("Beef Broth", "cooking_essentials")])
    assert out == []


@pytest.mark.parametrize("name,category,expected", [
    ("Lemongrass", "flavor_builders", ("fresh_produce", "fresh_aromatics")),
    ("Canned Tuna", "pantry_staples", ("proteins", "seafood")),
    ("Coconut Milk", "pantry_staples", ("dairy_cold", "plant_based_dairy")),
    ("Instant Oatmeal", "pantry_staples", ("bakery_grains", "oats_hot_cereals")),
    ("Granola", "pantry_staples", ("bakery_grains", "breakfast_cereals")),
    ("Walnuts", "pantry_staples", ("proteins", "nuts_seeds")),
    ("Low Sodium Beef Broth", "pantry_staples", ("cooking_essentials", "stocks_broths")),
    ("Hoisin Sauce", "pantry_staples", ("cooking_essentials", "sauces_asian")),
    ("Hot Sauce", "pantry_staples", ("cooking_essentials", "sauces_western")),
    ("Tomato Paste", "pantry_staples", ("cooking_essentials", "tomato_products")),
    ("Cocoa Powder", "pantry_staples", ("pantry_staples", "chocolate_baking_chips")),
    ("Chickpeas", "pantry_staples", ("proteins", "legumes_canned")),
])
def test_rule_table(name, category, expected):
    out = find_miscategorized([rec(name, category)])
    assert len(out) == 1
    assert (out[0].suggested_category, out[0].suggested_subcategory) == expected


def test_record_matching_several_rules_is_reported_for_each():
    out = find_miscategorized([rec("Teriyaki Stock", "pantry_staples")])
    assert {m.suggested_subcategory for m in out} == {"stocks_broths", "sauces_asian"}


def test_analyze_builds_full_report():
    records = [
        IngredientRecord(name="Onion", normalized_name="onion", category="flavor_builders"),
        IngredientRecord(name="Onions", normalized_name="onions", category="flavor_builders"),
        IngredientRecord(name="Nuts", normalized_name="nuts", category="pantry_staples"),
    ]
    report = analyze(records)
    assert len(report.duplicates) == 1
    assert [g.name for g in report.generics] == ["Nuts"]
    assert [m.name for m in report.miscategorized] == ["Onion", "Onions"]
    assert report.total_issues() == 4
