# tests/unit/test_validation.py
from ingredient_audit.core.models import IngredientAssignment
from ingredient_audit.core.validation import validate_assignments


def a(name, key, category, subcategory=None, action="keep"):
    return IngredientAssignment(name=name, normalized_name=key, category=category, subcategory=subcategory, action=action)


def test_clean_assignments_pass():
    result = validate_assignments([
        a("Onion", "onion", "fresh_produce", "alliums"),
        a("Walnuts", "walnuts", "proteins", "nuts_seeds"),
    ])
    assert result.is_valid
    assert result.errors == []
    assert result.stats.total_ingredients == 2
    assert result.stats.by_subcategory == {"fresh_produce::alliums": 1, "proteins::nuts_seeds": 1}


def test_deleted_rows_are_ignored():
    result = validate_assignments([
        a("Nuts", "nuts", "bogus", action="delete"),
        a("Onion", "onion", "fresh_produce", "alliums"),
    ])
    assert result.is_valid
    assert result.stats.total_ingredients == 1


def test_invalid_category_and_subcategory_are_errors():
    result = validate_assignments([
        a("Thing", "thing", "misc", "stuff"),
        a("Onion", "onion", "fresh_produce", "seafood"),
    ])
    assert not result.is_valid
    assert 'Invalid category "misc" for ingredient "Thing"' in result.errors
    assert any('Invalid subcategory "seafood"' in e for e in result.errors)


def test_missing_subcategory_is_only_a_warning():
    result = validate_assignments([a("Onion", "onion", "fresh_produce")])
    assert result.is_valid
    assert result.stats.without_subcategory == 1
    assert result.warnings == ['Ingredient "Onion" has no subcategory assigned']


def test_duplicate_normalized_names_are_errors():
    result = validate_assignments([
        a("Onion", "onion", "fresh_produce", "alliums"),
        a("Yellow Onion", "onion", "fresh_produce", "alliums"),
    ])
    assert not result.is_valid
    assert result.stats.duplicate_normalized_names == 1
    assert 'Duplicate normalized name "onion": Onion, Yellow Onion' in result.errors
