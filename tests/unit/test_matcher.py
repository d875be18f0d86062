# tests/unit/test_matcher.py
import pytest
from ingredient_audit.core.matcher import IngredientMatcher

GROCERIES = {
    "Produce": ["onion", "garlic", "bell pepper", "tomato"],
    "Dairy": ["milk", "cheese", "butter"],
    "Pantry": ["olive oil", "flour", "sugar"],
}


@pytest.fixture
def matcher():
    return IngredientMatcher(GROCERIES)


@pytest.mark.parametrize("text,expected", [
    ("2 cups chopped onion", "onion"),
    ("3 cloves minced garlic", "garlic"),
    ("2 tablespoons olive oil", "olive oil"),
    ("1/2 cup diced bell pepper", "bell pepper"),
    ("2-3 medium tomatoes, diced", "tomato"),
    ("1 cup shredded cheese", "cheese"),
    ("2 tbsp melted butter", "butter"),
    ("1/4 cup sifted flour", "flour"),
    ("onion", "onion"),
    ("garlic", "garlic"),
])
def test_matches_full_ingredient_text(matcher, text, expected):
    m = matcher.match_ingredient(text)
    assert m.match_type != "none"
    assert m.matched_grocery_ingredient == expected
    assert m.confidence > 0


@pytest.mark.parametrize("text,expected", [
    ("2 cups onion chopped", "onion"),
    ("3 cloves garlic minced", "garlic"),
    ("1/2 cup butter softened", "butter"),
])
def test_matches_concatenated_structured_ingredients(matcher, text, expected):
    assert matcher.match_ingredient(text).matched_grocery_ingredient == expected


@pytest.mark.parametrize("text", ["2 cups quinoa", "1 lb chicken breast", "", "2 cups"])
def test_unknown_ingredients_do_not_match(matcher, text):
    m = matcher.match_ingredient(text)
    assert m.match_type == "none"
    assert m.matched_grocery_ingredient is None
    assert m.confidence == 0


def test_has_ingredient(matcher):
    assert matcher.has_ingredient("2 cups chopped onion")
    assert matcher.has_ingredient("3 cloves minced garlic")
    assert matcher.has_ingredient("2 tablespoons olive oil")
    assert not matcher.has_ingredient("1 lb quinoa")
    assert not matcher.has_ingredient("chicken breast")


def test_match_types_and_categories(matcher):
    exact = matcher.match_ingredient("1 cup milk")
    assert (exact.match_type, exact.category, exact.confidence) == ("exact", "Dairy", 1.0)

    plural = matcher.match_ingredient("4 tomatoes")
    assert (plural.match_type, plural.matched_grocery_ingredient) == ("plural", "tomato")

    partial = matcher.match_ingredient("2 red bell peppers")
    assert (partial.match_type, partial.matched_grocery_ingredient) == ("partial", "bell pepper")

    fuzzy = matcher.match_ingredient("2 tbsp olive oyl")
    assert (fuzzy.match_type, fuzzy.matched_grocery_ingredient) == ("fuzzy", "olive oil")
    assert 0.85 < fuzzy.confidence < 1


def test_longest_contained_grocery_wins():
    m = IngredientMatcher({"Produce": ["pepper", "bell pepper"]}).match_ingredient("1 red bell pepper")
    assert m.matched_grocery_ingredient == "bell pepper"


def test_fuzzy_threshold_is_configurable():
    strict = IngredientMatcher(GROCERIES, threshold=0.95)
    assert strict.match_ingredient("olive oyl").match_type == "none"
