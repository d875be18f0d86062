from __future__ import annotations

from typing import Dict, Iterable, List

from .models import IngredientAssignment, ValidationResult

VALID_SUBCATEGORIES: Dict[str, List[str]] = {
    "bakery_grains": [
        "pasta_noodles", "rice_ancient_grains", "bread_baked_goods",
        "flours_meals", "oats_hot_cereals", "breakfast_cereals", "baking_mixes",
    ],
    "proteins": [
        "fresh_meat", "poultry", "seafood", "plant_proteins",
        "eggs_egg_products", "legumes_dried", "legumes_canned", "nuts_seeds",
    ],
    "fresh_produce": [
        "leafy_greens", "cruciferous_vegetables", "root_vegetables", "alliums",
        "nightshades", "squash_gourds", "fresh_herbs", "fresh_aromatics",
        "citrus_fruits", "stone_fruits", "berries", "tropical_fruits",
        "apples_pears", "melons",
    ],
    "dairy_cold": [
        "milk_cream", "yogurt_kefir", "cheese_hard", "cheese_soft",
        "butter_spreads", "plant_based_dairy", "refrigerated_dough",
    ],
    "cooking_essentials": [
        "cooking_oils", "vinegars", "cooking_wines_spirits", "stocks_broths",
        "sauces_asian", "sauces_western", "tomato_products",
    ],
    "flavor_builders": [
        "dried_herbs", "ground_spices", "whole_spices", "spice_blends",
        "salt_pepper", "extracts_flavorings", "fresh_aromatics",
    ],
    "pantry_staples": [
        "sweeteners", "baking_essentials", "canned_vegetables", "canned_fruits",
        "condiments", "jams_preserves", "dried_fruits", "snacks",
        "chocolate_baking_chips",
    ],
    "frozen": [
        "frozen_vegetables", "frozen_fruits", "frozen_proteins",
        "frozen_prepared_foods", "ice_cream_desserts", "frozen_dough_pastry",
    ],
}


def validate_assignments(assignments: Iterable[IngredientAssignment]) -> ValidationResult:
    """
    Check category/subcategory assignments for a cleaned-up catalog.

    Rows marked for deletion are ignored. Unknown categories, subcategories
    outside their category and repeated normalized names are errors; a
    missing subcategory is only a warning.
    """
    result = ValidationResult()
    active = [a for a in assignments if a.action != "delete"]
    result.stats.total_ingredients = len(active)

    names_by_key: Dict[str, List[str]] = {}

    for a in active:
        names_by_key.setdefault(a.normalized_name, []).append(a.name)

        if a.category not in VALID_SUBCATEGORIES:
            result.errors.append(f'Invalid category "{a.category}" for ingredient "{a.name}"')
            result.is_valid = False

        result.stats.by_category[a.category] = result.stats.by_category.get(a.category, 0) + 1

        if not a.subcategory:
            result.stats.without_subcategory += 1
            result.warnings.append(f'Ingredient "{a.name}" has no subcategory assigned')
            continue

        key = f"{a.category}::{a.subcategory}"
        result.stats.by_subcategory[key] = result.stats.by_subcategory.get(key, 0) + 1

        if a.subcategory not in VALID_SUBCATEGORIES.get(a.category, []):
            result.errors.append(
                f'Invalid subcategory "{a.subcategory}" for category "{a.category}" on ingredient "{a.name}"'
            )
            result.is_valid = False

    for key, names in names_by_key.items():
        if len(names) > 1:
            result.stats.duplicate_normalized_names += 1
            result.errors.append(f'Duplicate normalized name "{key}": {", ".join(names)}')
            result.is_valid = False

    return result
