from __future__ import annotations

from typing import FrozenSet, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict

from .models import GenericItem, IngredientRecord, MiscategorizedItem


# ---------- Generic (umbrella) items ----------

GENERIC_NAMES: FrozenSet[str] = frozenset({
    "berries",
    "nuts",
    "frozen vegetables",
    "cereal",
    "soup",
    "pasta",
})

GENERIC_REASON = "Overly generic - specific varieties exist"


def is_generic(name: str) -> bool:
    return name.lower() in GENERIC_NAMES


def find_generics(records: Iterable[IngredientRecord]) -> List[GenericItem]:
    return [
        GenericItem(name=rec.name, category=rec.category, reason=GENERIC_REASON)
        for rec in records
        if is_generic(rec.name)
    ]


# ---------- Category reassignment rules ----------

class CategoryRule(BaseModel):
    """
    Flags records in `category` whose lowercased name contains any of
    `contains` or equals any of `equals`.
    """
    model_config = ConfigDict(frozen=True)

    category: str
    contains: Tuple[str, ...] = ()
    equals: Tuple[str, ...] = ()
    suggested_category: str
    suggested_subcategory: str
    reason: str

    def matches(self, rec: IngredientRecord) -> bool:
        if rec.category != self.category:
            return False
        name = rec.name.lower()
        return name in self.equals or any(part in name for part in self.contains)


MISCATEGORIZATION_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(
        category="flavor_builders",
        contains=("garlic", "onion"),
        equals=("leeks", "shallots"),
        suggested_category="fresh_produce",
        suggested_subcategory="alliums",
        reason="Alliums should be in fresh_produce/alliums",
    ),
    CategoryRule(
        category="flavor_builders",
        contains=("ginger root",),
        equals=("fresh ginger", "lemongrass"),
        suggested_category="fresh_produce",
        suggested_subcategory="fresh_aromatics",
        reason="Fresh aromatics should be in fresh_produce",
    ),
    CategoryRule(
        category="pantry_staples",
        contains=("canned salmon", "canned sardines", "canned tuna"),
        suggested_category="proteins",
        suggested_subcategory="seafood",
        reason="Canned seafood should be in proteins/seafood",
    ),
    CategoryRule(
        category="pantry_staples",
        equals=("coconut milk",),
        suggested_category="dairy_cold",
        suggested_subcategory="plant_based_dairy",
        reason="Coconut milk should be in dairy_cold/plant_based_dairy",
    ),
    CategoryRule(
        category="pantry_staples",
        equals=("oatmeal", "instant oatmeal"),
        suggested_category="bakery_grains",
        suggested_subcategory="oats_hot_cereals",
        reason="Oats should be in bakery_grains/oats_hot_cereals",
    ),
    CategoryRule(
        category="pantry_staples",
        equals=("cereal", "granola"),
        suggested_category="bakery_grains",
        suggested_subcategory="breakfast_cereals",
        reason="Cereals should be in bakery_grains/breakfast_cereals",
    ),
    CategoryRule(
        category="pantry_staples",
        equals=("almonds", "walnuts", "pecans", "peanuts", "mixed nuts"),
        suggested_category="proteins",
        suggested_subcategory="nuts_seeds",
        reason="Nuts should be in proteins/nuts_seeds",
    ),
    CategoryRule(
        category="pantry_staples",
        contains=("broth", "stock"),
        suggested_category="cooking_essentials",
        suggested_subcategory="stocks_broths",
        reason="Broths/stocks should be in cooking_essentials/stocks_broths",
    ),
    CategoryRule(
        category="pantry_staples",
        contains=("soy sauce", "hoisin", "oyster sauce", "sriracha", "teriyaki"),
        suggested_category="cooking_essentials",
        suggested_subcategory="sauces_asian",
        reason="Asian sauces should be in cooking_essentials/sauces_asian",
    ),
    CategoryRule(
        category="pantry_staples",
        contains=("bbq sauce", "hot sauce"),
        suggested_category="cooking_essentials",
        suggested_subcategory="sauces_western",
        reason="Western sauces should be in cooking_essentials/sauces_western",
    ),
    CategoryRule(
        category="pantry_staples",
        contains=("crushed tomatoes", "diced tomatoes", "tomato paste", "tomato sauce"),
        suggested_category="cooking_essentials",
        suggested_subcategory="tomato_products",
        reason="Tomato products should be in cooking_essentials/tomato_products",
    ),
    CategoryRule(
        category="pantry_staples",
        equals=("cocoa powder", "chocolate chips", "dark chocolate", "milk chocolate", "white chocolate"),
        suggested_category="pantry_staples",
        suggested_subcategory="chocolate_baking_chips",
        reason="Should remain in pantry_staples but subcategorize as chocolate_baking_chips",
    ),
    CategoryRule(
        category="pantry_staples",
        equals=(
            "black beans", "chickpeas", "kidney beans", "pinto beans",
            "white beans", "navy beans", "refried beans",
        ),
        suggested_category="proteins",
        suggested_subcategory="legumes_canned",
        reason="Canned beans should be in proteins/legumes_canned",
    ),
)


def find_miscategorized(
    records: Iterable[IngredientRecord],
    rules: Iterable[CategoryRule] = MISCATEGORIZATION_RULES,
) -> List[MiscategorizedItem]:
    """Apply every rule to every record; a record can be flagged more than once."""
    rules = tuple(rules)
    out: List[MiscategorizedItem] = []
    for rec in records:
        for rule in rules:
            if rule.matches(rec):
                out.append(MiscategorizedItem(
                    name=rec.name,
                    current_category=rec.category,
                    suggested_category=rule.suggested_category,
                    suggested_subcategory=rule.suggested_subcategory,
                    reason=rule.reason,
                ))
    return out
