from __future__ import annotations

from typing import Any, Union

from pydantic import TypeAdapter

from .models import Ingredient, StructuredIngredient, TextIngredient

_INGREDIENT_ADAPTER: TypeAdapter = TypeAdapter(Ingredient)


def coerce_ingredient(raw: Any) -> Union[TextIngredient, StructuredIngredient]:
    """
    Turn a loose ingredient entry (plain string or dict, as produced by AI
    recipe payloads) into the tagged Ingredient union.

    Dicts without a ``kind`` are structured when they carry ``item`` and text
    when they carry ``value``. Anything else raises ``ValueError``.
    """
    if isinstance(raw, (TextIngredient, StructuredIngredient)):
        return raw
    if isinstance(raw, str):
        return TextIngredient(value=raw)
    if isinstance(raw, dict):
        data = dict(raw)
        if "kind" not in data:
            if "item" in data:
                data["kind"] = "structured"
            elif "value" in data:
                data["kind"] = "text"
        return _INGREDIENT_ADAPTER.validate_python(data)
    raise ValueError(f"Unsupported ingredient entry: {raw!r}")


def ingredient_to_text(ingredient: Union[TextIngredient, StructuredIngredient]) -> str:
    """
    Canonical text form: amount, item and prep joined by single spaces,
    e.g. ("2 cups", "onion", "chopped") -> "2 cups onion chopped".
    """
    if isinstance(ingredient, TextIngredient):
        return ingredient.value.strip()
    parts = (ingredient.amount, ingredient.item, ingredient.prep)
    return " ".join(p.strip() for p in parts if p and p.strip())
