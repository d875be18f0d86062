from __future__ import annotations

import re
import unicodedata

# Words dropped by the extended normalizer. Keep entries lowercase and
# punctuation-free: they are compared against already-normalized tokens.
PREP_WORDS = frozenset({
    "chopped", "minced", "diced", "sliced", "grated", "shredded", "sifted",
    "crushed", "cubed", "peeled", "julienned", "beaten", "halved", "quartered",
    "trimmed", "rinsed", "drained", "packed", "fresh", "freshly", "dried",
    "softened", "melted", "room", "temperature", "finely", "roughly",
    "coarsely", "thinly", "to", "taste", "optional", "of",
})

UNIT_WORDS = frozenset({
    "cup", "cups", "c", "tbsp", "tbsps", "tbs", "tablespoon", "tablespoons",
    "tsp", "tsps", "teaspoon", "teaspoons", "oz", "ounce", "ounces",
    "lb", "lbs", "pound", "pounds", "g", "gram", "grams", "kg", "kilogram",
    "kilograms", "ml", "milliliter", "milliliters", "millilitre",
    "millilitres", "l", "liter", "liters", "litre", "litres", "pinch",
    "pinches", "dash", "dashes", "quart", "quarts", "pint", "pints",
    "gallon", "gallons", "can", "cans", "package", "packages", "pkg",
})

SIZE_WORDS = frozenset({"large", "medium", "small", "extra", "jumbo"})

QUANTITY_WORDS = frozenset({
    "clove", "cloves", "slice", "slices", "piece", "pieces", "sprig",
    "sprigs", "stalk", "stalks", "bunch", "bunches", "head", "heads",
    "handful", "handfuls",
})

_STOP_WORDS = PREP_WORDS | UNIT_WORDS | SIZE_WORDS | QUANTITY_WORDS

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_NUMBER = re.compile(r"^\d+$")
_NUMBER_THEN_LETTER = re.compile(r"(\d)([^\W\d_])")


def _strip_accents(s: str) -> str:
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_name(raw: str) -> str:
    """
    Canonical comparison key for an ingredient name.

    Lowercases, folds accents, turns punctuation into spaces and collapses
    whitespace. Empty or whitespace-only input yields "".
    """
    if not raw:
        return ""
    s = _strip_accents(raw.lower()).lower()
    s = _NON_WORD.sub(" ", s)
    return _WHITESPACE.sub(" ", s).strip()


def normalize_ingredient_text(raw: str) -> str:
    """
    Extended key for full recipe ingredient lines such as
    "2 cups chopped onion" or "1/2 cup butter, softened".

    On top of normalize_name it drops numbers (decimals and fractions are
    already split by punctuation removal), units, prep words, size
    descriptors and quantity words.
    """
    s = normalize_name(raw)
    if not s:
        return ""
    # "8oz" -> "8 oz" so the unit is recognised
    s = _NUMBER_THEN_LETTER.sub(r"\1 \2", s)
    tokens = [t for t in s.split(" ") if t and not _NUMBER.match(t) and t not in _STOP_WORDS]
    return " ".join(tokens)
