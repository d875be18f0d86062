from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .duplicates import DEFAULT_SIMILARITY_THRESHOLD, is_plural_pair, plural_forms
from .models import MatchResult
from .normalize import normalize_ingredient_text, normalize_name
from .similarity import similarity

EXACT_CONFIDENCE = 1.0
PLURAL_CONFIDENCE = 0.95
PARTIAL_CONFIDENCE = 0.8


def _grocery_key(name: str) -> str:
    # "fresh basil" in a grocery list should still key as "basil", but a
    # name made only of stop words keeps its plain form.
    return normalize_ingredient_text(name) or normalize_name(name)


def _contains_phrase(haystack: str, phrase: str) -> bool:
    return f" {phrase} " in f" {haystack} "


class IngredientMatcher:
    """
    Matches free recipe ingredient lines ("2 cups chopped onion") against a
    user's grocery list grouped by category.

    Match order: exact key, singular/plural variant, whole-word containment
    (longest grocery phrase wins), fuzzy similarity above `threshold`.
    Ties go to the grocery listed first.
    """

    def __init__(
        self,
        groceries: Dict[str, Iterable[str]],
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> None:
        self.threshold = threshold
        self._entries: List[Tuple[str, str, str]] = []  # (display, category, key)
        for category, names in groceries.items():
            for name in names:
                key = _grocery_key(name)
                if key:
                    self._entries.append((name, category, key))

    def match_ingredient(self, ingredient: str) -> MatchResult:
        key = normalize_ingredient_text(ingredient)
        if not key:
            return MatchResult(ingredient=ingredient)

        for name, category, g_key in self._entries:
            if g_key == key:
                return self._result(ingredient, "exact", name, category, EXACT_CONFIDENCE)

        for name, category, g_key in self._entries:
            if is_plural_pair(g_key, key):
                return self._result(ingredient, "plural", name, category, PLURAL_CONFIDENCE)

        best: Optional[Tuple[str, str, str]] = None
        for entry in self._entries:
            g_key = entry[2]
            forms = {g_key} | plural_forms(g_key)
            if any(_contains_phrase(key, form) for form in forms):
                if best is None or len(g_key) > len(best[2]):
                    best = entry
        if best is not None:
            return self._result(ingredient, "partial", best[0], best[1], PARTIAL_CONFIDENCE)

        best_score = 0.0
        for entry in self._entries:
            score = similarity(key, entry[2])
            if score > best_score:
                best_score = score
                best = entry
        if best is not None and best_score > self.threshold:
            return self._result(ingredient, "fuzzy", best[0], best[1], round(best_score, 4))

        return MatchResult(ingredient=ingredient)

    def has_ingredient(self, ingredient: str) -> bool:
        return self.match_ingredient(ingredient).match_type != "none"

    @staticmethod
    def _result(ingredient: str, match_type: str, name: str, category: str, confidence: float) -> MatchResult:
        return MatchResult(
            ingredient=ingredient,
            match_type=match_type,
            matched_grocery_ingredient=name,
            category=category,
            confidence=confidence,
        )
