from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from .models import DuplicatePair, DuplicateReason, IngredientRecord
from .similarity import similarity

DEFAULT_SIMILARITY_THRESHOLD = 0.85


def plural_forms(singular: str) -> Set[str]:
    """English plural spellings recognised for a singular key."""
    if not singular:
        return set()
    forms = {singular + "s", singular + "es"}
    if singular.endswith("y") and len(singular) > 1:
        forms.add(singular[:-1] + "ies")
    return forms


def is_plural_pair(a: str, b: str) -> bool:
    return a in plural_forms(b) or b in plural_forms(a)


def find_duplicates(
    records: Iterable[IngredientRecord],
    seen: Optional[Dict[str, IngredientRecord]] = None,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> List[DuplicatePair]:
    """
    Single-pass duplicate scan over catalog records.

    Each record is compared only against records seen *before* it, so the
    report depends on input order. The first record for a key stays the
    canonical one (name1 in every pair it takes part in).

    `seen` maps normalized key -> first record for that key. Pass a mapping
    to continue a scan across batches; it is updated in place. When omitted
    a fresh one is used per call.

    Rules per incoming record:
    - same key as a seen record => ExactNormalizedMatch
    - key is a plural spelling of a seen key (or vice versa) => SingularPluralVariant
    - same category and similarity(key, seen key) > threshold => SimilarNameSameCategory
    The last two are independent; one pair can be reported for both.
    """
    if seen is None:
        seen = {}
    duplicates: List[DuplicatePair] = []

    for rec in records:
        key = rec.key()
        if key in seen:
            existing = seen[key]
            duplicates.append(DuplicatePair(
                name1=existing.name,
                name2=rec.name,
                category=rec.category,
                reason=DuplicateReason.EXACT_NORMALIZED_MATCH,
            ))
        else:
            seen[key] = rec

        for existing_key, existing in seen.items():
            if existing_key == key:
                continue

            if is_plural_pair(existing_key, key):
                duplicates.append(DuplicatePair(
                    name1=existing.name,
                    name2=rec.name,
                    category=rec.category,
                    reason=DuplicateReason.SINGULAR_PLURAL_VARIANT,
                ))

            if existing.category == rec.category and similarity(existing_key, key) > threshold:
                duplicates.append(DuplicatePair(
                    name1=existing.name,
                    name2=rec.name,
                    category=rec.category,
                    reason=DuplicateReason.SIMILAR_NAME_SAME_CATEGORY,
                ))

    return duplicates
