from __future__ import annotations

from typing import Iterable

from .duplicates import DEFAULT_SIMILARITY_THRESHOLD, find_duplicates
from .models import AnalysisReport, IngredientRecord
from .rules import find_generics, find_miscategorized


def analyze(
    records: Iterable[IngredientRecord],
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
) -> AnalysisReport:
    """Run every catalog check over one batch of records."""
    records = list(records)
    return AnalysisReport(
        duplicates=find_duplicates(records, threshold=threshold),
        generics=find_generics(records),
        miscategorized=find_miscategorized(records),
    )
