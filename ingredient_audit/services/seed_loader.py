from __future__ import annotations

import logging
import os
import re
from typing import Iterable, Iterator, List

from pydantic import ValidationError

from ingredient_audit.core.models import IngredientRecord
from ingredient_audit.services.exceptions import LoaderError

logger = logging.getLogger(__name__)

# Seed rows look like: ('Name', 'normalized_name', 'category', ...
_SEED_ROW = re.compile(r"^\('([^']+)',\s*'([^']+)',\s*'([^']+)',")


def iter_seed_records(lines: Iterable[str]) -> Iterator[IngredientRecord]:
    """Yield a record for every seed row; other SQL lines are skipped."""
    for lineno, line in enumerate(lines, start=1):
        m = _SEED_ROW.match(line)
        if not m:
            continue
        try:
            yield IngredientRecord(
                name=m.group(1),
                normalized_name=m.group(2),
                category=m.group(3),
                line_number=lineno,
            )
        except ValidationError as e:
            raise LoaderError(f"Malformed seed row on line {lineno}: {e}") from e


def load_seed_file(path: str) -> List[IngredientRecord]:
    if not os.path.exists(path):
        raise LoaderError(f"Seed file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            records = list(iter_seed_records(f))
    except OSError as e:
        raise LoaderError(f"Failed to read seed file {path}: {e}") from e
    logger.info("Parsed %d ingredients from %s", len(records), path)
    return records
