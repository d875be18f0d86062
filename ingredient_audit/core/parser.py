from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from .ingredients import coerce_ingredient, ingredient_to_text
from .models import ParsedRecipe, ParseResult

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)
_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)]|step\s+\d+\s*[:.)-]?)(?=\s|$)\s*", re.IGNORECASE)
_SECTION = re.compile(
    r"^\s*#*\s*\**\s*(ingredients|instructions|directions|method|steps|notes)\s*\**\s*:?\s*\**\s*$",
    re.IGNORECASE,
)
_SECTION_ALIASES = {
    "ingredients": "ingredients",
    "instructions": "instructions",
    "directions": "instructions",
    "method": "instructions",
    "steps": "instructions",
    "notes": "notes",
}

DEFAULT_TITLE = "Untitled Recipe"


def _strip_marker(line: str) -> str:
    return _LIST_MARKER.sub("", line, count=1).strip()


def _as_lines(value: Any) -> List[str]:
    """Instruction-like field: a newline separated string or a list of steps."""
    if value is None:
        return []
    if isinstance(value, str):
        raw = value.splitlines()
    elif isinstance(value, list):
        raw = [str(v) for v in value if v is not None]
    else:
        raw = [str(value)]
    return [s for s in (_strip_marker(line) for line in raw) if s]


def _as_items(value: Any) -> List[Any]:
    """A list-typed field; a single entry is wrapped, null is empty."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_list(value: Any) -> List[str]:
    return [str(v).strip() for v in _as_items(value) if v is not None and str(v).strip()]


def _extract_json(text: str) -> Optional[Dict[str, Any]]:
    candidates: List[str] = []
    fenced = _FENCE.search(text)
    if fenced:
        candidates.append(fenced.group(1))
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def _recipe_from_json(data: Dict[str, Any]) -> ParsedRecipe:
    ingredients = []
    for raw in _as_items(data.get("ingredients")):
        text = ingredient_to_text(coerce_ingredient(raw))
        if text:
            ingredients.append(text)
    notes = data.get("notes") or ""
    if isinstance(notes, list):
        notes = "\n".join(str(n) for n in notes)
    return ParsedRecipe(
        title=str(data.get("title") or DEFAULT_TITLE).strip(),
        description=str(data.get("description") or "").strip(),
        ingredients=ingredients,
        instructions=_as_lines(data.get("instructions")),
        setup=_as_list(data.get("setup")),
        categories=_as_list(data.get("categories")),
        notes=str(notes).strip(),
    )


def _recipe_from_text(text: str) -> Optional[ParsedRecipe]:
    title = ""
    description: List[str] = []
    sections: Dict[str, List[str]] = {"ingredients": [], "instructions": [], "notes": []}
    current: Optional[str] = None

    for line in text.splitlines():
        if not line.strip():
            continue
        header = _SECTION.match(line)
        if header:
            current = _SECTION_ALIASES[header.group(1).lower()]
            continue
        if not title:
            title = re.sub(r"^(?:#+\s*|title\s*:\s*)", "", line.strip(), flags=re.IGNORECASE).strip("* ")
            continue
        if current is None:
            description.append(line.strip())
        else:
            item = _strip_marker(line)
            if item:
                sections[current].append(item)

    if not sections["ingredients"] and not sections["instructions"]:
        return None
    return ParsedRecipe(
        title=title or DEFAULT_TITLE,
        description=" ".join(description),
        ingredients=sections["ingredients"],
        instructions=sections["instructions"],
        notes="\n".join(sections["notes"]),
    )


def parse_recipe(text: str) -> ParseResult:
    """
    Extract a recipe from AI output or pasted text.

    JSON (bare, fenced or embedded in prose) is tried first; otherwise the
    text is read as a plain/markdown recipe with Ingredients and
    Instructions sections. Never raises: failures come back with
    success=False and an error message.
    """
    if not text or not text.strip():
        return ParseResult(success=False, error="Empty recipe text")

    data = _extract_json(text)
    if data is not None:
        try:
            return ParseResult(success=True, recipe=_recipe_from_json(data))
        except (ValueError, TypeError) as e:
            logger.debug("Structured recipe rejected: %s", e)
            return ParseResult(success=False, error=f"Invalid recipe JSON: {e}")

    recipe = _recipe_from_text(text)
    if recipe is None:
        return ParseResult(success=False, error="No ingredients or instructions found")
    return ParseResult(success=True, recipe=recipe)
