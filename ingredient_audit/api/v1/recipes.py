from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ingredient_audit.core.models import ParseResult
from ingredient_audit.core.parser import parse_recipe

router = APIRouter(tags=["recipes"])


class ParseRequest(BaseModel):
    text: str = Field(..., description="Recipe JSON, fenced JSON or plain/markdown recipe text")


@router.post("/api/recipes/parse", response_model=ParseResult)
def parse(payload: ParseRequest):
    # Parse failures are data, not HTTP errors: the caller gets success=False.
    return parse_recipe(payload.text)
