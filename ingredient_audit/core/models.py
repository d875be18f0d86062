from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .normalize import normalize_name


# ---------- Catalog records ----------

class IngredientRecord(BaseModel):
    """A single catalog ingredient as read from a seed file or request body."""
    name: str = Field(..., min_length=1, description="Display name of the ingredient")
    normalized_name: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("normalized_name", "normalizedName"),
        description="Canonical comparison key; derived from name when omitted",
    )
    category: str = Field(..., min_length=1, description="Catalog category, e.g. 'fresh_produce'")
    line_number: Optional[int] = Field(
        None,
        ge=1,
        validation_alias=AliasChoices("line_number", "lineNumber"),
        description="Source line in the seed file, when loaded from one",
    )

    @field_validator("name", "category")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be blank")
        return v

    @field_validator("normalized_name")
    @classmethod
    def _blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    def key(self) -> str:
        """
        Comparison key used by the detector.
        An explicit normalized_name (from the catalog) wins; otherwise it is
        recomputed from name on every call.
        """
        if self.normalized_name is not None:
            return self.normalized_name
        return normalize_name(self.name)


# ---------- Analysis report ----------

class DuplicateReason(str, Enum):
    EXACT_NORMALIZED_MATCH = "ExactNormalizedMatch"
    SINGULAR_PLURAL_VARIANT = "SingularPluralVariant"
    SIMILAR_NAME_SAME_CATEGORY = "SimilarNameSameCategory"

    @property
    def description(self) -> str:
        return _REASON_TEXT[self]


_REASON_TEXT = {
    DuplicateReason.EXACT_NORMALIZED_MATCH: "Identical normalized names",
    DuplicateReason.SINGULAR_PLURAL_VARIANT: "Singular/plural variation",
    DuplicateReason.SIMILAR_NAME_SAME_CATEGORY: "Very similar names in same category",
}


class DuplicatePair(BaseModel):
    name1: str
    name2: str
    category: str
    reason: DuplicateReason


class GenericItem(BaseModel):
    name: str
    category: str
    reason: str


class MiscategorizedItem(BaseModel):
    name: str
    current_category: str
    suggested_category: str
    suggested_subcategory: str
    reason: str


class AnalysisReport(BaseModel):
    duplicates: List[DuplicatePair] = Field(default_factory=list)
    generics: List[GenericItem] = Field(default_factory=list)
    miscategorized: List[MiscategorizedItem] = Field(default_factory=list)

    def total_issues(self) -> int:
        return len(self.duplicates) + len(self.generics) + len(self.miscategorized)


# ---------- Recipe ingredients ----------

class TextIngredient(BaseModel):
    kind: Literal["text"] = "text"
    value: str


class StructuredIngredient(BaseModel):
    kind: Literal["structured"] = "structured"
    item: str = Field(..., min_length=1)
    amount: Optional[str] = None
    prep: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _number_amount_to_text(cls, v):
        # AI payloads often send {"item": "eggs", "amount": 2}
        if isinstance(v, bool):
            return v
        if isinstance(v, int):
            return str(v)
        if isinstance(v, float):
            return str(int(v)) if v.is_integer() else str(v)
        return v


Ingredient = Annotated[Union[TextIngredient, StructuredIngredient], Field(discriminator="kind")]


class ParsedRecipe(BaseModel):
    title: str
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    setup: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    notes: str = ""


class ParseResult(BaseModel):
    success: bool
    recipe: Optional[ParsedRecipe] = None
    error: Optional[str] = None


# ---------- Grocery matching ----------

MatchType = Literal["exact", "plural", "partial", "fuzzy", "none"]


class MatchResult(BaseModel):
    ingredient: str
    match_type: MatchType = "none"
    matched_grocery_ingredient: Optional[str] = None
    category: Optional[str] = None
    confidence: float = Field(0.0, ge=0, le=1)


# ---------- Subcategory assignment validation ----------

class IngredientAssignment(BaseModel):
    name: str = Field(..., min_length=1)
    normalized_name: str = Field(
        ...,
        validation_alias=AliasChoices("normalized_name", "normalizedName"),
    )
    category: str
    subcategory: Optional[str] = None
    action: Literal["keep", "delete", "move"] = "keep"


class ValidationStats(BaseModel):
    total_ingredients: int = 0
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_subcategory: Dict[str, int] = Field(default_factory=dict)
    without_subcategory: int = 0
    duplicate_normalized_names: int = 0


class ValidationResult(BaseModel):
    is_valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    stats: ValidationStats = Field(default_factory=ValidationStats)
