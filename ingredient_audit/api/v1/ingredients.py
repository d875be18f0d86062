from __future__ import annotations

import time
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ingredient_audit.config import Settings
from ingredient_audit.core.analysis import analyze
from ingredient_audit.core.duplicates import find_duplicates
from ingredient_audit.core.matcher import IngredientMatcher
from ingredient_audit.core.models import (
    AnalysisReport,
    DuplicatePair,
    IngredientAssignment,
    IngredientRecord,
    MatchResult,
    ValidationResult,
)
from ingredient_audit.core.normalize import normalize_ingredient_text, normalize_name
from ingredient_audit.core.rules import is_generic
from ingredient_audit.core.similarity import similarity
from ingredient_audit.core.validation import validate_assignments
from ingredient_audit.services.exceptions import RepoError
from ingredient_audit.services.json_repo import JSONReportRepo
from ingredient_audit.services.metrics import MetricsLogger

router = APIRouter(tags=["ingredients"])

# ---- DI helpers --------------------------------------------------------------

def get_settings() -> Settings:
    return Settings()

def get_report_repo(settings: Settings = Depends(get_settings)) -> JSONReportRepo:
    return JSONReportRepo(settings)

# ---- Schemas -----------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    records: List[IngredientRecord]
    threshold: Optional[float] = Field(None, ge=0, le=1, description="Overrides SIMILARITY_THRESHOLD")
    save: bool = Field(False, description="Persist the report to REPORT_FILE")


class DuplicatesRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    records: List[IngredientRecord]
    threshold: Optional[float] = Field(None, ge=0, le=1, description="Overrides SIMILARITY_THRESHOLD")


class NormalizeRequest(BaseModel):
    names: List[str]
    extended: bool = Field(False, description="Also strip amounts, units and prep words")


class NormalizedName(BaseModel):
    name: str
    normalized: str
    generic: bool


class SimilarityRequest(BaseModel):
    a: str
    b: str


class SimilarityResponse(BaseModel):
    similarity: float


class MatchRequest(BaseModel):
    groceries: Dict[str, List[str]]
    ingredients: List[str]
    threshold: Optional[float] = Field(None, ge=0, le=1)

# ---- Routes ------------------------------------------------------------------

@router.post("/api/ingredients/analyze", response_model=AnalysisReport)
def analyze_catalog(
    payload: AnalyzeRequest,
    settings: Settings = Depends(get_settings),
    repo: JSONReportRepo = Depends(get_report_repo),
):
    threshold = payload.threshold if payload.threshold is not None else settings.similarity_threshold
    t0 = time.perf_counter()
    report = analyze(payload.records, threshold=threshold)
    dt_ms = (time.perf_counter() - t0) * 1000.0
    MetricsLogger(settings).log_latency(
        "analyze", dt_ms, origin="api",
        extra={"records": len(payload.records), "issues": report.total_issues()},
    )
    if payload.save:
        try:
            repo.save(report)
        except RepoError as e:
            raise HTTPException(status_code=500, detail=str(e))
    return report


@router.get("/api/ingredients/report", response_model=AnalysisReport)
def latest_report(repo: JSONReportRepo = Depends(get_report_repo)):
    try:
        return repo.load()
    except RepoError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/ingredients/duplicates", response_model=List[DuplicatePair])
def duplicates(payload: DuplicatesRequest, settings: Settings = Depends(get_settings)):
    threshold = payload.threshold if payload.threshold is not None else settings.similarity_threshold
    return find_duplicates(payload.records, threshold=threshold)


@router.post("/api/ingredients/normalize", response_model=List[NormalizedName])
def normalize(payload: NormalizeRequest):
    fn = normalize_ingredient_text if payload.extended else normalize_name
    return [NormalizedName(name=n, normalized=fn(n), generic=is_generic(n)) for n in payload.names]


@router.post("/api/ingredients/similarity", response_model=SimilarityResponse)
def score(payload: SimilarityRequest):
    return SimilarityResponse(similarity=similarity(normalize_name(payload.a), normalize_name(payload.b)))


@router.post("/api/ingredients/match", response_model=List[MatchResult])
def match(payload: MatchRequest, settings: Settings = Depends(get_settings)):
    threshold = payload.threshold if payload.threshold is not None else settings.match_threshold
    matcher = IngredientMatcher(payload.groceries, threshold=threshold)
    return [matcher.match_ingredient(i) for i in payload.ingredients]


@router.post("/api/ingredients/validate", response_model=ValidationResult)
def validate(assignments: List[IngredientAssignment]):
    return validate_assignments(assignments)
