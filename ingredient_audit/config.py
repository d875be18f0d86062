from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List
from dotenv import load_dotenv
load_dotenv()  # populates os.environ from .env


class Settings(BaseSettings):
    # Duplicate detection
    similarity_threshold: float = Field(0.85, ge=0, le=1)
    match_threshold: float = Field(0.85, ge=0, le=1)

    # Storage
    data_dir: str = "data"
    seed_file: str = "supabase/seed_complete_global_ingredients.sql"
    report_file: str = "data/ingredient-analysis-report.json"

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://127.0.0.1:8001"])

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
