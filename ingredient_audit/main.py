from __future__ import annotations

import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ingredient_audit.api.v1.ingredients import router as ingredients_router
from ingredient_audit.api.v1.recipes import router as recipes_router
from ingredient_audit.config import Settings
from ingredient_audit.logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Ensure data dir exists so reports and metrics can be written
    settings = Settings()
    os.makedirs(settings.data_dir, exist_ok=True)
    yield

def create_app() -> FastAPI:
    settings = Settings()
    setup_logging(settings.log_level)
    app = FastAPI(title="Ingredient Audit API", version="1.0", lifespan=lifespan)

    # CORS (narrow it down in .env via CORS_ALLOW_ORIGINS if you want)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(ingredients_router)
    app.include_router(recipes_router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/readyz")
    def readyz():
        return {"status": "ready"}

    return app

app = create_app()
