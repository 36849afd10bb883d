from __future__ import annotations

import logging
import os
from functools import lru_cache

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from .catalog.store import FrameCatalog
from .llm.groq_client import GroqOracle
from .recommendations.engine import RecommendationEngine
from .recommendations.models import (
    RecommendationRequest,
    RecommendationResult,
    ResultStatus,
)

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

STATUS_CODES: dict[ResultStatus, int] = {
    ResultStatus.ok: 200,
    ResultStatus.invalid_prompt: 400,
    ResultStatus.no_match: 404,
    ResultStatus.empty_catalog: 404,
    ResultStatus.not_configured: 500,
}

app = FastAPI(title="Food Recommendation API", version="1.0.0")


@lru_cache(maxsize=1)
def get_engine() -> RecommendationEngine:
    return RecommendationEngine(catalog=FrameCatalog(), oracle=GroqOracle())


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/ai/status")
def ai_status(engine: RecommendationEngine = Depends(get_engine)) -> dict:
    return {
        "message": "AI recommendations route is working!",
        "oracle_configured": engine.oracle.configured,
    }


@app.get("/metadata")
def metadata(engine: RecommendationEngine = Depends(get_engine)) -> dict:
    return {
        "cities": list(engine.vocabulary.cities),
        "cuisines": list(engine.vocabulary.cuisines),
    }


@app.post("/ai/recommendations", response_model=RecommendationResult)
def recommendations(
    body: RecommendationRequest,
    engine: RecommendationEngine = Depends(get_engine),
) -> JSONResponse:
    try:
        result = engine.recommend(body.prompt)
    except Exception:
        logger.exception("Recommendation pipeline failed")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "Error generating recommendations. Please try again later.",
                "recommendations": [],
            },
        )

    return JSONResponse(
        status_code=STATUS_CODES[result.status],
        content=result.model_dump(mode="json"),
    )
