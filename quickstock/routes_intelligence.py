# quickstock/routes_intelligence.py
import logging
from functools import lru_cache
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import get_settings
from .intelligence.context import StaticContextSource
from .intelligence.errors import ValidationError
from .intelligence.responder import IntelligenceResponder, QueryAnswer, Recommendations, WhatIfAnswer

log = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_responder() -> IntelligenceResponder:
    # Provider choice is fixed for the life of the process.
    return IntelligenceResponder(get_settings(), StaticContextSource())


class QueryReq(BaseModel):
    query: Any = None


class WhatIfReq(BaseModel):
    scenario: Any = None


class RecommendationsReq(BaseModel):
    forecast: Any = None


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


router = APIRouter(prefix="/api/v1/Intelligence", tags=["intelligence"])


@router.post("/query", response_model=QueryAnswer)
def query(req: QueryReq, responder: IntelligenceResponder = Depends(get_responder)):
    try:
        return responder.answer_query(req.query)
    except ValidationError as e:
        log.warning("Rejected query: %s", e)
        return _error(400, str(e))
    except Exception:
        log.exception("Query error")
        return _error(500, "Failed to process AI Intelligence query")


@router.post("/what-if", response_model=WhatIfAnswer)
def what_if(req: WhatIfReq, responder: IntelligenceResponder = Depends(get_responder)):
    try:
        return responder.analyze_what_if(req.scenario)
    except ValidationError as e:
        log.warning("Rejected what-if: %s", e)
        return _error(400, str(e))
    except Exception:
        log.exception("What-if error")
        return _error(500, "Failed to process what-if scenario")


@router.post("/recommendations", response_model=Recommendations)
def recommendations(req: RecommendationsReq, responder: IntelligenceResponder = Depends(get_responder)):
    try:
        return responder.recommend(req.forecast)
    except ValidationError as e:
        log.warning("Rejected recommendations: %s", e)
        return _error(400, str(e))
    except Exception:
        log.exception("Recommendations error")
        return _error(500, "Failed to generate recommendations")
