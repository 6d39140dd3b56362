"""
Health Check Endpoint
=====================
Module versions and database reachability.
"""

import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from quizfunnel import __version__
from quizfunnel.pricing import __version__ as pricing_version
from quizfunnel.results import __version__ as results_version
from quizfunnel.scoring import __version__ as scoring_version
from quizfunnel.store import QuizDataError, QuizStore, get_store

router = APIRouter(prefix="/api/v1/health", tags=["Health"])


@router.get("")
def health(store: QuizStore = Depends(get_store)):
    """
    Reports "degraded" when the database is unreachable; the pure
    endpoints (projection, pricing, screens) keep working in that state.
    """
    try:
        database = {"status": "healthy" if store.ping() else "error"}
    except QuizDataError as e:
        database = {"status": "error", "error": str(e)}

    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "api_version": __version__,
        "environment": os.environ.get("APP_ENVIRONMENT", "unknown"),
        "components": {
            "database": database,
            "scoring": scoring_version,
            "results": results_version,
            "pricing": pricing_version,
        },
    }
