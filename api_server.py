"""
Quiz Funnel API Server

Scoring, results, insights, projection, pricing tiers and funnel steps for
the stress quiz.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizfunnel import __version__, config
from quizfunnel.funnel.admin import router as funnel_router
from quizfunnel.health.router import router as health_router
from quizfunnel.pricing.admin import router as pricing_router
from quizfunnel.projection.admin import router as projection_router
from quizfunnel.results.admin import router as results_router
from quizfunnel.scoring.admin import router as scoring_router
from quizfunnel.sessions.admin import router as sessions_router

logger = logging.getLogger(__name__)

# ============================================
# App Configuration
# ============================================
app = FastAPI(
    title="Quiz Funnel API",
    description="Stress quiz scoring and upsell funnel",
    version=__version__,
)

# ============================================
# CORS Configuration
# ============================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# ============================================
# Routers
# ============================================
app.include_router(health_router)
app.include_router(sessions_router)
app.include_router(scoring_router)
app.include_router(results_router)
app.include_router(projection_router)
app.include_router(funnel_router)
app.include_router(pricing_router)


@app.get("/")
def root():
    return {
        "service": "quiz-funnel-api",
        "version": __version__,
        "docs": "/docs",
    }
