"""
Projection Endpoints

POST /api/v1/quiz/projection - Target score for a daily time commitment
"""

from fastapi import APIRouter

from .models import Projection, ProjectionRequest
from .projection import calculate_projection

router = APIRouter(
    prefix="/api/v1/quiz",
    tags=["quiz"],
)


@router.post("/projection", response_model=Projection)
def projection(request: ProjectionRequest):
    return calculate_projection(request.normalized_score, request.time_commitment_minutes)
