"""
Pace Estimation API Routes

Endpoint for estimating training paces from a race result.
"""

from fastapi import APIRouter, HTTPException, status

from singles_planner.api.models.requests import PaceRequest
from singles_planner.api.models.responses import ErrorResponse, PaceResponse
from singles_planner.api.routes.methodologies import _load_methodology
from singles_planner.paces import EstimationError, PaceEstimator

router = APIRouter()


@router.post(
    "/paces",
    response_model=PaceResponse,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse}},
)
async def estimate_paces(request: PaceRequest) -> PaceResponse:
    """
    Estimate fitness score and zone paces.

    Args:
        request: PaceRequest with race distance and MM:SS time

    Returns:
        PaceResponse with score, speed and paces

    Raises:
        HTTPException: 422 if the race result cannot produce finite paces
    """
    estimator = PaceEstimator(_load_methodology())
    try:
        estimate = estimator.estimate(request.distance_km, request.time_text)
    except EstimationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Pace estimation failed: {str(e)}",
        )

    return PaceResponse(
        score=estimate.score,
        speed_kmh=estimate.speed_kmh,
        paces=estimate.paces,
        paces_display=estimate.paces_display,
    )
