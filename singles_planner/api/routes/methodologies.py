"""
Methodology API Routes

Endpoint for retrieving the active methodology card.
"""

from fastapi import APIRouter, HTTPException, status

from singles_planner.config import get_methodology
from singles_planner.schemas import MethodologyConfig

router = APIRouter()


def _load_methodology() -> MethodologyConfig:
    """
    Load the methodology selected by the settings.

    Returns:
        MethodologyConfig instance

    Raises:
        HTTPException: If the configured methodology file is missing or invalid
    """
    try:
        return get_methodology()
    except (FileNotFoundError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load methodology: {str(e)}",
        )


@router.get("/methodology", response_model=MethodologyConfig)
async def get_methodology_card() -> MethodologyConfig:
    """
    Get the active methodology card.

    Returns:
        MethodologyConfig with pace model, presets, schedule and cycling constants
    """
    return _load_methodology()
