"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field

from singles_planner.schemas import PlannerInputs


class PaceRequest(BaseModel):
    """Request model for pace estimation."""

    distance_km: float = Field(..., description="Race distance in kilometres")
    time_text: str = Field(..., description="Race time as MM:SS (e.g., '40:00')")


class ValidationRequest(BaseModel):
    """Request model for input validation."""

    inputs: PlannerInputs = Field(..., description="Planner inputs to check")


class PlanGenerationRequest(BaseModel):
    """Request model for weekly plan generation."""

    inputs: PlannerInputs = Field(..., description="Planner inputs")
    include_report: bool = Field(
        True, description="Attach the Markdown report to the response"
    )
