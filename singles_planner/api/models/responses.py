"""
API Response Models

Pydantic models for API responses.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from singles_planner.plan_schemas import PlanResult
from singles_planner.schemas import ValidationResult, ZonePaces


class PaceResponse(BaseModel):
    """Response for POST /api/paces."""

    score: int = Field(..., description="Placeholder fitness score")
    speed_kmh: float = Field(..., description="Average race speed")
    paces: ZonePaces = Field(..., description="Zone paces in min/km")
    paces_display: Dict[str, str] = Field(
        ..., description="Zone paces formatted as 'M:SS min/km'"
    )


class ValidationResponse(BaseModel):
    """Response for POST /api/validate."""

    approved: bool = Field(..., description="False when a blocking finding exists")
    warnings: List[str] = Field(default_factory=list, description="Findings as text")
    validation_result: ValidationResult = Field(
        ..., description="Full validation result"
    )


class PlanGenerationResponse(BaseModel):
    """Response for POST /api/plans."""

    plan: PlanResult = Field(..., description="Complete pipeline result")
    run_km: float = Field(..., description="Total scheduled run distance")
    bike_hours: float = Field(..., description="Total scheduled bike hours")
    report_markdown: Optional[str] = Field(
        None, description="Human-readable Markdown report"
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional details")
