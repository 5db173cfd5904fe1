"""
Training Plans API Routes

Endpoint for weekly plan generation.
"""

import logging

from fastapi import APIRouter

from singles_planner.api.models.requests import PlanGenerationRequest
from singles_planner.api.models.responses import PlanGenerationResponse
from singles_planner.api.routes.methodologies import _load_methodology
from singles_planner.pipeline import build_plan
from singles_planner.trace import PlanReportBuilder

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/plans", response_model=PlanGenerationResponse)
async def generate_plan(request: PlanGenerationRequest) -> PlanGenerationResponse:
    """
    Generate the weekly plan for the given inputs.

    Complete workflow:
    1. Validate inputs (findings are returned as warnings)
    2. Estimate paces if a race result is given
    3. Allocate zone budgets and schedule the week
    4. Aggregate totals and the load chart series

    A failed pace estimation does not fail the request; it is reported in
    ``plan.errors`` and the supplied paces are used.

    Args:
        request: PlanGenerationRequest with planner inputs

    Returns:
        PlanGenerationResponse with the plan result and optional Markdown report
    """
    result = build_plan(request.inputs, _load_methodology())
    if result.errors:
        logger.info("Plan generated with %d error(s)", len(result.errors))

    report = PlanReportBuilder(result).export_to_markdown() if request.include_report else None

    return PlanGenerationResponse(
        plan=result,
        run_km=result.totals.run_km,
        bike_hours=result.totals.bike_hours,
        report_markdown=report,
    )
