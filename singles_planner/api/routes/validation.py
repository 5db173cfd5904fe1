"""
Validation API Routes

Endpoint for checking planner inputs before plan generation.
"""

from fastapi import APIRouter

from singles_planner.api.models.requests import ValidationRequest
from singles_planner.api.models.responses import ValidationResponse
from singles_planner.api.routes.methodologies import _load_methodology
from singles_planner.validator import InputValidator

router = APIRouter()


@router.post("/validate", response_model=ValidationResponse)
async def validate_inputs(request: ValidationRequest) -> ValidationResponse:
    """
    Check planner inputs at the boundary.

    Findings are informational; a plan can still be generated for any input
    that passes schema validation.

    Args:
        request: ValidationRequest with planner inputs

    Returns:
        ValidationResponse with approval status and findings
    """
    validator = InputValidator(_load_methodology())
    result = validator.validate(request.inputs)

    return ValidationResponse(
        approved=result.approved,
        warnings=result.warnings,
        validation_result=result,
    )
