"""
The planning pipeline: estimator -> allocator -> scheduler -> totals.

``build_plan`` is a pure function of its inputs. Every call recomputes the
whole result from scratch; nothing is cached between calls.
"""

import logging
from typing import Optional

from singles_planner.paces import EstimationError, PaceEstimator
from singles_planner.plan_schemas import PlanError, PlanResult
from singles_planner.scheduler import WeeklyScheduler
from singles_planner.schemas import MethodologyConfig, PlannerInputs
from singles_planner.totals import aggregate, chart_series
from singles_planner.validator import InputValidator
from singles_planner.zones import ZoneAllocator

logger = logging.getLogger(__name__)


def build_plan(
    inputs: PlannerInputs, methodology: Optional[MethodologyConfig] = None
) -> PlanResult:
    """
    Compute a complete weekly plan.

    Workflow:
    1. Validate inputs (findings become warnings, never failures)
    2. Estimate paces from the race result, if one is given
    3. Resolve zone percentages (explicit or methodology preset)
    4. Allocate zone budgets
    5. Schedule the week
    6. Aggregate totals and build the chart series

    A failed estimation is reported as a PlanError and the supplied paces are
    used instead, so a well-formed plan is always returned.

    Args:
        inputs: Immutable input snapshot
        methodology: Methodology constants (built-in defaults when None)

    Returns:
        PlanResult
    """
    methodology = methodology or MethodologyConfig()

    validator = InputValidator(methodology)
    validation = validator.validate(inputs)
    errors = []

    fitness_estimate = None
    paces = validator.resolve_paces(inputs)
    if inputs.race is not None:
        try:
            fitness_estimate = PaceEstimator(methodology).estimate_race(inputs.race)
            paces = fitness_estimate.paces
        except EstimationError as e:
            logger.warning("Pace estimation failed, keeping supplied paces: %s", e)
            errors.append(PlanError(code="estimation_failed", message=str(e)))

    percentages = validator.resolve_percentages(inputs)
    zone_budget = ZoneAllocator().allocate(inputs.weekly_distance_km, percentages, paces)

    scheduler = WeeklyScheduler(methodology)
    week_plan = scheduler.schedule(zone_budget, inputs.options)

    totals = aggregate(week_plan, zone_budget)

    logger.info(
        "Planned %.1f km goal: %.1f km run, %.1f h bike, %.1f h total",
        inputs.weekly_distance_km,
        totals.run_km,
        totals.bike_hours,
        totals.total_time_hours,
    )

    return PlanResult(
        inputs=inputs,
        fitness_estimate=fitness_estimate,
        paces=paces,
        percentages=percentages,
        zone_budget=zone_budget,
        week_plan=week_plan,
        totals=totals,
        chart_series=chart_series(zone_budget, inputs.options, methodology),
        plan_decisions=scheduler.plan_decisions,
        warnings=validation.warnings,
        errors=errors,
    )
