"""
Aggregation of a WeekPlan into totals and chart series.

Totals are a read-only projection over the plan's sessions, summed from the
numeric amounts each Session carries.
"""

from typing import List, Optional

from singles_planner.plan_schemas import (
    Activity,
    ChartPoint,
    EASY_BUCKET,
    SessionSubtype,
    Totals,
    WeekPlan,
    ZoneBudget,
)
from singles_planner.schemas import MethodologyConfig, ScheduleOptions


def aggregate(week_plan: WeekPlan, zone_budget: ZoneBudget) -> Totals:
    """
    Sum a week's sessions per zone and activity.

    Runs are bucketed as easy (Easy, Long Run, Warmup, Cooldown),
    sub-threshold and high-intensity; bikes as endurance and sub-threshold.
    Estimated run hours use each zone's pace from the budget.

    Args:
        week_plan: The scheduled week
        zone_budget: Budget the week was built from (paces and total run time)

    Returns:
        Totals for the week
    """
    run_easy_km = 0.0
    run_sub_threshold_km = 0.0
    run_high_intensity_km = 0.0
    bike_endurance_hours = 0.0
    bike_sub_threshold_hours = 0.0

    for _, session in week_plan.sessions():
        if session.activity == Activity.RUN:
            if session.subtype in EASY_BUCKET:
                run_easy_km += session.amount
            elif session.subtype == SessionSubtype.SUB_THRESHOLD:
                run_sub_threshold_km += session.amount
            elif session.subtype == SessionSubtype.HIGH_INTENSITY:
                run_high_intensity_km += session.amount
        elif session.activity == Activity.BIKE:
            if session.subtype == SessionSubtype.ENDURANCE:
                bike_endurance_hours += session.amount
            elif session.subtype == SessionSubtype.SUB_THRESHOLD:
                bike_sub_threshold_hours += session.amount

    return Totals(
        run_easy_km=run_easy_km,
        run_sub_threshold_km=run_sub_threshold_km,
        run_high_intensity_km=run_high_intensity_km,
        run_easy_hours=run_easy_km * zone_budget.easy.pace_min_per_km / 60,
        run_sub_threshold_hours=(
            run_sub_threshold_km * zone_budget.sub_threshold.pace_min_per_km / 60
        ),
        run_high_intensity_hours=(
            run_high_intensity_km * zone_budget.high_intensity.pace_min_per_km / 60
        ),
        bike_endurance_hours=bike_endurance_hours,
        bike_sub_threshold_hours=bike_sub_threshold_hours,
        total_time_hours=(
            zone_budget.total_time_minutes / 60
            + bike_endurance_hours
            + bike_sub_threshold_hours
        ),
    )


def chart_series(
    zone_budget: ZoneBudget,
    options: ScheduleOptions,
    methodology: Optional[MethodologyConfig] = None,
) -> List[ChartPoint]:
    """
    Build the training-load bars, in hours.

    Run bars come from the zone time budgets. "Run HI" only appears when
    Saturday is the high-intensity day and has time; bike bars only appear
    when cycling is enabled with hours.
    """
    methodology = methodology or MethodologyConfig()
    points = [
        ChartPoint(label="Run Easy", hours=zone_budget.easy.time_minutes / 60),
        ChartPoint(label="Run SubT", hours=zone_budget.sub_threshold.time_minutes / 60),
    ]
    if options.sat_high_intensity and zone_budget.high_intensity.time_minutes > 0:
        points.append(
            ChartPoint(label="Run HI", hours=zone_budget.high_intensity.time_minutes / 60)
        )
    hours = options.cycling_hours_per_week
    if options.cycling_enabled and hours > 0:
        points.append(
            ChartPoint(label="Bike Endurance", hours=hours * methodology.cycling.endurance_share)
        )
        points.append(
            ChartPoint(label="Bike SubT", hours=hours * methodology.cycling.sub_threshold_share)
        )
    return points
