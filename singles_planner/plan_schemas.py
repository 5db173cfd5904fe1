"""
Data schemas for the weekly training plan.

This module contains Pydantic models for representing the computed week,
including zone budgets, individual sessions, day slots, aggregate totals and
the decisions taken while scheduling.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from singles_planner.schemas import (
    IntensityZone,
    PlannerInputs,
    ZonePaces,
    ZonePercentages,
)


class Activity(str, Enum):
    """Types of training sessions."""

    RUN = "Run"
    BIKE = "Bike"


class SessionSubtype(str, Enum):
    """What a session is for within the week."""

    EASY = "easy"
    SUB_THRESHOLD = "sub_threshold"
    HIGH_INTENSITY = "high_intensity"
    WARMUP = "warmup"
    COOLDOWN = "cooldown"
    LONG_RUN = "long_run"
    ENDURANCE = "endurance"  # Bike only


class Unit(str, Enum):
    KM = "km"
    HOURS = "h"


class Weekday(str, Enum):
    """Days of the week, in schedule order."""

    MONDAY = "Mon"
    TUESDAY = "Tue"
    WEDNESDAY = "Wed"
    THURSDAY = "Thu"
    FRIDAY = "Fri"
    SATURDAY = "Sat"
    SUNDAY = "Sun"


WEEK_ORDER: List[Weekday] = list(Weekday)

SUBTYPE_DISPLAY = {
    SessionSubtype.EASY: "Easy",
    SessionSubtype.SUB_THRESHOLD: "SubT",
    SessionSubtype.HIGH_INTENSITY: "High Intensity",
    SessionSubtype.WARMUP: "Warmup",
    SessionSubtype.COOLDOWN: "Cooldown",
    SessionSubtype.LONG_RUN: "Long Run",
    SessionSubtype.ENDURANCE: "Endurance",
}

# Run subtypes that draw on the easy-zone budget
EASY_BUCKET = frozenset(
    {
        SessionSubtype.EASY,
        SessionSubtype.LONG_RUN,
        SessionSubtype.WARMUP,
        SessionSubtype.COOLDOWN,
    }
)


# Enough digits to quantize any finite float (up to ~1.8e308) to one decimal
_AMOUNT_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def get_subtype_display(subtype: SessionSubtype) -> str:
    """Get display label for a session subtype (e.g. 'SubT', 'Long Run')."""
    return SUBTYPE_DISPLAY.get(subtype, subtype.value)


def format_amount(value: float, unit: Unit) -> str:
    """
    Format a session amount to one decimal place with its unit suffix.

    Rounds the exact binary value half-up, so 6.25 -> "6.3 km" while a value
    stored just below a half (e.g. 0.15) rounds down. Non-finite amounts are
    shown as-is ("inf km").
    """
    if not math.isfinite(value):
        return f"{value} {unit.value}"
    rounded = Decimal(value).quantize(Decimal("0.1"), context=_AMOUNT_CONTEXT)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded} {unit.value}"


class Session(BaseModel):
    """
    Individual training session within a day.

    Carries the exact numeric amount next to its formatted text, so totals
    never have to parse numbers back out of strings.
    """

    model_config = ConfigDict(frozen=True)

    activity: Activity = Field(..., description="Run or Bike")
    subtype: SessionSubtype = Field(..., description="Role of the session")
    amount: float = Field(..., ge=0, description="Distance (km) for runs, duration (h) for bikes")
    unit: Unit = Field(..., description="Unit of the amount")
    formatted: str = Field(..., description="Amount as 'X.X km' or 'X.X h'")

    @classmethod
    def run(cls, subtype: SessionSubtype, distance_km: float) -> "Session":
        return cls(
            activity=Activity.RUN,
            subtype=subtype,
            amount=distance_km,
            unit=Unit.KM,
            formatted=format_amount(distance_km, Unit.KM),
        )

    @classmethod
    def bike(cls, subtype: SessionSubtype, hours: float) -> "Session":
        return cls(
            activity=Activity.BIKE,
            subtype=subtype,
            amount=hours,
            unit=Unit.HOURS,
            formatted=format_amount(hours, Unit.HOURS),
        )

    @property
    def label(self) -> str:
        return f"{self.activity.value}: {get_subtype_display(self.subtype)}"


class DayPlan(BaseModel):
    """One calendar slot of the week; no sessions means a rest day."""

    model_config = ConfigDict(frozen=True)

    day: Weekday
    sessions: List[Session] = Field(default_factory=list)

    @property
    def is_rest_day(self) -> bool:
        return not self.sessions


class WeekPlan(BaseModel):
    """Exactly seven DayPlans, Monday through Sunday."""

    model_config = ConfigDict(frozen=True)

    days: List[DayPlan] = Field(..., min_length=7, max_length=7)

    @field_validator("days")
    @classmethod
    def validate_day_order(cls, v: List[DayPlan]) -> List[DayPlan]:
        """Ensure the days appear once each, in calendar order."""
        actual = [d.day for d in v]
        if actual != WEEK_ORDER:
            raise ValueError(
                f"Week must list days in order {[d.value for d in WEEK_ORDER]}, "
                f"got {[d.value for d in actual]}"
            )
        return v

    def get_day(self, day: Weekday) -> DayPlan:
        return self.days[WEEK_ORDER.index(day)]

    def sessions(self):
        """Iterate over every (day, session) pair in schedule order."""
        for day_plan in self.days:
            for session in day_plan.sessions:
                yield day_plan.day, session


class ZoneAllocation(BaseModel):
    """Time and distance allotted to one intensity zone for the week."""

    model_config = ConfigDict(frozen=True)

    time_minutes: float = Field(..., description="Weekly time in the zone")
    distance_km: float = Field(..., description="time_minutes / pace_min_per_km (0 if pace unset)")
    pace_min_per_km: float = Field(..., description="Pace used for the conversion")


class ZoneBudget(BaseModel):
    """Per-zone budgets derived from the weekly distance goal."""

    model_config = ConfigDict(frozen=True)

    weekly_distance_km: float
    total_time_minutes: float = Field(
        ..., description="Weekly distance goal run entirely at easy pace"
    )
    easy: ZoneAllocation
    sub_threshold: ZoneAllocation
    high_intensity: ZoneAllocation

    def for_zone(self, zone: IntensityZone) -> ZoneAllocation:
        return getattr(self, zone.value)


class Totals(BaseModel):
    """Aggregate distance/time per zone and activity, summed over a WeekPlan."""

    model_config = ConfigDict(frozen=True)

    run_easy_km: float = 0.0
    run_sub_threshold_km: float = 0.0
    run_high_intensity_km: float = 0.0
    run_easy_hours: float = 0.0
    run_sub_threshold_hours: float = 0.0
    run_high_intensity_hours: float = 0.0
    bike_endurance_hours: float = 0.0
    bike_sub_threshold_hours: float = 0.0
    total_time_hours: float = 0.0

    @property
    def run_km(self) -> float:
        return self.run_easy_km + self.run_sub_threshold_km + self.run_high_intensity_km

    @property
    def bike_hours(self) -> float:
        return self.bike_endurance_hours + self.bike_sub_threshold_hours


class ChartPoint(BaseModel):
    """One bar of the training-load chart."""

    model_config = ConfigDict(frozen=True)

    label: str
    hours: float


class PlanDecision(BaseModel):
    """
    Documents a specific decision made during scheduling.

    Used by the plan report to explain how the week was laid out.
    """

    decision_point: str = Field(
        ..., min_length=5, description="The decision that was made"
    )
    input_factors: List[str] = Field(
        ..., min_length=1, description="Factors that influenced this decision"
    )
    reasoning: str = Field(
        ..., min_length=20, description="Explanation of why this decision was made"
    )
    outcome: str = Field(
        ..., min_length=5, description="The resulting choice or action taken"
    )


class FitnessEstimate(BaseModel):
    """Fitness score and zone paces estimated from a race result."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., description="Placeholder fitness index (not a validated VDOT)")
    speed_kmh: float = Field(..., gt=0, description="Average race speed")
    paces: ZonePaces = Field(..., description="Estimated paces in min/km")
    paces_display: dict = Field(
        ..., description="Zone name -> 'M:SS min/km'"
    )


class PlanError(BaseModel):
    """Typed, non-fatal error reported alongside a plan."""

    code: str
    message: str


class PlanResult(BaseModel):
    """
    Complete output of one pipeline run.

    Either every field is populated or the pipeline raised; partial plans are
    never returned.
    """

    inputs: PlannerInputs
    fitness_estimate: Optional[FitnessEstimate] = None
    paces: ZonePaces
    percentages: ZonePercentages
    zone_budget: ZoneBudget
    week_plan: WeekPlan
    totals: Totals
    chart_series: List[ChartPoint] = Field(default_factory=list)
    plan_decisions: List[PlanDecision] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    errors: List[PlanError] = Field(default_factory=list)
