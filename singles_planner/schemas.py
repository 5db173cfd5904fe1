"""
Pydantic models for planner inputs and methodology configuration.

This module defines the core data structures for:
- Methodology Card: Norwegian Singles constants (pace model, presets, day rules)
- Planner Inputs: Weekly goal, race result, paces, zone percentages, options
- Validation Results: Boundary checks on inputs before they enter the pipeline
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Upper bounds keep every derived amount finite
MAX_PACE_MIN_PER_KM = 60.0
MAX_WEEKLY_DISTANCE_KM = 10_000.0
MAX_CYCLING_HOURS_PER_WEEK = 168.0


# ============================================================================
# Enumerations
# ============================================================================

class IntensityZone(str, Enum):
    """Training intensity zones used by the Norwegian Singles method."""
    EASY = "easy"
    SUB_THRESHOLD = "sub_threshold"
    HIGH_INTENSITY = "high_intensity"


class Severity(str, Enum):
    """How serious an input finding is."""
    NOTICE = "notice"
    WARNING = "warning"
    BLOCKING = "blocking"


# ============================================================================
# Planner Inputs
# ============================================================================


class RaceResult(BaseModel):
    """Recent race result for fitness estimation."""

    model_config = ConfigDict(frozen=True)

    distance_km: float = Field(..., description="Race distance in kilometres")
    time_text: str = Field(..., description="Finish time as MM:SS (minutes may exceed 59)")


class ZonePaces(BaseModel):
    """Training pace per zone in minutes per kilometre."""

    model_config = ConfigDict(frozen=True)

    easy: float = Field(
        5.0, le=MAX_PACE_MIN_PER_KM, allow_inf_nan=False, description="Easy pace (min/km)"
    )
    sub_threshold: float = Field(
        4.0,
        le=MAX_PACE_MIN_PER_KM,
        allow_inf_nan=False,
        description="Sub-threshold pace (min/km)",
    )
    high_intensity: float = Field(
        3.5,
        le=MAX_PACE_MIN_PER_KM,
        allow_inf_nan=False,
        description="High-intensity pace (min/km)",
    )

    def for_zone(self, zone: IntensityZone) -> float:
        return getattr(self, zone.value)


class ZonePercentages(BaseModel):
    """
    Share of total weekly time per zone, in percent.

    The three values are independent fractions of the derived weekly time and
    are not required to sum to 100.
    """

    model_config = ConfigDict(frozen=True)

    easy: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Percent of weekly time at easy pace"
    )
    sub_threshold: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Percent of weekly time at sub-threshold"
    )
    high_intensity: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Percent of weekly time at high intensity"
    )

    @property
    def total(self) -> float:
        return self.easy + self.sub_threshold + self.high_intensity

    def for_zone(self, zone: IntensityZone) -> float:
        return getattr(self, zone.value)


class ScheduleOptions(BaseModel):
    """Toggles that shape the weekly schedule."""

    model_config = ConfigDict(frozen=True)

    sat_high_intensity: bool = Field(
        False, description="Saturday is a high-intensity day instead of sub-threshold"
    )
    remove_mon: bool = Field(False, description="Make Monday a rest day")
    remove_fri: bool = Field(False, description="Make Friday a rest day")
    cycling_enabled: bool = Field(False, description="Add the cycling overlay")
    cycling_hours_per_week: float = Field(
        0.0,
        ge=0,
        le=MAX_CYCLING_HOURS_PER_WEEK,
        allow_inf_nan=False,
        description="Weekly cycling hours",
    )


class PlannerInputs(BaseModel):
    """
    Immutable snapshot of everything the planning pipeline needs.

    ``paces`` may be omitted to use the methodology default paces, and
    ``percentages`` may be omitted to use the methodology preset that matches
    ``options.sat_high_intensity``.
    """

    model_config = ConfigDict(frozen=True)

    weekly_distance_km: float = Field(
        ...,
        le=MAX_WEEKLY_DISTANCE_KM,
        allow_inf_nan=False,
        description="Weekly running goal (km)",
    )
    race: Optional[RaceResult] = Field(
        None, description="Race result used to estimate paces"
    )
    paces: Optional[ZonePaces] = Field(
        None,
        description="Paces used when no race result is given (or estimation fails); "
        "methodology defaults when omitted",
    )
    percentages: Optional[ZonePercentages] = Field(
        None, description="Zone time distribution; preset when omitted"
    )
    options: ScheduleOptions = Field(default_factory=ScheduleOptions)


# ============================================================================
# Methodology Card Components
# ============================================================================


class PaceModelConfig(BaseModel):
    """
    Constants of the simplified race-to-pace model.

    Each zone pace is ``factor / (speed_kmh / speed_divisor)`` and the fitness
    score is ``score_base + score_speed_multiplier * speed_kmh``.
    """

    easy_factor: float = Field(7.5, gt=0, description="Easy pace constant")
    sub_threshold_factor: float = Field(6.0, gt=0, description="Sub-threshold pace constant")
    high_intensity_factor: float = Field(5.0, gt=0, description="High-intensity pace constant")
    speed_divisor: float = Field(10.0, gt=0, description="Speed normaliser (km/h)")
    score_base: float = Field(10.0, description="Fitness score intercept")
    score_speed_multiplier: float = Field(2.0, description="Fitness score slope per km/h")


class IntensityPresets(BaseModel):
    """Default zone percentages for each Saturday mode."""

    standard: ZonePercentages = Field(
        default_factory=lambda: ZonePercentages(easy=75, sub_threshold=25, high_intensity=0),
        description="Used when Saturday is a sub-threshold day",
    )
    saturday_high_intensity: ZonePercentages = Field(
        default_factory=lambda: ZonePercentages(easy=75, sub_threshold=18, high_intensity=7),
        description="Used when Saturday is a high-intensity day",
    )


class ScheduleConfig(BaseModel):
    """Fixed distances and weights used by the weekly scheduler."""

    warmup_km: float = Field(2.0, ge=0, description="Warmup before every intensity session")
    cooldown_km: float = Field(2.0, ge=0, description="Cooldown after every intensity session")
    long_run_multiplier: float = Field(
        1.5, ge=1.0, description="Sunday long run as a multiple of the easy block"
    )


class CyclingSplitConfig(BaseModel):
    """Share of weekly cycling hours given to each bike session type."""

    endurance_share: float = Field(0.75, ge=0.0, le=1.0)
    sub_threshold_share: float = Field(0.25, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_split_sum(self):
        """Ensure the cycling shares cover exactly the weekly hours."""
        total = self.endurance_share + self.sub_threshold_share
        if not (0.99 <= total <= 1.01):
            raise ValueError(
                f"Cycling split must sum to 1.0 (100%), got {total:.3f}. "
                f"Endurance={self.endurance_share}, SubT={self.sub_threshold_share}"
            )
        return self


class MethodologyConfig(BaseModel):
    """
    Complete description of the Norwegian Singles methodology.

    Every field has a default, so ``MethodologyConfig()`` is the canonical
    methodology; a JSON card can override any of the constants.
    """

    id: str = Field(
        "norwegian_singles_v1",
        pattern=r"^[a-z0-9_]+$",
        description="Unique identifier using snake_case",
    )
    name: str = Field("Norwegian Singles", description="Human-readable name")
    version: str = Field(
        "1.0.0",
        pattern=r"^\d+\.\d+\.\d+$",
        description="Semantic versioning (major.minor.patch)",
    )
    description: str = Field(
        "Sub-threshold twice or three times a week, everything else easy.",
        description="One-line description of the methodology",
    )
    reference_url: Optional[str] = Field(
        "https://norwegiansingles.run/", description="Where to learn more"
    )
    pace_model: PaceModelConfig = Field(default_factory=PaceModelConfig)
    default_paces: ZonePaces = Field(default_factory=ZonePaces)
    intensity_presets: IntensityPresets = Field(default_factory=IntensityPresets)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    cycling: CyclingSplitConfig = Field(default_factory=CyclingSplitConfig)


# ============================================================================
# Validation Results
# ============================================================================


class InputCheck(BaseModel):
    """Record of a single boundary check on the planner inputs."""

    field: str = Field(..., description="Input field that was checked")
    severity: Severity = Field(..., description="How serious the finding is")
    value: Optional[str] = Field(default=None, description="Offending value as text")
    message: str = Field(..., description="Human-readable explanation")


class ValidationResult(BaseModel):
    """
    Result of checking planner inputs at the boundary.

    Returned by the InputValidator. Findings never stop the pipeline; they are
    surfaced alongside the plan.
    """

    approved: bool = Field(
        ..., description="False when at least one blocking finding exists"
    )
    checks: List[InputCheck] = Field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [f"{check.field}: {check.message}" for check in self.checks]

    @property
    def blocking(self) -> List[InputCheck]:
        return [c for c in self.checks if c.severity == Severity.BLOCKING]

