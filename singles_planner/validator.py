"""
Boundary validation of planner inputs.

Checks the input snapshot before it enters the pipeline. Nothing here raises:
every finding is returned as an InputCheck so the caller can show it next to
the plan, which is always produced.
"""

import math
import re
from typing import List

from singles_planner.paces import EstimationError, PaceEstimator
from singles_planner.schemas import (
    InputCheck,
    MethodologyConfig,
    PlannerInputs,
    Severity,
    ValidationResult,
    ZonePaces,
    ZonePercentages,
)

RACE_TIME_PATTERN = re.compile(r"^\d+:\d{1,2}$")


class InputValidator:
    """
    Validates planner inputs against the methodology.

    The validator evaluates ALL checks even if one fails, so the caller sees
    the complete picture. Only BLOCKING findings flip ``approved``; notices
    and warnings are informational.
    """

    def __init__(self, methodology: MethodologyConfig):
        """
        Initialize validator with a methodology.

        Args:
            methodology: Methodology providing default paces and intensity presets
        """
        self.methodology = methodology

    def validate(self, inputs: PlannerInputs) -> ValidationResult:
        """
        Check the inputs.

        Args:
            inputs: Planner input snapshot

        Returns:
            ValidationResult with approval status and every finding
        """
        checks: List[InputCheck] = []
        checks.extend(self._check_weekly_distance(inputs))
        checks.extend(self._check_race(inputs))
        checks.extend(self._check_paces(inputs))
        checks.extend(self._check_percentages(inputs))
        checks.extend(self._check_cycling(inputs))

        # Blocking first, then warnings, then notices
        order = {Severity.BLOCKING: 0, Severity.WARNING: 1, Severity.NOTICE: 2}
        checks.sort(key=lambda c: order[c.severity])

        return ValidationResult(
            approved=not any(c.severity == Severity.BLOCKING for c in checks),
            checks=checks,
        )

    def resolve_paces(self, inputs: PlannerInputs) -> ZonePaces:
        """Explicit paces, or the methodology defaults."""
        if inputs.paces is not None:
            return inputs.paces
        return self.methodology.default_paces

    def resolve_percentages(self, inputs: PlannerInputs) -> ZonePercentages:
        """Explicit percentages, or the preset matching the Saturday mode."""
        if inputs.percentages is not None:
            return inputs.percentages
        presets = self.methodology.intensity_presets
        if inputs.options.sat_high_intensity:
            return presets.saturday_high_intensity
        return presets.standard

    def _check_weekly_distance(self, inputs: PlannerInputs) -> List[InputCheck]:
        if inputs.weekly_distance_km < 0:
            return [
                InputCheck(
                    field="weekly_distance_km",
                    severity=Severity.WARNING,
                    value=str(inputs.weekly_distance_km),
                    message="Negative weekly distance is treated as 0; the plan will be empty",
                )
            ]
        if inputs.weekly_distance_km == 0:
            return [
                InputCheck(
                    field="weekly_distance_km",
                    severity=Severity.NOTICE,
                    value="0",
                    message="Weekly distance is 0; every run distance will be zero",
                )
            ]
        return []

    def _check_race(self, inputs: PlannerInputs) -> List[InputCheck]:
        if inputs.race is None:
            return []

        checks = []
        distance = inputs.race.distance_km
        if not math.isfinite(distance) or distance <= 0:
            checks.append(
                InputCheck(
                    field="race.distance_km",
                    severity=Severity.WARNING,
                    value=str(distance),
                    message="Race distance must be positive; paces cannot be estimated",
                )
            )
        if not RACE_TIME_PATTERN.match(inputs.race.time_text.strip()):
            checks.append(
                InputCheck(
                    field="race.time_text",
                    severity=Severity.WARNING,
                    value=inputs.race.time_text,
                    message="Race time should look like MM:SS; malformed parts count as zero",
                )
            )
        return checks

    def _check_paces(self, inputs: PlannerInputs) -> List[InputCheck]:
        # A usable race result replaces the explicit or default paces
        if inputs.race is not None:
            try:
                PaceEstimator(self.methodology).estimate_race(inputs.race)
                return []
            except EstimationError:
                pass

        checks = []
        for zone, pace in self.resolve_paces(inputs).model_dump().items():
            if not math.isfinite(pace) or pace <= 0:
                checks.append(
                    InputCheck(
                        field=f"paces.{zone}",
                        severity=Severity.BLOCKING,
                        value=str(pace),
                        message="Pace must be positive; this zone will get zero distance",
                    )
                )
        return checks

    def _check_percentages(self, inputs: PlannerInputs) -> List[InputCheck]:
        percentages = self.resolve_percentages(inputs)
        checks = []

        # Percentages are independent fractions of total time; off-100 is allowed
        if abs(percentages.total - 100) > 1e-9:
            checks.append(
                InputCheck(
                    field="percentages",
                    severity=Severity.NOTICE,
                    value=f"{percentages.total:g}",
                    message="Zone percentages do not total 100%; aim for ~100%",
                )
            )
        if percentages.high_intensity > 0 and not inputs.options.sat_high_intensity:
            checks.append(
                InputCheck(
                    field="percentages.high_intensity",
                    severity=Severity.NOTICE,
                    value=f"{percentages.high_intensity:g}",
                    message="Saturday is a sub-threshold day, so high-intensity volume is not scheduled",
                )
            )
        return checks

    def _check_cycling(self, inputs: PlannerInputs) -> List[InputCheck]:
        options = inputs.options
        if options.cycling_enabled and options.cycling_hours_per_week == 0:
            return [
                InputCheck(
                    field="options.cycling_hours_per_week",
                    severity=Severity.NOTICE,
                    value="0",
                    message="Cycling is enabled with 0 hours; no bike sessions are added",
                )
            ]
        return []
