"""
Pace estimation module.

Derives a placeholder fitness score and per-zone training paces from a race
distance and finish time, and formats paces for display.
"""

import logging
import math
import re
from typing import Optional

from singles_planner.plan_schemas import FitnessEstimate
from singles_planner.schemas import (
    MAX_PACE_MIN_PER_KM,
    MethodologyConfig,
    RaceResult,
    ZonePaces,
)

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class EstimationError(ValueError):
    """Raised when a race result cannot produce finite, positive paces."""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _parse_field(text: str) -> int:
    """Best-effort integer parse: leading digits count, anything else is 0."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_race_time(time_text: str) -> float:
    """
    Parse a "MM:SS" finish time into total minutes.

    Minutes may exceed 59 ("95:30"). Only the first two colon-separated fields
    are read, and a malformed field counts as zero, so this never raises.

    Args:
        time_text: Finish time text

    Returns:
        Total minutes (may be 0 or negative for degenerate input)
    """
    parts = (time_text or "").split(":")
    minutes = _parse_field(parts[0])
    seconds = _parse_field(parts[1]) if len(parts) > 1 else 0
    return minutes + seconds / 60


def format_pace(min_per_km: float) -> str:
    """
    Format minutes-per-km as "M:SS min/km".

    Seconds are rounded half-up; a rounding result of 60 seconds carries into
    the minutes (3.9917 -> "4:00 min/km", never "3:60").
    """
    if min_per_km is None or not math.isfinite(min_per_km) or min_per_km < 0:
        return "n/a"
    minutes = int(math.floor(min_per_km))
    seconds = _round_half_up((min_per_km - minutes) * 60)
    if seconds == 60:
        return f"{minutes + 1}:00 min/km"
    return f"{minutes}:{seconds:02d} min/km"


class PaceEstimator:
    """
    Estimates training paces from a race performance.

    speed = distance / minutes * 60 (km/h)
    score = round(score_base + score_speed_multiplier * speed)
    pace(zone) = factor(zone) / (speed / speed_divisor)

    The score is a simplified proxy for a fitness index, not a validated
    physiological formula.
    """

    def __init__(self, methodology: Optional[MethodologyConfig] = None):
        """
        Initialize estimator with methodology.

        Args:
            methodology: Methodology whose pace model constants are used
        """
        self.methodology = methodology or MethodologyConfig()
        self.model = self.methodology.pace_model

    def estimate(self, distance_km: float, time_text: str) -> FitnessEstimate:
        """
        Estimate fitness score and zone paces.

        Args:
            distance_km: Race distance in kilometres (must be > 0)
            time_text: Finish time as "MM:SS"

        Returns:
            FitnessEstimate with score, speed, numeric and formatted paces

        Raises:
            EstimationError: If the time parses to zero or a pace is not finite or
                slower than MAX_PACE_MIN_PER_KM
        """
        total_minutes = parse_race_time(time_text)
        if total_minutes <= 0:
            raise EstimationError(
                f"Race time '{time_text}' parses to {total_minutes:.2f} minutes; "
                "cannot derive a speed"
            )

        speed_kmh = distance_km / total_minutes * 60
        if not math.isfinite(speed_kmh) or speed_kmh <= 0:
            raise EstimationError(
                f"Race distance {distance_km} km over {total_minutes:.2f} min "
                f"gives an unusable speed ({speed_kmh})"
            )

        relative_speed = speed_kmh / self.model.speed_divisor
        values = {
            "easy": self.model.easy_factor / relative_speed,
            "sub_threshold": self.model.sub_threshold_factor / relative_speed,
            "high_intensity": self.model.high_intensity_factor / relative_speed,
        }
        if not all(
            math.isfinite(p) and 0 < p <= MAX_PACE_MIN_PER_KM for p in values.values()
        ):
            raise EstimationError(
                f"Estimated paces are outside 0-{MAX_PACE_MIN_PER_KM:g} min/km: {values}"
            )
        paces = ZonePaces(**values)

        score = _round_half_up(
            self.model.score_base + self.model.score_speed_multiplier * speed_kmh
        )

        logger.debug(
            "Estimated %.2f km/h from %.2f km in %.2f min (score %d)",
            speed_kmh,
            distance_km,
            total_minutes,
            score,
        )

        return FitnessEstimate(
            score=score,
            speed_kmh=speed_kmh,
            paces=paces,
            paces_display={
                "easy": format_pace(paces.easy),
                "sub_threshold": format_pace(paces.sub_threshold),
                "high_intensity": format_pace(paces.high_intensity),
            },
        )

    def estimate_race(self, race: RaceResult) -> FitnessEstimate:
        """Estimate from a RaceResult model."""
        return self.estimate(race.distance_km, race.time_text)
