"""
Zone time/distance allocation.

The week's total training time is the weekly distance goal run entirely at
easy pace. Every zone percentage is applied to that single derived total and
each zone's time is converted back to distance with the zone's own pace.
"""

import logging
import math

from singles_planner.plan_schemas import ZoneAllocation, ZoneBudget
from singles_planner.schemas import IntensityZone, ZonePaces, ZonePercentages

logger = logging.getLogger(__name__)


def _usable_pace(pace: float) -> bool:
    return pace is not None and math.isfinite(pace) and pace > 0


class ZoneAllocator:
    """
    Converts a weekly distance goal into per-zone budgets.

    total_time = weekly_distance * easy_pace
    time(zone) = total_time * percentage(zone) / 100
    distance(zone) = time(zone) / pace(zone)

    Percentages are not normalised; if they sum past 100 the zone budgets
    legitimately exceed the nominal weekly goal.
    """

    def allocate(
        self,
        weekly_distance_km: float,
        percentages: ZonePercentages,
        paces: ZonePaces,
    ) -> ZoneBudget:
        """
        Allocate weekly time and distance to each zone.

        Args:
            weekly_distance_km: Weekly running goal; negative values are treated as 0
            percentages: Share of total time per zone
            paces: Zone paces in min/km

        Returns:
            ZoneBudget with total time and a ZoneAllocation per zone
        """
        distance = max(0.0, weekly_distance_km)
        easy_pace = paces.easy if _usable_pace(paces.easy) else 0.0
        total_time_minutes = distance * easy_pace

        allocations = {
            zone: self._allocate_zone(
                zone, total_time_minutes, percentages.for_zone(zone), paces.for_zone(zone)
            )
            for zone in IntensityZone
        }

        logger.debug(
            "Allocated %.1f min: easy %.2f km, subT %.2f km, HI %.2f km",
            total_time_minutes,
            allocations[IntensityZone.EASY].distance_km,
            allocations[IntensityZone.SUB_THRESHOLD].distance_km,
            allocations[IntensityZone.HIGH_INTENSITY].distance_km,
        )

        return ZoneBudget(
            weekly_distance_km=distance,
            total_time_minutes=total_time_minutes,
            easy=allocations[IntensityZone.EASY],
            sub_threshold=allocations[IntensityZone.SUB_THRESHOLD],
            high_intensity=allocations[IntensityZone.HIGH_INTENSITY],
        )

    def _allocate_zone(
        self,
        zone: IntensityZone,
        total_time_minutes: float,
        percentage: float,
        pace: float,
    ) -> ZoneAllocation:
        time_minutes = total_time_minutes * percentage / 100

        if not _usable_pace(pace):
            # distance = time / pace is undefined; the zone gets no distance
            logger.warning(
                "Pace for %s zone is unset (%r); allocating zero distance",
                zone.value,
                pace,
            )
            return ZoneAllocation(
                time_minutes=time_minutes, distance_km=0.0, pace_min_per_km=0.0
            )

        return ZoneAllocation(
            time_minutes=time_minutes,
            distance_km=time_minutes / pace,
            pace_min_per_km=pace,
        )
