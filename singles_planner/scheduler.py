"""
Weekly schedule generator for the Norwegian Singles method.

This module lays out one training week from the zone budgets:
- Tue/Thu are always sub-threshold days, Saturday is sub-threshold or high-intensity
- Every intensity session is bracketed by a fixed warmup and cooldown
- Mon/Wed/Fri share the remaining easy distance, Sunday runs 1.5x as a long run
- An optional cycling overlay adds endurance and sub-threshold bike sessions
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from singles_planner.plan_schemas import (
    DayPlan,
    PlanDecision,
    Session,
    SessionSubtype,
    WEEK_ORDER,
    WeekPlan,
    Weekday,
    ZoneBudget,
)
from singles_planner.schemas import MethodologyConfig, ScheduleOptions

logger = logging.getLogger(__name__)

THRESHOLD_DAYS = (Weekday.TUESDAY, Weekday.THURSDAY)
INTENSITY_DAYS = (Weekday.TUESDAY, Weekday.THURSDAY, Weekday.SATURDAY)
EASY_DAYS = (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY, Weekday.SUNDAY)
BIKE_ENDURANCE_DAYS = (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.SUNDAY)
BIKE_SUB_THRESHOLD_DAYS = (Weekday.TUESDAY, Weekday.THURSDAY)


@dataclass(frozen=True)
class _Allotments:
    """Per-day amounts computed once, before any day is built."""

    sub_threshold_km: float
    high_intensity_km: float
    easy_block_km: float
    long_run_km: float
    bike_endurance_h: float
    bike_sub_threshold_h: float


class WeeklyScheduler:
    """
    Distributes zone budgets across the seven fixed calendar slots.

    The scheduler:
    1. Splits the sub-threshold distance across 2 or 3 threshold days
    2. Charges warmup/cooldown for every intensity day to the easy budget
    3. Spreads the free easy distance over the active easy days (Sunday x1.5)
    4. Overlays cycling sessions when enabled
    5. Documents every decision for the plan report

    No day depends on another except through the shared budgets and divisors
    computed up front.
    """

    def __init__(self, methodology: Optional[MethodologyConfig] = None):
        """
        Initialize the scheduler.

        Args:
            methodology: Methodology with warmup/cooldown, long run and cycling constants
        """
        self.methodology = methodology or MethodologyConfig()
        self.plan_decisions: List[PlanDecision] = []

    def schedule(self, zone_budget: ZoneBudget, options: ScheduleOptions) -> WeekPlan:
        """
        Build the week.

        Args:
            zone_budget: Per-zone time/distance budgets from the ZoneAllocator
            options: Saturday mode, removed days and cycling overlay settings

        Returns:
            WeekPlan with seven DayPlans, Monday through Sunday
        """
        self.plan_decisions = []

        allotments = _Allotments(
            sub_threshold_km=self._determine_sub_threshold_split(zone_budget, options),
            high_intensity_km=zone_budget.high_intensity.distance_km,
            **self._determine_easy_distribution(zone_budget, options),
            **self._determine_cycling_split(options),
        )

        days = [self._build_day(day, allotments, options) for day in WEEK_ORDER]
        return WeekPlan(days=days)

    def _determine_sub_threshold_split(
        self, zone_budget: ZoneBudget, options: ScheduleOptions
    ) -> float:
        """
        Split the sub-threshold distance evenly across the threshold days.

        Tue and Thu always carry sub-threshold work; Saturday joins them unless
        it is the high-intensity day.

        Returns:
            Sub-threshold distance per threshold day (km)
        """
        num_days = 2 if options.sat_high_intensity else 3
        per_day = zone_budget.sub_threshold.distance_km / num_days

        self.plan_decisions.append(
            PlanDecision(
                decision_point="Sub-Threshold Day Count",
                input_factors=[
                    f"sat_high_intensity={options.sat_high_intensity}",
                    f"sub_threshold_km={zone_budget.sub_threshold.distance_km:.2f}",
                ],
                reasoning=(
                    "Saturday is the high-intensity day, so sub-threshold work is "
                    "shared by Tuesday and Thursday only."
                    if options.sat_high_intensity
                    else "Saturday is a third sub-threshold day alongside Tuesday and Thursday."
                ),
                outcome=f"{num_days} sub-threshold days at {per_day:.2f} km each",
            )
        )
        return per_day

    def _determine_easy_distribution(
        self, zone_budget: ZoneBudget, options: ScheduleOptions
    ) -> Dict[str, float]:
        """
        Spread the free easy distance over Mon/Wed/Fri/Sun.

        Warmup and cooldown for every intensity day come out of the easy
        budget first. Sunday counts as 1.5 units, hence the +0.5 divisor.

        Returns:
            Dictionary with easy_block_km and long_run_km
        """
        schedule = self.methodology.schedule
        warmup_cooldown_km = (schedule.warmup_km + schedule.cooldown_km) * len(INTENSITY_DAYS)
        free_easy_km = max(0.0, zone_budget.easy.distance_km - warmup_cooldown_km)

        active_easy_days = len(EASY_DAYS) - int(options.remove_mon) - int(options.remove_fri)
        divisor = active_easy_days + (schedule.long_run_multiplier - 1.0)
        easy_block_km = free_easy_km / divisor if divisor > 0 else 0.0
        long_run_km = easy_block_km * schedule.long_run_multiplier

        if zone_budget.easy.distance_km < warmup_cooldown_km:
            logger.info(
                "Easy budget %.2f km does not cover %.1f km of warmup/cooldown; "
                "easy days get no distance",
                zone_budget.easy.distance_km,
                warmup_cooldown_km,
            )

        self.plan_decisions.append(
            PlanDecision(
                decision_point="Warmup/Cooldown Cost",
                input_factors=[
                    f"intensity_days={len(INTENSITY_DAYS)}",
                    f"warmup_km={schedule.warmup_km}",
                    f"cooldown_km={schedule.cooldown_km}",
                ],
                reasoning="Every intensity session is bracketed by a warmup and cooldown "
                "run at easy effort, so their distance is charged to the easy budget.",
                outcome=f"{warmup_cooldown_km:.1f} km reserved, {free_easy_km:.2f} km easy left",
            )
        )
        self.plan_decisions.append(
            PlanDecision(
                decision_point="Easy Day Distribution",
                input_factors=[
                    f"free_easy_km={free_easy_km:.2f}",
                    f"remove_mon={options.remove_mon}",
                    f"remove_fri={options.remove_fri}",
                ],
                reasoning=f"{active_easy_days} easy days share the free easy distance; "
                f"Sunday's long run is {schedule.long_run_multiplier}x a regular easy block.",
                outcome=f"easy block {easy_block_km:.2f} km (divisor {divisor}), "
                f"long run {long_run_km:.2f} km",
            )
        )
        return {"easy_block_km": easy_block_km, "long_run_km": long_run_km}

    def _determine_cycling_split(self, options: ScheduleOptions) -> Dict[str, float]:
        """
        Split weekly cycling hours into per-day bike sessions.

        Endurance hours go to Mon/Wed/Sun (skipping a removed Monday, so the
        weekly endurance hours are always fully placed); sub-threshold hours go
        to Tue/Thu. Friday never gets a bike session.

        Returns:
            Dictionary with bike_endurance_h and bike_sub_threshold_h per day
        """
        hours = options.cycling_hours_per_week
        if not options.cycling_enabled or hours <= 0:
            return {"bike_endurance_h": 0.0, "bike_sub_threshold_h": 0.0}

        split = self.methodology.cycling
        endurance_days = self._bike_endurance_days(options)
        endurance_per_day = hours * split.endurance_share / len(endurance_days)
        sub_threshold_per_day = hours * split.sub_threshold_share / len(BIKE_SUB_THRESHOLD_DAYS)

        self.plan_decisions.append(
            PlanDecision(
                decision_point="Cycling Overlay",
                input_factors=[
                    f"cycling_hours_per_week={hours}",
                    f"remove_mon={options.remove_mon}",
                ],
                reasoning=f"{split.endurance_share:.0%} of cycling is endurance on "
                f"{', '.join(d.value for d in endurance_days)}; "
                f"{split.sub_threshold_share:.0%} is sub-threshold on Tue and Thu.",
                outcome=f"{endurance_per_day:.2f} h endurance/day, "
                f"{sub_threshold_per_day:.2f} h sub-threshold/day",
            )
        )
        return {
            "bike_endurance_h": endurance_per_day,
            "bike_sub_threshold_h": sub_threshold_per_day,
        }

    @staticmethod
    def _bike_endurance_days(options: ScheduleOptions) -> List[Weekday]:
        return [
            day
            for day in BIKE_ENDURANCE_DAYS
            if not (day == Weekday.MONDAY and options.remove_mon)
        ]

    def _build_day(
        self, day: Weekday, allotments: _Allotments, options: ScheduleOptions
    ) -> DayPlan:
        """
        Create the sessions for a single day.

        Args:
            day: Calendar slot
            allotments: Amounts computed up front
            options: Schedule options

        Returns:
            DayPlan (empty sessions for a removed day)
        """
        if (day == Weekday.MONDAY and options.remove_mon) or (
            day == Weekday.FRIDAY and options.remove_fri
        ):
            return DayPlan(day=day, sessions=[])

        if day in THRESHOLD_DAYS:
            sessions = self._intensity_sessions(
                SessionSubtype.SUB_THRESHOLD, allotments.sub_threshold_km
            )
        elif day == Weekday.SATURDAY:
            if options.sat_high_intensity:
                sessions = self._intensity_sessions(
                    SessionSubtype.HIGH_INTENSITY, allotments.high_intensity_km
                )
            else:
                sessions = self._intensity_sessions(
                    SessionSubtype.SUB_THRESHOLD, allotments.sub_threshold_km
                )
        elif day == Weekday.SUNDAY:
            sessions = [Session.run(SessionSubtype.LONG_RUN, allotments.long_run_km)]
        else:
            sessions = [Session.run(SessionSubtype.EASY, allotments.easy_block_km)]

        # Bike sessions go after the run, never in place of it
        if day in BIKE_ENDURANCE_DAYS and allotments.bike_endurance_h > 0:
            sessions.append(Session.bike(SessionSubtype.ENDURANCE, allotments.bike_endurance_h))
        elif day in BIKE_SUB_THRESHOLD_DAYS and allotments.bike_sub_threshold_h > 0:
            sessions.append(
                Session.bike(SessionSubtype.SUB_THRESHOLD, allotments.bike_sub_threshold_h)
            )

        return DayPlan(day=day, sessions=sessions)

    def _intensity_sessions(self, subtype: SessionSubtype, distance_km: float) -> List[Session]:
        schedule = self.methodology.schedule
        return [
            Session.run(SessionSubtype.WARMUP, schedule.warmup_km),
            Session.run(subtype, distance_km),
            Session.run(SessionSubtype.COOLDOWN, schedule.cooldown_km),
        ]
