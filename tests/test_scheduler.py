"""
Tests for the weekly scheduler.

Covers:
- Fixed day roles (Tue/Thu SubT, Saturday SubT or HI, Sunday long run)
- Warmup/cooldown charged to the easy budget
- Easy distribution with removed days
- Cycling overlay and its day rules
- Plan decisions
"""

import pytest

from singles_planner.plan_schemas import (
    Activity,
    SessionSubtype,
    WEEK_ORDER,
    Weekday,
)
from singles_planner.scheduler import WeeklyScheduler
from singles_planner.schemas import ScheduleOptions, ZonePaces, ZonePercentages
from singles_planner.zones import ZoneAllocator


PACES = ZonePaces(easy=5.0, sub_threshold=4.0, high_intensity=3.5)
STANDARD = ZonePercentages(easy=75, sub_threshold=25, high_intensity=0)
SAT_HI = ZonePercentages(easy=75, sub_threshold=18, high_intensity=7)


@pytest.fixture
def scheduler():
    return WeeklyScheduler()


@pytest.fixture
def standard_budget():
    """60 km at 5:00/4:00/3:30 with 75/25/0."""
    return ZoneAllocator().allocate(60.0, STANDARD, PACES)


@pytest.fixture
def sat_hi_budget():
    """60 km at 5:00/4:00/3:30 with 75/18/7."""
    return ZoneAllocator().allocate(60.0, SAT_HI, PACES)


def _bikes(day_plan):
    return [s for s in day_plan.sessions if s.activity == Activity.BIKE]


# ===== Week structure =====


def test_week_has_seven_days_in_order(scheduler, standard_budget):
    week = scheduler.schedule(standard_budget, ScheduleOptions())

    assert [d.day for d in week.days] == WEEK_ORDER


def test_standard_week_layout(scheduler, standard_budget):
    """Default week: three SubT days bracketed by warmup/cooldown, easy days between."""
    week = scheduler.schedule(standard_budget, ScheduleOptions())

    for day in (Weekday.TUESDAY, Weekday.THURSDAY, Weekday.SATURDAY):
        subtypes = [s.subtype for s in week.get_day(day).sessions]
        assert subtypes == [
            SessionSubtype.WARMUP,
            SessionSubtype.SUB_THRESHOLD,
            SessionSubtype.COOLDOWN,
        ]
        main = week.get_day(day).sessions[1]
        assert main.amount == pytest.approx(6.25)
        assert main.formatted == "6.3 km"
        assert week.get_day(day).sessions[0].formatted == "2.0 km"

    for day in (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY):
        sessions = week.get_day(day).sessions
        assert len(sessions) == 1
        assert sessions[0].subtype == SessionSubtype.EASY
        assert sessions[0].amount == pytest.approx(33 / 4.5)
        assert sessions[0].formatted == "7.3 km"

    long_run = week.get_day(Weekday.SUNDAY).sessions[0]
    assert long_run.subtype == SessionSubtype.LONG_RUN
    assert long_run.amount == pytest.approx(11.0)
    assert long_run.formatted == "11.0 km"


def test_long_run_is_one_and_a_half_easy_blocks(scheduler, standard_budget):
    week = scheduler.schedule(standard_budget, ScheduleOptions())

    easy = week.get_day(Weekday.MONDAY).sessions[0].amount
    long_run = week.get_day(Weekday.SUNDAY).sessions[0].amount
    assert long_run == pytest.approx(1.5 * easy)


def test_saturday_high_intensity(scheduler, sat_hi_budget):
    """Saturday HI moves SubT to two days and schedules the HI distance."""
    week = scheduler.schedule(sat_hi_budget, ScheduleOptions(sat_high_intensity=True))

    saturday = week.get_day(Weekday.SATURDAY).sessions
    assert [s.subtype for s in saturday] == [
        SessionSubtype.WARMUP,
        SessionSubtype.HIGH_INTENSITY,
        SessionSubtype.COOLDOWN,
    ]
    assert saturday[1].amount == pytest.approx(6.0)
    assert saturday[1].label == "Run: High Intensity"

    tuesday = week.get_day(Weekday.TUESDAY).sessions[1]
    assert tuesday.amount == pytest.approx(13.5 / 2)
    assert tuesday.formatted == "6.8 km"


def test_high_intensity_not_scheduled_on_subt_saturday(scheduler, sat_hi_budget):
    """HI volume exists in the budget but only a HI Saturday can carry it."""
    week = scheduler.schedule(sat_hi_budget, ScheduleOptions(sat_high_intensity=False))

    subtypes = {s.subtype for _, s in week.sessions()}
    assert SessionSubtype.HIGH_INTENSITY not in subtypes


# ===== Removed days =====


def test_remove_monday(scheduler, standard_budget):
    """Monday becomes a rest day and the remaining easy days grow."""
    week = scheduler.schedule(standard_budget, ScheduleOptions(remove_mon=True))

    assert week.get_day(Weekday.MONDAY).is_rest_day
    assert week.get_day(Weekday.WEDNESDAY).sessions[0].amount == pytest.approx(33 / 3.5)
    assert week.get_day(Weekday.SUNDAY).sessions[0].amount == pytest.approx(1.5 * 33 / 3.5)


def test_remove_monday_and_friday(scheduler, standard_budget):
    week = scheduler.schedule(standard_budget, ScheduleOptions(remove_mon=True, remove_fri=True))

    assert week.get_day(Weekday.MONDAY).is_rest_day
    assert week.get_day(Weekday.FRIDAY).is_rest_day
    assert week.get_day(Weekday.WEDNESDAY).sessions[0].amount == pytest.approx(33 / 2.5)


def test_easy_distance_is_fully_placed(scheduler, standard_budget):
    """Easy blocks, long run and warmups add back up to the easy budget."""
    for options in (
        ScheduleOptions(),
        ScheduleOptions(remove_mon=True),
        ScheduleOptions(remove_fri=True),
        ScheduleOptions(remove_mon=True, remove_fri=True),
    ):
        week = scheduler.schedule(standard_budget, options)
        easy_km = sum(
            s.amount
            for _, s in week.sessions()
            if s.activity == Activity.RUN
            and s.subtype
            in (
                SessionSubtype.EASY,
                SessionSubtype.LONG_RUN,
                SessionSubtype.WARMUP,
                SessionSubtype.COOLDOWN,
            )
        )
        assert easy_km == pytest.approx(standard_budget.easy.distance_km)


def test_easy_budget_below_warmup_cost():
    """Warmups are fixed; easy days get nothing when the budget cannot cover them."""
    budget = ZoneAllocator().allocate(10.0, STANDARD, PACES)
    week = WeeklyScheduler().schedule(budget, ScheduleOptions())

    assert week.get_day(Weekday.MONDAY).sessions[0].amount == 0
    assert week.get_day(Weekday.SUNDAY).sessions[0].amount == 0
    assert week.get_day(Weekday.TUESDAY).sessions[0].amount == 2.0


def test_zero_weekly_distance():
    budget = ZoneAllocator().allocate(0.0, STANDARD, PACES)
    week = WeeklyScheduler().schedule(budget, ScheduleOptions())

    assert week.get_day(Weekday.TUESDAY).sessions[1].formatted == "0.0 km"
    assert week.get_day(Weekday.MONDAY).sessions[0].formatted == "0.0 km"


# ===== Cycling overlay =====


def test_cycling_overlay(scheduler, standard_budget):
    """75% endurance on Mon/Wed/Sun, 25% SubT on Tue/Thu, never Fri or Sat."""
    options = ScheduleOptions(cycling_enabled=True, cycling_hours_per_week=10.0)
    week = scheduler.schedule(standard_budget, options)

    for day in (Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.SUNDAY):
        bikes = _bikes(week.get_day(day))
        assert len(bikes) == 1
        assert bikes[0].subtype == SessionSubtype.ENDURANCE
        assert bikes[0].amount == pytest.approx(2.5)
        assert bikes[0].formatted == "2.5 h"

    for day in (Weekday.TUESDAY, Weekday.THURSDAY):
        bikes = _bikes(week.get_day(day))
        assert len(bikes) == 1
        assert bikes[0].subtype == SessionSubtype.SUB_THRESHOLD
        assert bikes[0].formatted == "1.3 h"

    assert _bikes(week.get_day(Weekday.FRIDAY)) == []
    assert _bikes(week.get_day(Weekday.SATURDAY)) == []


def test_bike_sessions_follow_runs(scheduler, standard_budget):
    options = ScheduleOptions(cycling_enabled=True, cycling_hours_per_week=10.0)
    week = scheduler.schedule(standard_budget, options)

    for day_plan in week.days:
        activities = [s.activity for s in day_plan.sessions]
        assert activities == sorted(activities, key=lambda a: a == Activity.BIKE)


def test_cycling_disabled_or_zero_hours(scheduler, standard_budget):
    for options in (
        ScheduleOptions(cycling_enabled=False, cycling_hours_per_week=10.0),
        ScheduleOptions(cycling_enabled=True, cycling_hours_per_week=0.0),
    ):
        week = scheduler.schedule(standard_budget, options)
        assert all(s.activity == Activity.RUN for _, s in week.sessions())


def test_cycling_with_monday_removed(scheduler, standard_budget):
    """Monday's endurance share moves to Wednesday and Sunday."""
    options = ScheduleOptions(
        remove_mon=True, cycling_enabled=True, cycling_hours_per_week=10.0
    )
    week = scheduler.schedule(standard_budget, options)

    assert week.get_day(Weekday.MONDAY).is_rest_day
    for day in (Weekday.WEDNESDAY, Weekday.SUNDAY):
        assert _bikes(week.get_day(day))[0].amount == pytest.approx(3.75)

    total_bike = sum(s.amount for _, s in week.sessions() if s.activity == Activity.BIKE)
    assert total_bike == pytest.approx(10.0)


def test_removed_day_has_no_bike(scheduler, standard_budget):
    options = ScheduleOptions(remove_fri=True, cycling_enabled=True, cycling_hours_per_week=6.0)
    week = scheduler.schedule(standard_budget, options)

    assert week.get_day(Weekday.FRIDAY).sessions == []


# ===== Plan decisions =====


def test_plan_decisions_documented(scheduler, standard_budget):
    scheduler.schedule(standard_budget, ScheduleOptions())

    points = [d.decision_point for d in scheduler.plan_decisions]
    assert points == [
        "Sub-Threshold Day Count",
        "Warmup/Cooldown Cost",
        "Easy Day Distribution",
    ]


def test_cycling_decision_only_when_cycling(scheduler, standard_budget):
    options = ScheduleOptions(cycling_enabled=True, cycling_hours_per_week=4.0)
    scheduler.schedule(standard_budget, options)

    assert scheduler.plan_decisions[-1].decision_point == "Cycling Overlay"


def test_decisions_reset_between_runs(scheduler, standard_budget):
    scheduler.schedule(standard_budget, ScheduleOptions())
    scheduler.schedule(standard_budget, ScheduleOptions())

    assert len(scheduler.plan_decisions) == 3
