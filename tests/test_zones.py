"""
Tests for zone time/distance allocation.
"""

import pytest

from singles_planner.schemas import IntensityZone, ZonePaces, ZonePercentages
from singles_planner.zones import ZoneAllocator


@pytest.fixture
def allocator():
    return ZoneAllocator()


@pytest.fixture
def paces():
    return ZonePaces(easy=5.0, sub_threshold=4.0, high_intensity=3.5)


def test_total_time_is_weekly_distance_at_easy_pace(allocator, paces):
    """60 km at 5:00/km is 300 minutes of training."""
    budget = allocator.allocate(
        60.0, ZonePercentages(easy=75, sub_threshold=25, high_intensity=0), paces
    )

    assert budget.total_time_minutes == pytest.approx(300.0)
    assert budget.easy.time_minutes == pytest.approx(225.0)
    assert budget.easy.distance_km == pytest.approx(45.0)
    assert budget.sub_threshold.time_minutes == pytest.approx(75.0)
    assert budget.sub_threshold.distance_km == pytest.approx(18.75)
    assert budget.high_intensity.time_minutes == 0
    assert budget.high_intensity.distance_km == 0


def test_zone_distance_uses_zone_pace(allocator, paces):
    """Each zone converts its time back to distance with its own pace."""
    budget = allocator.allocate(
        60.0, ZonePercentages(easy=75, sub_threshold=18, high_intensity=7), paces
    )

    for zone in IntensityZone:
        allocation = budget.for_zone(zone)
        assert allocation.pace_min_per_km == paces.for_zone(zone)
        assert allocation.distance_km == pytest.approx(
            allocation.time_minutes / paces.for_zone(zone)
        )
    assert budget.high_intensity.time_minutes == pytest.approx(21.0)
    assert budget.high_intensity.distance_km == pytest.approx(6.0)


def test_percentages_are_not_normalised(allocator, paces):
    """Percentages above 100 in total inflate the budgets."""
    budget = allocator.allocate(
        60.0, ZonePercentages(easy=80, sub_threshold=30, high_intensity=0), paces
    )

    assert budget.easy.time_minutes == pytest.approx(240.0)
    assert budget.sub_threshold.time_minutes == pytest.approx(90.0)
    assert budget.easy.time_minutes + budget.sub_threshold.time_minutes > budget.total_time_minutes


def test_unusable_pace_gives_zero_distance(allocator):
    """A zero pace allocates time but no distance, without raising."""
    paces = ZonePaces(easy=5.0, sub_threshold=0.0, high_intensity=3.5)
    budget = allocator.allocate(
        60.0, ZonePercentages(easy=75, sub_threshold=25, high_intensity=0), paces
    )

    assert budget.sub_threshold.time_minutes == pytest.approx(75.0)
    assert budget.sub_threshold.distance_km == 0
    assert budget.sub_threshold.pace_min_per_km == 0


def test_unusable_easy_pace_gives_zero_total(allocator):
    paces = ZonePaces(easy=0.0, sub_threshold=4.0, high_intensity=3.5)
    budget = allocator.allocate(
        60.0, ZonePercentages(easy=75, sub_threshold=25, high_intensity=0), paces
    )

    assert budget.total_time_minutes == 0
    assert budget.easy.distance_km == 0
    assert budget.sub_threshold.distance_km == 0


def test_negative_distance_is_clamped(allocator, paces):
    budget = allocator.allocate(
        -10.0, ZonePercentages(easy=75, sub_threshold=25, high_intensity=0), paces
    )

    assert budget.weekly_distance_km == 0
    assert budget.total_time_minutes == 0


@pytest.mark.parametrize(
    "easy, sub_threshold, high_intensity",
    [
        (75, 25, 0),
        (75, 18, 7),
        (80, 30, 0),
        (50, 20, 5),
        (0, 0, 0),
    ],
)
def test_zone_times_are_linear_in_percentages(allocator, paces, easy, sub_threshold, high_intensity):
    """Distance times pace over all zones gives back total time times the percentage sum."""
    percentages = ZonePercentages(
        easy=easy, sub_threshold=sub_threshold, high_intensity=high_intensity
    )
    budget = allocator.allocate(60.0, percentages, paces)

    recovered = sum(
        budget.for_zone(zone).distance_km * paces.for_zone(zone) for zone in IntensityZone
    )
    assert recovered == pytest.approx(budget.total_time_minutes * percentages.total / 100)
