"""
Tests for plan report generation and export.

Ensures that reports can be exported to JSON and Markdown.
"""

import json
from datetime import datetime
from pathlib import Path

import pytest

from singles_planner.pipeline import build_plan
from singles_planner.schemas import PlannerInputs, RaceResult
from singles_planner.trace import PlanReportBuilder

FIXTURES = Path(__file__).parent / "fixtures"
GENERATED_AT = datetime(2026, 3, 2, 7, 30, 0)


# Fixtures

@pytest.fixture
def default_report():
    """Report for the default 60 km week."""
    with open(FIXTURES / "inputs_default.json") as f:
        inputs = PlannerInputs(**json.load(f))
    return PlanReportBuilder(build_plan(inputs), generated_at=GENERATED_AT)


@pytest.fixture
def sat_hi_report():
    """Report for the race-based Saturday HI week with cycling."""
    with open(FIXTURES / "inputs_sat_hi_cycling.json") as f:
        inputs = PlannerInputs(**json.load(f))
    return PlanReportBuilder(build_plan(inputs), generated_at=GENERATED_AT)


# ===== JSON export =====


def test_export_to_json(default_report):
    """Test JSON export carries the plan and display values."""
    data = default_report.export_to_json()

    assert data["generated_at"] == "2026-03-02T07:30:00"
    assert data["paces_display"]["easy"] == "5:00 min/km"
    assert data["totals"]["run_km"] == pytest.approx(63.75)
    assert data["totals"]["bike_hours"] == 0
    assert len(data["week_plan"]["days"]) == 7
    assert data["week_plan"]["days"][1]["sessions"][1]["formatted"] == "6.3 km"


def test_json_export_is_serializable(sat_hi_report):
    """Test that the export survives a json.dumps round trip."""
    data = sat_hi_report.export_to_json()
    restored = json.loads(json.dumps(data))

    assert restored["fitness_estimate"]["score"] == 40
    assert restored["inputs"]["options"]["remove_fri"] is True
    assert restored["week_plan"]["days"][4]["sessions"] == []


# ===== Markdown export =====


def test_export_to_markdown(default_report):
    """Test Markdown export contains the main sections."""
    md = default_report.export_to_markdown()

    assert md.startswith("# Norwegian Singles Weekly Plan")
    assert "**Generated:** 2026-03-02 07:30:00" in md
    assert "**Weekly Run Goal:** 60 km" in md
    assert "## Paces" in md
    assert "- **Easy:** 5:00 min/km" in md
    assert "## Weekly Plan" in md
    assert "| Tue | Run: Warmup 2.0 km<br>Run: SubT 6.3 km<br>Run: Cooldown 2.0 km |" in md
    assert "| Sun | Run: Long Run 11.0 km |" in md
    assert "**Total Time:** 5.0 h" in md
    assert "| Run Easy | 3.8 |" in md
    assert "## Scheduling Decisions" in md
    assert "### Decision 1: Sub-Threshold Day Count" in md
    assert "## Notes" not in md


def test_markdown_with_race_and_cycling(sat_hi_report):
    md = sat_hi_report.export_to_markdown()

    assert "**Saturday:** High Intensity" in md
    assert "**Cycling:** 10 h/week" in md
    assert "fitness score **40**" in md
    assert "| Fri | Rest |" in md
    assert "Bike: Endurance 2.5 h" in md
    assert "**Total Bike:** 10.0 h" in md
    assert "| Run HI |" in md


def test_markdown_notes_list_findings():
    inputs = PlannerInputs(
        weekly_distance_km=0,
        race=RaceResult(distance_km=10.0, time_text="abc"),
    )
    md = PlanReportBuilder(build_plan(inputs), generated_at=GENERATED_AT).export_to_markdown()

    assert "## Notes" in md
    assert "`estimation_failed`" in md
    assert "weekly_distance_km: Weekly distance is 0" in md


def test_generated_at_defaults_to_now(default_report):
    report = PlanReportBuilder(default_report.result)

    assert isinstance(report.generated_at, datetime)
