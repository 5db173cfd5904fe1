"""
Tests for the typer command-line interface.
"""

import pytest
from typer.testing import CliRunner

from singles_planner.cli import app
from singles_planner.config import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def builtin_methodology(monkeypatch):
    monkeypatch.delenv("SINGLES_PLANNER_METHODOLOGY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_paces_command():
    result = runner.invoke(app, ["paces", "--distance", "10", "--time", "40:00"])

    assert result.exit_code == 0
    assert "Fitness Score: 40" in result.output
    assert "3:20 min/km" in result.output


def test_paces_command_rejects_zero_time():
    result = runner.invoke(app, ["paces", "--distance", "10", "--time", "0:00"])

    assert result.exit_code == 1
    assert "Cannot estimate paces" in result.output


def test_plan_command_table():
    result = runner.invoke(app, ["plan", "--weekly-km", "60"])

    assert result.exit_code == 0
    assert "Weekly Plan" in result.output
    assert "Summary" in result.output
    assert "Training Load Distribution" in result.output


def test_plan_command_json():
    result = runner.invoke(
        app,
        [
            "--log-level",
            "WARNING",
            "plan",
            "--weekly-km",
            "60",
            "--sat-hi",
            "--remove-fri",
            "--cycling-hours",
            "10",
            "--format",
            "json",
        ],
    )

    assert result.exit_code == 0
    assert '"week_plan"' in result.output
    assert '"Bike Endurance"' in result.output
    assert '"sat_high_intensity": true' in result.output


def test_plan_command_markdown_with_race():
    result = runner.invoke(
        app,
        [
            "plan",
            "--race-distance",
            "10",
            "--race-time",
            "40:00",
            "--format",
            "markdown",
        ],
    )

    assert result.exit_code == 0
    assert "Norwegian Singles Weekly Plan" in result.output
    assert "Scheduling Decisions" in result.output


def test_plan_command_partial_percentages():
    """Omitted percentages fall back to the preset for the Saturday mode."""
    result = runner.invoke(
        app, ["--log-level", "WARNING", "plan", "--subt", "30", "--format", "json"]
    )

    assert result.exit_code == 0
    assert '"sub_threshold": 30.0' in result.output


def test_plan_command_rejects_negative_cycling():
    result = runner.invoke(app, ["plan", "--cycling-hours", "-2"])

    assert result.exit_code == 1
    assert "Invalid input" in result.output


def test_plan_command_rejects_unknown_format():
    result = runner.invoke(app, ["plan", "--format", "yaml"])

    assert result.exit_code == 1
    assert "Unsupported format" in result.output


def test_plan_command_invalid_methodology(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    result = runner.invoke(app, ["plan", "--methodology", str(path)])

    assert result.exit_code == 1
    assert "Failed to load methodology" in result.output


def test_methodology_command():
    result = runner.invoke(app, ["methodology"])

    assert result.exit_code == 0
    assert "Norwegian Singles" in result.output
    assert "75/18/7" in result.output
