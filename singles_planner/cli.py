"""
Command-line interface for the Norwegian Singles planner.

Provides commands for:
- Pace estimation from a race result
- Weekly plan generation (table, JSON or Markdown output)
- Methodology viewing
"""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from singles_planner.config import get_settings, load_methodology
from singles_planner.logging_config import setup_logging
from singles_planner.paces import EstimationError, PaceEstimator
from singles_planner.pipeline import build_plan
from singles_planner.plan_schemas import Activity, PlanResult, SessionSubtype
from singles_planner.schemas import (
    MethodologyConfig,
    PlannerInputs,
    RaceResult,
    ScheduleOptions,
    ZonePaces,
    ZonePercentages,
)
from singles_planner.trace import PlanReportBuilder

# Initialize Typer app and Rich console
app = typer.Typer(
    help="Norwegian Singles Planner - weekly sub-threshold training from your mileage goal"
)
console = Console()

SESSION_STYLES = {
    (Activity.RUN, SessionSubtype.SUB_THRESHOLD): "orange3",
    (Activity.RUN, SessionSubtype.HIGH_INTENSITY): "red",
    (Activity.BIKE, SessionSubtype.SUB_THRESHOLD): "magenta",
    (Activity.BIKE, SessionSubtype.ENDURANCE): "blue",
}


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override SINGLES_PLANNER_LOG_LEVEL"
    ),
):
    """Configure logging before any command runs."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_format)


def _load_methodology_or_exit(methodology: Optional[Path]) -> MethodologyConfig:
    try:
        return load_methodology(methodology or get_settings().methodology_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗ Failed to load methodology: {e}[/red]")
        raise typer.Exit(1)


# ===== DISPLAY HELPER FUNCTIONS =====


def _display_paces(estimate) -> None:
    """Display fitness score and zone paces."""
    table = Table(title=f"Fitness Score: {estimate.score}", box=box.ROUNDED)
    table.add_column("Zone", style="cyan")
    table.add_column("Pace", justify="right", style="yellow")
    table.add_row("Easy", estimate.paces_display["easy"])
    table.add_row("SubT", estimate.paces_display["sub_threshold"])
    table.add_row("HI", estimate.paces_display["high_intensity"])
    console.print(table)
    console.print(f"[dim]Race speed: {estimate.speed_kmh:.2f} km/h[/dim]")


def _display_week(result: PlanResult) -> None:
    """Display the weekly plan as one column per day."""
    table = Table(title="Weekly Plan", box=box.ROUNDED, show_lines=True)
    for day_plan in result.week_plan.days:
        table.add_column(day_plan.day.value, justify="center")

    cells = []
    for day_plan in result.week_plan.days:
        if day_plan.is_rest_day:
            cells.append("[dim]Rest[/dim]")
            continue
        parts = []
        for session in day_plan.sessions:
            style = SESSION_STYLES.get((session.activity, session.subtype), "green")
            parts.append(f"[{style}]{session.label}\n{session.formatted}[/{style}]")
        cells.append("\n".join(parts))
    table.add_row(*cells)
    console.print(table)


def _display_summary(result: PlanResult) -> None:
    """Display totals and the load distribution bars."""
    totals = result.totals
    options = result.inputs.options

    content = [
        f"[bold]Total Time:[/bold] {totals.total_time_hours:.1f} h",
        f"[bold]Total Run:[/bold] {totals.run_km:.1f} km",
        f"  • Easy: {totals.run_easy_km:.1f} km (~{totals.run_easy_hours:.1f} h)",
        f"  • SubT: {totals.run_sub_threshold_km:.1f} km (~{totals.run_sub_threshold_hours:.1f} h)",
    ]
    if totals.run_high_intensity_km > 0:
        content.append(
            f"  • High Intensity: {totals.run_high_intensity_km:.1f} km "
            f"(~{totals.run_high_intensity_hours:.1f} h)"
        )
    if options.cycling_enabled:
        content.append(f"[bold]Total Bike:[/bold] {totals.bike_hours:.1f} h")
        content.append(f"  • Endurance: {totals.bike_endurance_hours:.1f} h")
        content.append(f"  • SubT: {totals.bike_sub_threshold_hours:.1f} h")

    console.print(Panel("\n".join(content), title="Summary", border_style="cyan"))

    # Load distribution
    table = Table(title="Training Load Distribution", box=box.SIMPLE)
    table.add_column("Load", style="cyan")
    table.add_column("Hours", justify="right")
    table.add_column("")
    max_hours = max((p.hours for p in result.chart_series), default=0) or 1
    for point in result.chart_series:
        bar = "█" * int(round(point.hours / max_hours * 30))
        table.add_row(point.label, f"{point.hours:.1f}", f"[green]{bar}[/green]")
    console.print(table)


def _display_findings(result: PlanResult) -> None:
    for error in result.errors:
        console.print(f"[red]✗ {error.message}[/red]")
    for warning in result.warnings:
        console.print(f"[yellow]⚠ {warning}[/yellow]")


# ===== CLI COMMANDS =====


@app.command()
def paces(
    distance: float = typer.Option(10.0, "--distance", "-d", help="Race distance (km)"),
    time: str = typer.Option("40:00", "--time", "-t", help="Race time (MM:SS)"),
    methodology: Optional[Path] = typer.Option(
        None, "--methodology", "-m", help="Path to methodology JSON file", exists=True
    ),
):
    """
    Estimate fitness score and training paces from a race result.
    """
    estimator = PaceEstimator(_load_methodology_or_exit(methodology))
    try:
        estimate = estimator.estimate(distance, time)
    except EstimationError as e:
        console.print(f"[red]✗ Cannot estimate paces: {e}[/red]")
        raise typer.Exit(1)

    _display_paces(estimate)


@app.command()
def plan(
    weekly_km: float = typer.Option(60.0, "--weekly-km", "-w", help="Weekly run goal (km)"),
    race_distance: Optional[float] = typer.Option(
        None, "--race-distance", help="Race distance (km) to estimate paces from"
    ),
    race_time: Optional[str] = typer.Option(
        None, "--race-time", help="Race time (MM:SS) to estimate paces from"
    ),
    easy_pace: Optional[float] = typer.Option(None, "--easy-pace", help="Easy pace (min/km)"),
    subt_pace: Optional[float] = typer.Option(
        None, "--subt-pace", help="Sub-threshold pace (min/km)"
    ),
    hi_pace: Optional[float] = typer.Option(None, "--hi-pace", help="High-intensity pace (min/km)"),
    easy: Optional[float] = typer.Option(None, "--easy", help="Easy % of weekly time"),
    subt: Optional[float] = typer.Option(None, "--subt", help="Sub-threshold % of weekly time"),
    hi: Optional[float] = typer.Option(None, "--hi", help="High-intensity % of weekly time"),
    sat_hi: bool = typer.Option(
        False, "--sat-hi/--sat-subt", help="Saturday high intensity instead of SubT"
    ),
    remove_mon: bool = typer.Option(False, "--remove-mon", help="Make Monday a rest day"),
    remove_fri: bool = typer.Option(False, "--remove-fri", help="Make Friday a rest day"),
    cycling_hours: float = typer.Option(
        0.0, "--cycling-hours", "-c", help="Weekly cycling hours (enables cycling when > 0)"
    ),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format (table, json or markdown)"
    ),
    methodology: Optional[Path] = typer.Option(
        None, "--methodology", "-m", help="Path to methodology JSON file", exists=True
    ),
):
    """
    Generate the weekly plan and load summary.

    Zone percentages default to 75/25/0, or 75/18/7 with --sat-hi; give all
    three of --easy/--subt/--hi to override.
    """
    if output_format not in ("table", "json", "markdown"):
        console.print(f"[red]✗ Unsupported format: {output_format}. Use table, json or markdown[/red]")
        raise typer.Exit(1)

    methodology_config = _load_methodology_or_exit(methodology)
    default_paces = methodology_config.default_paces

    try:
        percentages = None
        if any(v is not None for v in (easy, subt, hi)):
            defaults = (
                methodology_config.intensity_presets.saturday_high_intensity
                if sat_hi
                else methodology_config.intensity_presets.standard
            )
            percentages = ZonePercentages(
                easy=defaults.easy if easy is None else easy,
                sub_threshold=defaults.sub_threshold if subt is None else subt,
                high_intensity=defaults.high_intensity if hi is None else hi,
            )

        race = None
        if race_distance is not None or race_time is not None:
            race = RaceResult(distance_km=race_distance or 0.0, time_text=race_time or "")

        inputs = PlannerInputs(
            weekly_distance_km=weekly_km,
            race=race,
            paces=ZonePaces(
                easy=default_paces.easy if easy_pace is None else easy_pace,
                sub_threshold=default_paces.sub_threshold if subt_pace is None else subt_pace,
                high_intensity=default_paces.high_intensity if hi_pace is None else hi_pace,
            ),
            percentages=percentages,
            options=ScheduleOptions(
                sat_high_intensity=sat_hi,
                remove_mon=remove_mon,
                remove_fri=remove_fri,
                cycling_enabled=cycling_hours > 0,
                cycling_hours_per_week=cycling_hours,
            ),
        )
    except ValidationError as e:
        console.print(f"[red]✗ Invalid input: {e}[/red]")
        raise typer.Exit(1)

    result = build_plan(inputs, methodology_config)
    report = PlanReportBuilder(result)

    if output_format == "json":
        console.print_json(json.dumps(report.export_to_json(), default=str))
        return
    if output_format == "markdown":
        console.print(Markdown(report.export_to_markdown()))
        return

    console.print("\n[bold cyan]Norwegian Singles Planner[/bold cyan]\n")
    if result.fitness_estimate is not None:
        _display_paces(result.fitness_estimate)
    _display_week(result)
    _display_summary(result)
    _display_findings(result)


@app.command()
def methodology(
    path: Optional[Path] = typer.Option(
        None, "--path", "-p", help="Path to methodology JSON file", exists=True
    ),
):
    """
    View the methodology card.
    """
    card = _load_methodology_or_exit(path)
    presets = card.intensity_presets
    schedule = card.schedule
    content = [
        f"[bold]{card.name}[/bold]",
        f"Version: {card.version}",
        f"ID: [cyan]{card.id}[/cyan]",
        f"\n{card.description}",
        "\n[bold]Intensity Presets:[/bold]",
        f"  • Saturday SubT: {presets.standard.easy:g}/{presets.standard.sub_threshold:g}/"
        f"{presets.standard.high_intensity:g}",
        f"  • Saturday HI: {presets.saturday_high_intensity.easy:g}/"
        f"{presets.saturday_high_intensity.sub_threshold:g}/"
        f"{presets.saturday_high_intensity.high_intensity:g}",
        "\n[bold]Week Structure:[/bold]",
        "  • Tue/Thu: SubT, Sat: SubT or HI",
        f"  • Warmup {schedule.warmup_km:g} km / Cooldown {schedule.cooldown_km:g} km per intensity day",
        f"  • Sunday long run: {schedule.long_run_multiplier:g}x easy block",
        f"  • Cycling: {card.cycling.endurance_share:.0%} endurance, "
        f"{card.cycling.sub_threshold_share:.0%} SubT",
    ]
    if card.reference_url:
        content.append(f"\nLearn more: {card.reference_url}")

    console.print(Panel("\n".join(content), title="Methodology Card", border_style="cyan"))


if __name__ == "__main__":
    app()
