#!/usr/bin/env python3
"""
Quick start script to demonstrate the Norwegian Singles planner.

This script shows the complete workflow:
1. Load the methodology card
2. Estimate paces from a race result
3. Validate the planner inputs
4. Generate the weekly plan
5. Compare schedule variations
"""

import json
from datetime import date
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from singles_planner.config import DEFAULT_METHODOLOGY_PATH, load_methodology
from singles_planner.logging_config import setup_logging
from singles_planner.paces import PaceEstimator
from singles_planner.pipeline import build_plan
from singles_planner.plan_schemas import Weekday
from singles_planner.schemas import PlannerInputs, ScheduleOptions
from singles_planner.trace import PlanReportBuilder
from singles_planner.validator import InputValidator

console = Console()


def print_header(title: str):
    """Print a formatted header."""
    console.print(f"\n[bold cyan]{title}[/bold cyan]")
    console.print("=" * len(title))


def main():
    """Run the complete demonstration workflow."""
    setup_logging("WARNING")

    console.print("\n[bold magenta]🏃 Norwegian Singles Planner[/bold magenta]")
    console.print("[dim]Demonstration of complete workflow[/dim]\n")

    # ===== STEP 1: Load Methodology =====
    print_header("Step 1: Load Methodology")

    methodology = load_methodology(DEFAULT_METHODOLOGY_PATH)

    console.print(f"✓ Loaded: [green]{methodology.name}[/green]")
    console.print(f"  Version: {methodology.version}")
    console.print(f"  Long run: {methodology.schedule.long_run_multiplier:g}x easy block")

    # ===== STEP 2: Estimate Paces =====
    print_header("Step 2: Estimate Paces (10 km in 40:00)")

    estimate = PaceEstimator(methodology).estimate(10.0, "40:00")

    table = Table(title=f"Fitness Score: {estimate.score}", box=box.ROUNDED)
    table.add_column("Zone", style="cyan")
    table.add_column("Pace", justify="right", style="yellow")
    for zone, display in estimate.paces_display.items():
        table.add_row(zone.replace("_", " ").title(), display)
    console.print(table)

    # ===== STEP 3: Validate Inputs =====
    print_header("Step 3: Validate Inputs")

    inputs = PlannerInputs(
        weekly_distance_km=60.0,
        paces=estimate.paces,
        options=ScheduleOptions(cycling_enabled=True, cycling_hours_per_week=4.0),
    )
    validation = InputValidator(methodology).validate(inputs)

    if validation.approved:
        console.print("[green]✓ Validation: APPROVED[/green]")
    else:
        console.print("[red]✗ Validation: BLOCKED[/red]")
    for warning in validation.warnings:
        console.print(f"  - {warning}")

    # ===== STEP 4: Generate Weekly Plan =====
    print_header("Step 4: Generate Weekly Plan")

    result = build_plan(inputs, methodology)

    for day_plan in result.week_plan.days:
        sessions = ", ".join(f"{s.label} {s.formatted}" for s in day_plan.sessions)
        console.print(f"  {day_plan.day.value}: {sessions or '[dim]Rest[/dim]'}")

    totals = result.totals
    console.print(f"\n[bold]Total Run:[/bold] {totals.run_km:.1f} km")
    console.print(f"[bold]Total Bike:[/bold] {totals.bike_hours:.1f} h")
    console.print(f"[bold]Total Time:[/bold] {totals.total_time_hours:.1f} h")

    # Save report
    plan_dir = Path("plans")
    plan_dir.mkdir(exist_ok=True)
    plan_path = plan_dir / f"demo_plan_{date.today().strftime('%Y%m%d')}.json"

    with open(plan_path, "w") as f:
        json.dump(PlanReportBuilder(result).export_to_json(), f, indent=2, default=str)

    console.print(f"\n✓ Plan saved to: [cyan]{plan_path}[/cyan]")

    # ===== STEP 5: Schedule Variations =====
    print_header("Step 5: Schedule Variations")

    variations = {
        "Baseline": inputs.options,
        "Saturday HI": inputs.options.model_copy(update={"sat_high_intensity": True}),
        "Monday off": inputs.options.model_copy(update={"remove_mon": True}),
    }

    table = Table(title="What changes", box=box.ROUNDED)
    table.add_column("Variation", style="cyan")
    table.add_column("Long Run", justify="right")
    table.add_column("SubT / day", justify="right")
    table.add_column("Run km", justify="right")
    for name, options in variations.items():
        variant = build_plan(inputs.model_copy(update={"options": options}), methodology)
        sunday = variant.week_plan.get_day(Weekday.SUNDAY).sessions
        tuesday = variant.week_plan.get_day(Weekday.TUESDAY).sessions
        table.add_row(name, sunday[0].formatted, tuesday[1].formatted, f"{variant.totals.run_km:.1f}")
    console.print(table)

    # ===== COMPLETION =====
    console.print("\n")
    panel = Panel(
        "[green]✓[/green] Demonstration complete!\n\n"
        "The system successfully:\n"
        "  1. Estimated paces from a race result\n"
        "  2. Validated the planner inputs\n"
        "  3. Generated the weekly plan\n"
        "  4. Compared schedule variations\n\n"
        "Every scheduling decision is listed in the saved report.",
        title="[bold green]Success[/bold green]",
        border_style="green",
    )
    console.print(panel)

    console.print("\n[bold cyan]Next Steps:[/bold cyan]")
    console.print("  • Review the generated plan in plans/")
    console.print("  • Run CLI: singles-planner plan --weekly-km 70 --sat-hi")
    console.print("  • Start the API: uvicorn singles_planner.api.main:app --reload")
    console.print("  • Run tests: python3 -m pytest\n")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        console.print(f"\n[red]Error: {e}[/red]")
        console.print("\n[dim]Make sure you're in the project root directory[/dim]")
        console.print("[dim]and have installed dependencies: pip install -e .[/dim]")
        raise
