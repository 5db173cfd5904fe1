"""
Plan report generation and export.

This module renders a PlanResult as JSON or Markdown for human review:
inputs, paces, the weekly table, totals, load distribution and every
scheduling decision that shaped the week.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from singles_planner.paces import format_pace
from singles_planner.plan_schemas import PlanResult


class PlanReportBuilder:
    """
    Builds and exports reports for a computed plan.

    The report is the complete picture of one pipeline run:
    - What inputs and paces were used
    - What each day contains
    - How the load adds up
    - Which decisions were taken and why
    """

    def __init__(self, result: PlanResult, generated_at: Optional[datetime] = None):
        """
        Initialize report builder.

        Args:
            result: Pipeline output to report on
            generated_at: Report timestamp (defaults to now)
        """
        self.result = result
        self.generated_at = generated_at or datetime.now()

    def export_to_json(self) -> Dict[str, Any]:
        """
        Export the report as a JSON-compatible dictionary.

        Returns:
            Dictionary with the full plan result and formatted paces
        """
        data = self.result.model_dump(mode="json")
        data["generated_at"] = self.generated_at.isoformat()
        data["paces_display"] = {
            zone: format_pace(pace) for zone, pace in self.result.paces.model_dump().items()
        }
        data["totals"]["run_km"] = self.result.totals.run_km
        data["totals"]["bike_hours"] = self.result.totals.bike_hours
        return data

    def export_to_markdown(self) -> str:
        """
        Export the report as human-readable Markdown.

        Returns:
            Markdown-formatted report
        """
        result = self.result
        inputs = result.inputs
        options = inputs.options
        totals = result.totals
        lines = []

        lines.append("# Norwegian Singles Weekly Plan")
        lines.append("")
        lines.append(f"**Generated:** {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"**Weekly Run Goal:** {inputs.weekly_distance_km:g} km")
        lines.append(
            f"**Saturday:** {'High Intensity' if options.sat_high_intensity else 'SubT'}"
        )
        if options.cycling_enabled:
            lines.append(f"**Cycling:** {options.cycling_hours_per_week:g} h/week")
        lines.append("")
        lines.append("---")
        lines.append("")

        # Paces
        lines.append("## Paces")
        lines.append("")
        if result.fitness_estimate is not None:
            race = inputs.race
            lines.append(
                f"Estimated from {race.distance_km:g} km in {race.time_text} "
                f"(fitness score **{result.fitness_estimate.score}**)."
            )
            lines.append("")
        lines.append(f"- **Easy:** {format_pace(result.paces.easy)}")
        lines.append(f"- **SubT:** {format_pace(result.paces.sub_threshold)}")
        lines.append(f"- **HI:** {format_pace(result.paces.high_intensity)}")
        lines.append("")
        lines.append(
            f"**Intensity Distribution (by time):** {result.percentages.easy:g}% easy / "
            f"{result.percentages.sub_threshold:g}% SubT / "
            f"{result.percentages.high_intensity:g}% HI"
        )
        lines.append("")
        lines.append("---")
        lines.append("")

        # Weekly plan
        lines.append("## Weekly Plan")
        lines.append("")
        lines.append("| Day | Sessions |")
        lines.append("|-----|----------|")
        for day_plan in result.week_plan.days:
            if day_plan.is_rest_day:
                cell = "Rest"
            else:
                cell = "<br>".join(f"{s.label} {s.formatted}" for s in day_plan.sessions)
            lines.append(f"| {day_plan.day.value} | {cell} |")
        lines.append("")
        lines.append("---")
        lines.append("")

        # Summary
        lines.append("## Summary")
        lines.append("")
        lines.append(f"**Total Time:** {totals.total_time_hours:.1f} h")
        lines.append(f"**Total Run:** {totals.run_km:.1f} km")
        lines.append(f"- Easy: {totals.run_easy_km:.1f} km (~{totals.run_easy_hours:.1f} h)")
        lines.append(
            f"- SubT: {totals.run_sub_threshold_km:.1f} km (~{totals.run_sub_threshold_hours:.1f} h)"
        )
        if totals.run_high_intensity_km > 0:
            lines.append(
                f"- High Intensity: {totals.run_high_intensity_km:.1f} km "
                f"(~{totals.run_high_intensity_hours:.1f} h)"
            )
        if options.cycling_enabled:
            lines.append("")
            lines.append(f"**Total Bike:** {totals.bike_hours:.1f} h")
            lines.append(f"- Endurance: {totals.bike_endurance_hours:.1f} h")
            lines.append(f"- SubT: {totals.bike_sub_threshold_hours:.1f} h")
        lines.append("")

        lines.append("### Training Load Distribution")
        lines.append("")
        lines.append("| Load | Hours |")
        lines.append("|------|-------|")
        for point in result.chart_series:
            lines.append(f"| {point.label} | {point.hours:.1f} |")
        lines.append("")
        lines.append("---")
        lines.append("")

        # Plan decisions
        if result.plan_decisions:
            lines.append("## Scheduling Decisions")
            lines.append("")
            for i, decision in enumerate(result.plan_decisions, 1):
                lines.append(f"### Decision {i}: {decision.decision_point}")
                lines.append("")
                lines.append(f"**Input Factors:** {', '.join(decision.input_factors)}")
                lines.append("")
                lines.append(f"**Reasoning:** {decision.reasoning}")
                lines.append("")
                lines.append(f"**Outcome:** {decision.outcome}")
                lines.append("")
            lines.append("---")
            lines.append("")

        # Findings
        if result.warnings or result.errors:
            lines.append("## Notes")
            lines.append("")
            for error in result.errors:
                lines.append(f"- ⛔ `{error.code}`: {error.message}")
            for warning in result.warnings:
                lines.append(f"- ⚠️ {warning}")
            lines.append("")

        return "\n".join(lines)
