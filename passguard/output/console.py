"""
Passguard Console Output
=========================

Rich-based console output formatters for Passguard results: the strength
meter and details for a single assessment, crack-time and policy tables,
generated passwords, and the bulk analysis summary and table.

Assessed passwords are always shown masked. Generated passwords are shown
in full, since printing them is the point of the ``generate`` command.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import PassguardConsole, tier_colour, tier_style
from passguard.analyzers.crack_time import format_time
from passguard.core.models import (
    BulkReport,
    BulkRow,
    BulkSummary,
    CrackTimeEstimate,
    GeneratedPassword,
    PasswordAssessment,
    PolicyResult,
)
from passguard.output.report import mask_password


_METER_WIDTH = 40

# Score band upper bounds -> meter segment colour
_METER_COLOURS: tuple[tuple[float, str], ...] = (
    (0.25, "red"),
    (0.50, "yellow"),
    (0.75, "green"),
    (1.00, "bright_green"),
)

_ATTACK_SCENARIOS: tuple[tuple[str, str], ...] = (
    ("online", "Online (throttled)"),
    ("offline", "Offline (fast hash)"),
    ("optimized", "Optimized rig"),
)


class PassguardConsoleOutput:
    """Console output formatters for Passguard results.

    Usage::

        console = PassguardConsole()
        output = PassguardConsoleOutput(console)
        output.display_assessment(assessment, estimate, policies)
        output.display_bulk(report)
    """

    def __init__(self, console: Optional[PassguardConsole] = None) -> None:
        self.console = console or PassguardConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Single assessment
    # ------------------------------------------------------------------ #

    def display_assessment(
        self,
        assessment: PasswordAssessment,
        crack_time: Optional[CrackTimeEstimate] = None,
        policies: Optional[Sequence[PolicyResult]] = None,
        *,
        rates: Optional[dict[str, float]] = None,
    ) -> None:
        """Display a strength assessment with meter, details and feedback.

        Args:
            assessment: Output of the scorer.
            crack_time: Optional crack-time estimate to tabulate.
            policies: Optional policy results to tabulate.
            rates: Guess rates keyed like :meth:`CrackTimeEstimate.as_seconds`,
                shown in the crack-time table.
        """
        self.console.section("Password Analysis")
        self._rich.print(Panel(
            self._strength_meter(assessment),
            title="Strength Meter",
            border_style=tier_colour(assessment.strength_tier),
        ))

        tbl = Table(border_style="bright_cyan", header_style="bold bright_magenta")
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")
        tbl.add_row("Password", mask_password(assessment.password))
        tbl.add_row("Length", str(assessment.length))
        tbl.add_row("Entropy", f"{assessment.adjusted_entropy_bits:.1f} bits")
        tbl.add_row("Character Pool", str(assessment.charset_size))
        tbl.add_row("Character Types", self._character_types(assessment))
        tbl.add_row(
            "Common Password",
            Text("Yes", style="bold red") if assessment.is_common else Text("No", style="green"),
        )
        self._rich.print(tbl)

        if crack_time is not None:
            self.display_crack_time(crack_time, rates=rates)

        if assessment.patterns:
            self._rich.print()
            self._rich.print("[bold]Patterns Detected:[/bold]")
            for pattern in assessment.patterns:
                impact_style = "green" if pattern.score_impact > 0 else "yellow"
                line = Text("  ")
                line.append("⚠ ", style="yellow")
                line.append(pattern.description)
                line.append(f" ({pattern.score_impact:+d})", style=impact_style)
                self._rich.print(line)

        if assessment.issues:
            self._rich.print()
            self._rich.print("[bold]Feedback:[/bold]")
            for issue in assessment.issues:
                self._rich.print(Text.assemble(("  • ", "bright_cyan"), issue))

        if policies:
            self.display_policies(policies)

    def _strength_meter(self, assessment: PasswordAssessment) -> Text:
        filled = max(0, min(_METER_WIDTH, int(assessment.score / 100 * _METER_WIDTH)))

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{assessment.score}/100  ")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i >= filled:
                meter.append("░", style="dim")
                continue
            position = i / _METER_WIDTH
            colour = next(c for bound, c in _METER_COLOURS if position < bound)
            meter.append("█", style=colour)
        meter.append("]", style="dim")
        meter.append("  ")
        meter.append(
            assessment.strength_tier.value.upper(),
            style=tier_style(assessment.strength_tier),
        )
        return meter

    @staticmethod
    def _character_types(assessment: PasswordAssessment) -> str:
        labels = (
            (assessment.has_upper, "upper"),
            (assessment.has_lower, "lower"),
            (assessment.has_digit, "digits"),
            (assessment.has_symbol, "symbols"),
        )
        present = [label for flag, label in labels if flag]
        return f"{len(present)}/4 ({', '.join(present) or 'none'})"

    def display_crack_time(
        self,
        estimate: CrackTimeEstimate,
        *,
        rates: Optional[dict[str, float]] = None,
    ) -> None:
        """Tabulate crack-time projections per attack scenario."""
        tbl = Table(
            title="Crack Time Estimates",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
        )
        tbl.add_column("Attack Scenario", style="bold")
        if rates:
            tbl.add_column("Speed", justify="right")
        tbl.add_column("Estimated Time", justify="right")

        seconds = estimate.as_seconds()
        for key, label in _ATTACK_SCENARIOS:
            row = [label]
            if rates:
                row.append(f"{rates[key]:.0e} g/s")
            row.append(format_time(seconds[key]))
            tbl.add_row(*row)

        self._rich.print(tbl)

    def display_policies(self, policies: Sequence[PolicyResult]) -> None:
        """Tabulate policy compliance, one row per requirement."""
        tbl = Table(
            title="Policy Compliance",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
        )
        tbl.add_column("Policy", style="bold")
        tbl.add_column("Requirement")
        tbl.add_column("Status", justify="center")

        for policy in policies:
            verdict = (
                Text("COMPLIANT", style="bold green") if policy.compliant
                else Text("NOT MET", style="bold red")
            )
            tbl.add_row(
                Text(policy.name, style="bold"),
                Text(policy.use_case, style="dim"),
                verdict,
            )
            for req in policy.requirements:
                tbl.add_row(
                    "",
                    req.description,
                    Text("✔", style="green") if req.passed else Text("✘", style="red"),
                )

        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def display_generated(self, results: Sequence[GeneratedPassword]) -> None:
        """Show generated passwords with their self-assessment."""
        self.console.section("Generated Passwords")

        tbl = Table(border_style="bright_cyan", header_style="bold bright_magenta")
        tbl.add_column("#", style="dim", justify="right")
        tbl.add_column("Password", style="bold bright_white")
        tbl.add_column("Score", justify="right")
        tbl.add_column("Strength")
        tbl.add_column("Offline Crack Time", justify="right")

        for idx, result in enumerate(results, start=1):
            assessment = result.assessment
            estimate = result.crack_time
            tbl.add_row(
                str(idx),
                Text(result.password or "(empty)"),
                str(assessment.score) if assessment else "-",
                (
                    Text(assessment.strength_tier.value, style=tier_style(assessment.strength_tier))
                    if assessment else "-"
                ),
                format_time(estimate.offline_seconds) if estimate else "-",
            )

        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Bulk analysis
    # ------------------------------------------------------------------ #

    def display_bulk(
        self,
        report: BulkReport,
        rows: Optional[Sequence[BulkRow]] = None,
    ) -> None:
        """Show the bulk summary panel and the per-password table.

        Args:
            report: Bulk analysis report.
            rows: Rows in display order; defaults to the report order.
        """
        self.console.section("Bulk Analysis")
        self._rich.print(Panel(
            self._bulk_summary(report.summary),
            title="Summary",
            border_style="cyan",
        ))

        tbl = Table(border_style="bright_cyan", header_style="bold bright_magenta")
        tbl.add_column("Password")
        tbl.add_column("Score", justify="right")
        tbl.add_column("Strength")
        tbl.add_column("Entropy", justify="right")
        tbl.add_column("Common", justify="center")
        tbl.add_column("Patterns", justify="right")

        for row in rows if rows is not None else report.rows:
            tbl.add_row(
                mask_password(row.password),
                str(row.score),
                Text(row.strength.value, style=tier_style(row.strength)),
                f"{row.entropy:.1f}",
                Text("Yes", style="red") if row.is_common else Text("No", style="green"),
                str(row.pattern_count),
            )

        self._rich.print(tbl)
        if report.truncated:
            self.console.warning(
                f"Input truncated to the first {report.summary.total} passwords"
            )

    @staticmethod
    def _bulk_summary(summary: BulkSummary) -> Text:
        pct = BulkSummary.percentage
        text = Text()
        text.append("Total Analysed: ", style="bold")
        text.append(f"{summary.total}\n")
        text.append("Strong (70+): ", style="bold")
        text.append(f"{summary.strong_count} ({pct(summary.strong_count, summary.total)}%)\n")
        text.append("Common: ", style="bold")
        text.append(f"{summary.common_count} ({pct(summary.common_count, summary.total)}%)\n")
        text.append("With Patterns: ", style="bold")
        text.append(
            f"{summary.with_patterns_count} "
            f"({pct(summary.with_patterns_count, summary.total)}%)\n"
        )
        text.append("Average Score: ", style="bold")
        text.append(f"{summary.average_score:.1f}")

        distribution = [
            f"{tier}: {count}"
            for tier, count in summary.tier_distribution.items()
            if count
        ]
        if distribution:
            text.append("\nTiers: ", style="bold")
            text.append(", ".join(distribution))
        return text
