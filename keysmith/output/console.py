"""
Keysmith Console Output
========================

Rich-based display formatters for Keysmith results: the generated
password list, the strength meter with its criteria checklist and
breakdown bars, extended-analysis recommendations and the generator
audit table.

Password text is always rendered through :class:`rich.text.Text` or
escaped, because generated symbols such as ``[`` would otherwise be
parsed as console markup.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import KeysmithConsole
from keysmith.core.models import (
    ExtendedReport,
    GenerationAudit,
    StrengthReport,
)
from keysmith.history import truncate_for_display


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

_LEVEL_COLOURS: dict[str, str] = {
    "very_weak": "bold white on red",
    "weak": "bold red",
    "fair": "bold yellow",
    "good": "bold bright_cyan",
    "strong": "bold green",
    "excellent": "bold bright_green",
}

_RECOMMENDATION_STYLES: dict[str, tuple[str, str]] = {
    "critical": ("✖", "bold red"),
    "warning": ("⚠", "yellow"),
    "info": ("ℹ", "bright_blue"),
}

_METER_WIDTH = 40
_BAR_WIDTH = 30


def mask_password(password: str) -> str:
    """Mask all but the first and last character of *password*.

    Passwords of two characters or fewer are masked completely.
    """
    if len(password) <= 2:
        return "*" * len(password)
    return password[0] + "*" * (len(password) - 2) + password[-1]


def _bar(fraction: float, width: int = _BAR_WIDTH) -> Text:
    filled = max(0, min(width, round(fraction * width)))
    bar = Text()
    bar.append("█" * filled, style="bright_cyan")
    bar.append("░" * (width - filled), style="dim")
    bar.append(f" {fraction:.0%}")
    return bar


class KeysmithConsoleOutput:
    """Console output formatters for Keysmith results.

    Usage::

        console = KeysmithConsole()
        output = KeysmithConsoleOutput(console)
        output.display_passwords(["a1B!..."])
        output.display_strength(report, password="a1B!...")
        output.display_extended(extended_report)
    """

    def __init__(
        self,
        console: Optional[KeysmithConsole] = None,
        *,
        mask_passwords: bool = True,
    ) -> None:
        """Initialise the formatter.

        Args:
            console: KeysmithConsole instance. Creates one if not provided.
            mask_passwords: Mask analysed passwords in strength output.
        """
        self.console = console or KeysmithConsole()
        self._rich = self.console.rich
        self._mask = mask_passwords

    # ------------------------------------------------------------------ #
    #  Generated Passwords
    # ------------------------------------------------------------------ #

    def display_passwords(
        self,
        passwords: Sequence[str],
        reports: Optional[Sequence[StrengthReport]] = None,
    ) -> None:
        """List generated passwords, optionally with their strength level.

        Passwords are shown in full; the display width limit applies to
        the history list only.
        """
        self.console.section("Generated Passwords")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("#", style="dim", width=4, justify="right")
        tbl.add_column("Password", style="bold")
        if reports is not None:
            tbl.add_column("Strength", justify="center")
            tbl.add_column("Score", justify="right")

        for idx, pw in enumerate(passwords, start=1):
            row: list[Text | str] = [str(idx), Text(pw)]
            if reports is not None:
                report = reports[idx - 1]
                row.extend([self._level_text(report), f"{report.score}/100"])
            tbl.add_row(*row)

        self._rich.print(tbl)

    def display_history(self, history: Sequence[str]) -> None:
        """Show recent passwords, newest first, truncated for display."""
        if not history:
            return
        self.console.section("Recent Passwords")
        for idx, pw in enumerate(history, start=1):
            line = Text(f"  {idx:>2}. ", style="dim")
            line.append(truncate_for_display(pw))
            self._rich.print(line)

    # ------------------------------------------------------------------ #
    #  Strength
    # ------------------------------------------------------------------ #

    def display_strength(self, report: StrengthReport, password: str = "") -> None:
        """Display the strength meter, criteria checklist and breakdown."""
        self.console.section("Password Strength")

        if report.is_empty:
            self.console.info("Enter a password to check its strength.")
            return

        filled = int((report.score or 0) / 100 * _METER_WIDTH)
        filled = max(0, min(_METER_WIDTH, filled))

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{report.score}/100  ")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i >= filled:
                meter.append("░", style="dim")
            elif i < _METER_WIDTH * 0.25:
                meter.append("█", style="red")
            elif i < _METER_WIDTH * 0.50:
                meter.append("█", style="yellow")
            elif i < _METER_WIDTH * 0.75:
                meter.append("█", style="green")
            else:
                meter.append("█", style="bright_green")
        meter.append("]  ", style="dim")
        meter.append_text(self._level_text(report))

        self._rich.print(Panel(meter, title="Strength Meter", border_style="cyan"))

        details = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        details.add_column("Property", style="bold")
        details.add_column("Value")
        if password:
            shown = mask_password(password) if self._mask else password
            details.add_row("Password", Text(shown))
        details.add_row("Length", str(report.length))
        details.add_row("Entropy", f"{report.entropy_bits:.2f} bits")
        details.add_row("Repeated Characters", "Yes" if report.has_repeated_char else "No")
        details.add_row("Sequential Run", "Yes" if report.has_sequential_run else "No")
        self._rich.print(details)

        self._rich.print()
        self._rich.print("[bold]Criteria:[/bold]")
        for label, met in report.criteria():
            mark = "[green]✔[/green]" if met else "[red]✘[/red]"
            self._rich.print(f"  {mark} {label}")

        if report.breakdown is not None:
            bars = Table.grid(padding=(0, 2))
            bars.add_column(style="bold")
            bars.add_column()
            bars.add_row("Length", _bar(report.breakdown.length))
            bars.add_row("Variety", _bar(report.breakdown.variety))
            bars.add_row("Entropy", _bar(report.breakdown.entropy))
            self._rich.print()
            self._rich.print(Panel(bars, title="Breakdown", border_style="cyan"))

        if report.suggestions:
            self._rich.print()
            self._rich.print("[bold]Suggestions:[/bold]")
            for suggestion in report.suggestions:
                self._rich.print(f"  [bright_cyan]•[/bright_cyan] {escape(suggestion)}")

    def display_extended(self, result: ExtendedReport, password: str = "") -> None:
        """Display the strength view followed by pattern checks."""
        self.display_strength(result.report, password)
        if result.report.is_empty:
            return

        tbl = Table(
            title="Pattern Checks",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Check", style="bold")
        tbl.add_column("Detected", justify="center")
        checks = [
            ("Common password", result.is_common),
            ("Breached format", result.is_leaked),
            ("Keyboard pattern", result.patterns.keyboard),
            ("Dictionary word", result.patterns.dictionary),
            ("Personal information", result.patterns.personal),
            ("Repeated pattern", result.patterns.repeated),
        ]
        for label, hit in checks:
            tbl.add_row(label, "[red]Yes[/red]" if hit else "[green]No[/green]")
        self._rich.print(tbl)

        if result.recommendations:
            self._rich.print()
            self._rich.print("[bold]Recommendations:[/bold]")
            for rec in result.recommendations:
                icon, style = _RECOMMENDATION_STYLES[rec.type.value]
                self._rich.print(f"  [{style}]{icon}[/{style}] {escape(rec.text)}")
            if result.critical_count:
                self.console.warning(
                    f"{result.critical_count} critical issue(s) found"
                )
        else:
            self.console.success("No weak patterns detected")

    # ------------------------------------------------------------------ #
    #  Generator Audit
    # ------------------------------------------------------------------ #

    def display_audit(self, audit: GenerationAudit, top: int = 10) -> None:
        """Display the distribution audit verdict and the largest deviations."""
        self.console.section("Generator Audit")

        verdict_style = "bold bright_green" if audit.consistent else "bold red"
        summary = Text()
        summary.append("Distribution: ", style="bold")
        summary.append("CONSISTENT" if audit.consistent else "INCONSISTENT", style=verdict_style)
        summary.append(f"\nSamples: {audit.samples:,}  Characters: {audit.total_characters:,}\n")
        summary.append(
            f"Chi-squared: {audit.chi_squared:.4f}  "
            f"df: {audit.degrees_of_freedom}  p-value: {audit.p_value:.6f}\n"
        )
        summary.append(f"Class coverage: {audit.class_coverage:.2%}")
        if audit.foreign_characters:
            summary.append(
                f"\nExcluded characters seen: {''.join(audit.foreign_characters)}",
                style="bold red",
            )
        self._rich.print(Panel(summary, title="Chi-Squared Test", border_style="cyan"))

        ranked = sorted(
            audit.frequencies,
            key=lambda f: abs(f.observed - f.expected),
            reverse=True,
        )[:top]
        if not ranked:
            return

        tbl = Table(
            title=f"Largest Deviations (top {len(ranked)})",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Char", justify="center")
        tbl.add_column("Observed", justify="right")
        tbl.add_column("Expected", justify="right")
        tbl.add_column("Deviation", justify="right")
        for freq in ranked:
            tbl.add_row(
                Text(freq.char),
                str(freq.observed),
                f"{freq.expected:.1f}",
                f"{freq.observed - freq.expected:+.1f}",
            )
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _level_text(report: StrengthReport) -> Text:
        if report.level is None:
            return Text("-", style="dim")
        colour = _LEVEL_COLOURS.get(report.level.value, "white")
        return Text(report.level.label.upper(), style=colour)
