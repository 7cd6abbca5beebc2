"""
KeyForge Console Output
========================

Rich-based console formatters for generated secrets, the strength meter,
digest rows and self-test results.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import ForgeConsole
from keyforge.core.models import (
    DigestResult,
    GeneratedSecret,
    SelfTestSuiteResult,
    StrengthScore,
)

_LABEL_COLOURS: dict[str, str] = {
    "Weak": "bold red",
    "Balanced": "bold yellow",
    "Strong": "bold green",
    "Elite": "bold bright_green",
}

_METER_WIDTH = 40


class KeyForgeConsoleOutput:
    """Console output formatters for KeyForge results.

    Usage::

        output = KeyForgeConsoleOutput(ForgeConsole())
        output.display_secret(generated)
        output.display_digests(result)
    """

    def __init__(self, console: Optional[ForgeConsole] = None) -> None:
        self.console = console or ForgeConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Secrets
    # ------------------------------------------------------------------ #

    def display_secret(self, generated: GeneratedSecret) -> None:
        """Show one secret in a panel followed by its strength meter."""
        self.console.section("Generated Secret")
        self._rich.print(
            Panel(
                Text(generated.secret, style="forge.secret"),
                title=f"{generated.length} characters",
                border_style="cyan",
            )
        )
        self.display_strength(generated.strength, variety=generated.variety)

    def display_bulk(self, generated: Sequence[GeneratedSecret]) -> None:
        """Show a numbered table of secrets."""
        self.console.section(f"{len(generated)} Generated Secrets")
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
        )
        tbl.add_column("#", style="dim", justify="right")
        tbl.add_column("Secret", style="forge.secret", overflow="fold")
        tbl.add_column("Strength")
        for index, item in enumerate(generated, start=1):
            colour = _LABEL_COLOURS.get(item.strength.label.value, "white")
            tbl.add_row(
                str(index),
                Text(item.secret),
                f"[{colour}]{item.strength.label.value}[/{colour}] ({item.strength.score})",
            )
        self._rich.print(tbl)

    def display_strength(
        self, strength: StrengthScore, *, variety: Optional[int] = None
    ) -> None:
        """Render the 0-100 strength meter."""
        colour = _LABEL_COLOURS.get(strength.label.value, "white")
        filled = max(0, min(_METER_WIDTH, int(strength.score / 100 * _METER_WIDTH)))

        meter = Text()
        meter.append("Score: ", style="bold")
        meter.append(f"{strength.score}/100  ")
        meter.append("[", style="dim")
        for i in range(_METER_WIDTH):
            if i >= filled:
                meter.append("░", style="dim")
            elif i < _METER_WIDTH * 0.45:
                meter.append("█", style="red")
            elif i < _METER_WIDTH * 0.65:
                meter.append("█", style="yellow")
            elif i < _METER_WIDTH * 0.80:
                meter.append("█", style="green")
            else:
                meter.append("█", style="bright_green")
        meter.append("]  ", style="dim")
        meter.append(strength.label.value, style=colour)
        if variety is not None:
            meter.append(f"\nCharacter classes: {variety}/4", style="dim")

        self._rich.print(Panel(meter, title="Strength", border_style="cyan"))

    # ------------------------------------------------------------------ #
    #  Digests
    # ------------------------------------------------------------------ #

    def display_digests(self, result: DigestResult) -> None:
        """Show one row per algorithm, in request order."""
        self.console.section("Digests")
        if not result.rows:
            self.console.info("Enter text to generate hashes.")
            return

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            caption="salted (text + salt)" if result.salted else None,
        )
        tbl.add_column("Algorithm", style="bold")
        tbl.add_column("Digest", style="forge.digest", overflow="fold")
        for label, value in result.pairs():
            tbl.add_row(label, value)
        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Self-test
    # ------------------------------------------------------------------ #

    def display_selftest(self, suite: SelfTestSuiteResult) -> None:
        self.console.section("Self-Test")
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Check", style="bold")
        tbl.add_column("Result", justify="center")
        tbl.add_column("p-value", justify="right")
        tbl.add_column("Detail")

        for test in suite.tests:
            status = "[green]PASS[/green]" if test.passed else "[bold red]FAIL[/bold red]"
            p_value = f"{test.p_value:.4f}" if test.p_value is not None else "-"
            tbl.add_row(test.check_name, status, p_value, Text(test.detail))
        self._rich.print(tbl)

        if suite.overall_pass:
            self.console.success(suite.assessment)
        else:
            self.console.error(suite.assessment)
