"""CLI command: artpreflight rules — list the rule catalogue."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from artpreflight.engine.rules import RULES
from artpreflight.engine.severity import severity_for

console = Console()


@click.command()
def rules() -> None:
    """List every preflight rule with its severity and remedy."""
    table = Table(title="Preflight rules")
    table.add_column("No.", justify="right")
    table.add_column("Severity", style="bold")
    table.add_column("Risk")
    table.add_column("Remedy")

    for rule in RULES:
        table.add_row(
            str(rule.id),
            severity_for(rule.id).value,
            rule.label,
            rule.fix,
        )

    console.print(table)
