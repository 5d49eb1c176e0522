"""CLI command: artpreflight check [DOCUMENT] — run a preflight pass."""

from __future__ import annotations

import signal
import sys
import threading
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from artpreflight.config import PreflightConfig, load_config
from artpreflight.engine.severity import Severity
from artpreflight.errors import ConfigurationError, NoDocumentError, SceneFormatError
from artpreflight.progress import NullProgress, RichProgress
from artpreflight.runner import PreflightRunner, RunOutcome
from artpreflight.scene.loader import load_document

console = Console(stderr=True)

_SEVERITY_COLORS = {
    Severity.MAJOR: "red",
    Severity.MEDIUM: "yellow",
    Severity.MINOR: "blue",
}


@click.command()
@click.argument("document", type=click.Path(exists=True), required=False)
@click.option(
    "--no-progress",
    is_flag=True,
    help="Do not show the progress bar.",
)
@click.option(
    "--lines",
    "print_lines",
    is_flag=True,
    help="Print the tab-separated finding lines, grouped by rule, to stdout.",
)
@click.pass_context
def check(
    ctx: click.Context,
    document: str | None,
    no_progress: bool,
    print_lines: bool,
) -> None:
    """Check a DOCUMENT for pre-press risks (defaults to the active document)."""
    config_path = ctx.obj.get("config_path")
    config = load_config(config_path) if config_path else PreflightConfig.load()

    doc_path = Path(document) if document else config.document
    try:
        if doc_path is None:
            raise NoDocumentError()
        scene = load_document(doc_path)
    except (NoDocumentError, SceneFormatError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    console.print(
        f"[bold]artpreflight[/bold] checking [cyan]{escape(scene.name)}[/cyan]\n"
    )

    cancel = threading.Event()

    def _signal_handler(signum: int, frame: object) -> None:
        console.print("\n[dim]Cancelling...[/dim]")
        cancel.set()

    previous = signal.signal(signal.SIGINT, _signal_handler)
    progress = NullProgress() if no_progress else RichProgress(console)
    runner = PreflightRunner(config, progress=progress, cancel=cancel)
    try:
        outcome = runner.run(scene)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(2)
    finally:
        signal.signal(signal.SIGINT, previous)

    if outcome.context.cancelled:
        console.print("[yellow]Run cancelled; results are partial.[/yellow]")

    if not outcome.has_findings:
        console.print("[green]No issues found.[/green]")
        return

    _print_findings(outcome)
    if print_lines:
        for line in outcome.context.buffered_lines():
            click.echo(line)
    console.print(f"\n[bold]Preflight complete:[/bold] {outcome.total} finding(s)")
    if outcome.report_path:
        console.print(f"Report: {outcome.report_path}")
    if outcome.log_path:
        console.print(f"Log: {outcome.log_path}")
    if outcome.overlay_path:
        console.print(f"Overlay: {outcome.overlay_path}")

    if outcome.context.major:
        console.print(f"\n[red]{len(outcome.context.major)} major finding(s)[/red]")
        sys.exit(1)


def _print_findings(outcome: RunOutcome) -> None:
    table = Table(title="Findings", show_lines=False)
    table.add_column("Severity", style="bold", width=8)
    table.add_column("Rule", justify="right")
    table.add_column("Description")
    table.add_column("Layer", style="cyan")
    table.add_column("Object")

    for finding in outcome.context.all_findings():
        color = _SEVERITY_COLORS[finding.severity]
        table.add_row(
            f"[{color}]{finding.severity.value}[/{color}]",
            str(finding.rule_id),
            escape(finding.description),
            escape(finding.layer_path),
            escape(finding.object_name),
        )

    console.print(table)
    ctx = outcome.context
    console.print(
        f"\nMajor: {len(ctx.major)}  Medium: {len(ctx.medium)}  "
        f"Minor: {len(ctx.minor)}  Total: {ctx.total}"
    )
