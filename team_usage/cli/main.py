"""
CLI interface for Team Usage.

Replays recorded usage events into a ledger and renders the usage report.
"""

import logging
import sys
from decimal import Decimal
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from team_usage.config.loader import ReportConfig, ReportLayout, load_report_config
from team_usage.core.aggregation import render_totals
from team_usage.core.breakdown import BreakdownRow, session_breakdown_rows
from team_usage.core.ledger import UsageLedger
from team_usage.demo.sample_team import build_demo_ledger
from team_usage.storage.event_log import load_events

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

SEPARATOR = "-" * 32
ACTIVE_STYLE = "bold green"


def _setup_logging() -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(asctime)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    logger = logging.getLogger("team_usage")
    if not logger.handlers:
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log ledger activity to stderr"
    )
):
    """Team Usage CLI."""
    if verbose:
        _setup_logging()
    if ctx.invoked_subcommand is None:
        console.print("Team Usage - Use --help to see available commands")


@app.command()
def report(
    events_file: str = typer.Argument(..., help="JSON or JSON Lines file of usage events"),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML report configuration"
    ),
    compact: bool = typer.Option(
        False,
        "--compact",
        help="Render a single summary line"
    )
):
    """Replay recorded usage events and print the team usage report."""
    try:
        config = load_report_config(config_path)
        events = load_events(events_file)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_CODE_FAIL)

    ledger = UsageLedger()
    for event in events:
        ledger.record_event(event)

    _display_report(ledger, config, compact)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def demo(
    compact: bool = typer.Option(
        False,
        "--compact",
        help="Render a single summary line"
    )
):
    """Print the report for a canned three-agent team."""
    _display_report(build_demo_ledger(), ReportConfig(), compact)
    sys.exit(EXIT_CODE_PASS)


def _format_tokens(count: int) -> str:
    """Format a token count with grouping separators."""
    return f"{count:,}"


def _format_currency(amount: Decimal) -> str:
    """Format currency with a fixed dollar prefix and two decimals."""
    return f"${amount:,.2f}"


def _usage_line(total_tokens: int, cost: Decimal) -> str:
    return f"Tokens: {_format_tokens(total_tokens)} | Cost: {_format_currency(cost)}"


def _display_report(ledger: UsageLedger, config: ReportConfig, compact: bool) -> None:
    snapshot = ledger.snapshot()
    label, totals = render_totals(snapshot, team_label=config.labels.team_total)
    rows = session_breakdown_rows(snapshot, root_label=config.labels.root)

    if compact or config.layout == ReportLayout.HORIZONTAL:
        console.print(f"{escape(label)} | {_usage_line(totals.total_tokens, totals.cost)}")
        return

    console.print(f"[bold]TOTAL USAGE[/bold] ({escape(label)})")
    console.print(f"  {_usage_line(totals.total_tokens, totals.cost)}")
    console.print(SEPARATOR)
    console.print("[bold]SESSION BREAKDOWN[/bold]")

    if not rows:
        console.print(f"  {escape(config.labels.empty)}")
        return

    console.print("\n\n".join(_format_row(row, config.highlight_active) for row in rows))


def _format_row(row: BreakdownRow, highlight_active: bool) -> str:
    block = f"  {escape(row.label)}\n     {_usage_line(row.usage.total_tokens, row.usage.cost)}"
    if row.is_active and highlight_active:
        return f"[{ACTIVE_STYLE}]{block}[/{ACTIVE_STYLE}]"
    return block


if __name__ == "__main__":
    app()
