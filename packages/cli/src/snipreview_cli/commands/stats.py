"""stats command — summary metrics across the review history."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from snipreview_cli.commands import get_store
from snipreview_cli.commands.review import SEVERITY_STYLE, TYPE_STYLE
from snipreview_core.models import FINDING_TYPES, SEVERITIES
from snipreview_store.base import CorruptStoreError
from snipreview_store.metrics import aggregate, severity_breakdown, type_breakdown

console = Console()


def format_trend(trend: int) -> str:
    sign = "+" if trend > 0 else ""
    style = "green" if trend > 0 else "red" if trend < 0 else "white"
    return f"[{style}]{sign}{trend}%[/{style}]"


@click.command("stats")
@click.pass_context
def stats_cmd(ctx):
    """Show review metrics: totals, averages, most common issue and trend.

    The trend compares the average number of issues in the newer half of the
    history with the older half; a positive value means fewer issues lately.
    """
    store = get_store(ctx)
    try:
        records = store.load()
    except CorruptStoreError as e:
        raise click.ClickException(e.user_message)

    metrics = aggregate(records)

    # --- Summary ---
    console.print("\n[bold]Review metrics[/bold]")
    console.print(f"  Total reviews:      {metrics.total_reviews}")
    console.print(f"  Avg issues/review:  {metrics.average_issues_per_review:.1f}")
    console.print(f"  Most common issue:  {metrics.most_common_issue_type}")
    console.print(f"  Improvement trend:  {format_trend(metrics.improvement_trend)}")

    if not records:
        console.print("[yellow]No code reviews yet. Start by reviewing some code![/yellow]")
        return

    total_findings = sum(len(r.findings) for r in records)

    # --- Type breakdown ---
    type_counter = type_breakdown(records)
    type_table = Table(title="Issue Types", show_header=True)
    type_table.add_column("Type", style="bold")
    type_table.add_column("Count", justify="right")
    type_table.add_column("% of total", justify="right")
    for kind in FINDING_TYPES:
        count = type_counter.get(kind, 0)
        pct = f"{count / total_findings * 100:.1f}%" if total_findings else "0%"
        style = TYPE_STYLE.get(kind, "white")
        type_table.add_row(f"[{style}]{kind}[/{style}]", str(count), pct)
    console.print(type_table)

    # --- Severity breakdown ---
    sev_counter = severity_breakdown(records)
    sev_table = Table(title="Severity Breakdown", show_header=True)
    sev_table.add_column("Severity", style="bold")
    sev_table.add_column("Count", justify="right")
    sev_table.add_column("% of total", justify="right")
    for sev in reversed(SEVERITIES):
        count = sev_counter.get(sev, 0)
        pct = f"{count / total_findings * 100:.1f}%" if total_findings else "0%"
        style = SEVERITY_STYLE.get(sev, "white")
        sev_table.add_row(f"[{style}]{sev}[/{style}]", str(count), pct)
    console.print(sev_table)
