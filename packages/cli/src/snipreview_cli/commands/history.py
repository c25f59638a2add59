"""history command — display past reviews from the store."""

from __future__ import annotations

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from snipreview_cli.commands import get_store
from snipreview_cli.commands.review import findings_table
from snipreview_store.base import CorruptStoreError

console = Console()

_PREVIEW_CHARS = 100


def _preview(code: str) -> str:
    flat = " ".join(code.split())
    if len(flat) <= _PREVIEW_CHARS:
        return flat
    return flat[:_PREVIEW_CHARS] + "..."


@click.command("history")
@click.option("--limit", default=20, show_default=True, help="Maximum number of reviews to show.")
@click.option("--id", "review_id", default=None, help="Show one review in full (id or unique id prefix).")
@click.pass_context
def history_cmd(ctx, limit: int, review_id: str | None):
    """Show past reviews, newest first."""
    store = get_store(ctx)
    try:
        records = store.load()
    except CorruptStoreError as e:
        raise click.ClickException(e.user_message)

    if not records:
        console.print("[yellow]No code reviews yet. Start by reviewing some code![/yellow]")
        return

    if review_id is not None:
        matches = [r for r in records if r.id.startswith(review_id)]
        if not matches:
            raise click.ClickException(f"No review found with id {review_id!r}.")
        if len(matches) > 1:
            raise click.ClickException(f"Id prefix {review_id!r} matches {len(matches)} reviews; use more characters.")
        record = matches[0]
        console.print(f"\n[bold]Review {record.id}[/bold]  [dim]{record.created_at[:19].replace('T', ' ')}[/dim]")
        console.print(Syntax(record.code, record.language or "text", line_numbers=True))
        console.print(findings_table(record.findings, title=f"{len(record.findings)} issue(s) found"))
        return

    table = Table(title="Recent Reviews", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold", width=8)
    table.add_column("Reviewed At", width=19)
    table.add_column("Language", width=12)
    table.add_column("Issues", justify="right", width=6)
    table.add_column("Code")

    for r in records[:limit]:
        table.add_row(
            r.id[:8],
            r.created_at[:19].replace("T", " "),
            r.language,
            str(len(r.findings)),
            _preview(r.code),
        )

    console.print(table)
