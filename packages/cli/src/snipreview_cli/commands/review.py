"""review command — run an AI review on a code snippet."""

from __future__ import annotations

import logging
import uuid

import click
from rich.console import Console
from rich.table import Table

from snipreview_cli.commands import get_store
from snipreview_core.errors import ReviewError
from snipreview_core.reviewer import ReviewResult, run_review
from snipreview_store.base import CorruptStoreError
from snipreview_store.models import FindingRecord, ReviewRecord

console = Console()
logger = logging.getLogger(__name__)

SEVERITY_STYLE = {"high": "red", "medium": "yellow", "low": "green"}
TYPE_STYLE = {"bug": "red", "optimization": "cyan", "standard": "blue"}


def _result_to_record(result: ReviewResult) -> ReviewRecord:
    """Map a ReviewResult returned by run_review() to a ReviewRecord for the store.

    The CLI owns this mapping — snipreview_core has no store knowledge and
    snipreview_store has no core knowledge. The CLI bridges the two.
    """
    return ReviewRecord(
        id=uuid.uuid4().hex,
        code=result.code,
        language=result.language,
        created_at=result.reviewed_at,
        findings=[
            FindingRecord(
                type=f.type,
                severity=f.severity,
                message=f.message,
                suggestion=f.suggestion,
                line=f.line,
            )
            for f in result.findings
        ],
    )


def findings_table(findings, title: str = "Review Insights") -> Table:
    """Render findings (core Finding or stored FindingRecord) as a table."""
    table = Table(title=title, show_header=True, header_style="bold cyan", show_lines=True)
    table.add_column("Type", width=12)
    table.add_column("Severity", width=8)
    table.add_column("Line", justify="right", width=5)
    table.add_column("Issue")
    table.add_column("Suggestion")

    for f in findings:
        type_style = TYPE_STYLE.get(f.type, "white")
        sev_style = SEVERITY_STYLE.get(f.severity, "white")
        table.add_row(
            f"[{type_style}]{f.type}[/{type_style}]",
            f"[{sev_style}]{f.severity}[/{sev_style}]",
            str(f.line) if f.line else "",
            f.message,
            f.suggestion or "",
        )
    return table


@click.command("review")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--language", "-l", default=None, help="Language label sent with the snippet. Overrides config file.")
@click.option(
    "--model",
    type=click.Choice(["anthropic", "openai"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--no-save", is_flag=True, help="Show the review without adding it to the history.")
@click.pass_context
def review_cmd(ctx, source, language: str | None, model: str | None, no_save: bool):
    """Review a code snippet read from SOURCE (a file, or - for stdin).

    \b
    Required environment variables:
      ANTHROPIC_API_KEY    Required when using --model anthropic
      OPENAI_API_KEY       Required when using --model openai
    """
    from snipreview_core.config import api_key_env_var, load_config

    config = load_config(ctx.obj["config_path"], cli_overrides={"model": model, "language": language})
    try:
        api_key_env_var(config["model"])
    except ValueError as e:
        raise click.ClickException(f"{e} Check the model setting in {ctx.obj['config_path']}.")

    code = source.read()

    try:
        result = run_review(code=code, language=config["language"], config=config)
    except ReviewError as e:
        logger.info("Review failed: %s: %s", type(e).__name__, e)
        console.print(f"[red]Error:[/red] {e.user_message}")
        ctx.exit(1)

    console.print(findings_table(result.findings))
    console.print(f"[bold]{len(result.findings)} issue(s) found.[/bold]")

    if no_save:
        return

    try:
        get_store(ctx).add(_result_to_record(result))
    except CorruptStoreError as e:
        console.print(f"[red]Error:[/red] review not saved. {e.user_message}")
        ctx.exit(1)
